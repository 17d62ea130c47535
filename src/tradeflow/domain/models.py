from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from tradeflow.errors import IndexOutOfRangeError, InvalidArgumentError
from tradeflow.num import DecimalContext, Num, NumContext, NumLiteral


@dataclass(slots=True, frozen=True)
class Bar:
    index: int
    close: Num
    timestamp: datetime | None = None


class PriceSeries:
    """Immutable, zero-indexed sequence of bars sharing one numeric context."""

    def __init__(self, bars: Sequence[Bar], num: NumContext | None = None) -> None:
        if not bars:
            raise InvalidArgumentError("a price series needs at least one bar")
        for position, bar in enumerate(bars):
            if bar.index != position:
                raise InvalidArgumentError(
                    f"bar indices must be contiguous from 0, got {bar.index} at position {position}"
                )
        self._bars = tuple(bars)
        self._num = num or DecimalContext()

    @classmethod
    def from_closes(
        cls,
        closes: Iterable[NumLiteral],
        num: NumContext | None = None,
        timestamps: Iterable[datetime] | None = None,
    ) -> PriceSeries:
        context = num or DecimalContext()
        values = [context.value_of(close) for close in closes]
        stamps: list[datetime | None] = (
            list(timestamps) if timestamps is not None else [None] * len(values)
        )
        if len(stamps) != len(values):
            raise InvalidArgumentError("timestamps and closes must have the same length")
        bars = [
            Bar(index=i, close=value, timestamp=stamp)
            for i, (value, stamp) in enumerate(zip(values, stamps))
        ]
        return cls(bars, num=context)

    @classmethod
    def from_frame(
        cls,
        frame: pd.DataFrame,
        num: NumContext | None = None,
        column: str = "close",
    ) -> PriceSeries:
        if column not in frame.columns:
            raise InvalidArgumentError(f"frame has no {column!r} column")
        closes = [float(value) for value in frame[column].tolist()]
        timestamps = None
        if isinstance(frame.index, pd.DatetimeIndex):
            timestamps = [stamp.to_pydatetime() for stamp in frame.index]
        return cls.from_closes(closes, num=num, timestamps=timestamps)

    @property
    def num(self) -> NumContext:
        return self._num

    @property
    def bar_count(self) -> int:
        return len(self._bars)

    @property
    def begin_index(self) -> int:
        return 0

    @property
    def end_index(self) -> int:
        return len(self._bars) - 1

    def num_of(self, literal: NumLiteral) -> Num:
        return self._num.value_of(literal)

    def bar(self, index: int) -> Bar:
        if index < 0 or index > self.end_index:
            raise IndexOutOfRangeError(
                f"bar index {index} outside [0, {self.end_index}]"
            )
        return self._bars[index]

    def close_price_at(self, index: int) -> Num:
        return self.bar(index).close

    def timestamps(self) -> pd.Index:
        if all(bar.timestamp is not None for bar in self._bars):
            return pd.DatetimeIndex([bar.timestamp for bar in self._bars])
        return pd.RangeIndex(self.bar_count)

    def __len__(self) -> int:
        return self.bar_count

    def __repr__(self) -> str:
        return f"PriceSeries(bars={self.bar_count}, num={self._num!r})"
