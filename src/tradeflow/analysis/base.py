from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import pandas as pd

from tradeflow.domain.models import PriceSeries
from tradeflow.errors import IndexOutOfRangeError, InvalidArgumentError
from tradeflow.execution.models import Trade, TradingRecord
from tradeflow.num import Num, NumContext, is_nan

logger = logging.getLogger(__name__)


class TradeAccrual(ABC):
    """Per-bar series derived from trades applied to a price series.

    Subclasses fill one value per bar for the span of each trade. Trades are
    walked once in record order; bars between trades and after the last one
    are filled with ``_gap_value`` / ``_tail_value``. The buffer is built
    privately and only stored once construction succeeds.
    """

    def __init__(self, series: PriceSeries) -> None:
        self.series = series
        self._values: tuple[Num, ...] = ()

    @property
    def num(self) -> NumContext:
        return self.series.num

    @property
    def values(self) -> tuple[Num, ...]:
        return self._values

    def value_at(self, index: int) -> Num:
        if index < 0 or index >= len(self._values):
            raise IndexOutOfRangeError(
                f"index {index} outside [0, {len(self._values) - 1}]"
            )
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> Num:
        return self.value_at(index)

    def to_series(self) -> pd.Series:
        data = [float("nan") if is_nan(value) else float(value) for value in self._values]
        return pd.Series(data, index=self.series.timestamps(), dtype="float64")

    @abstractmethod
    def size(self) -> int: ...

    @abstractmethod
    def _origin_value(self) -> Num:
        """Value at bar 0."""

    @abstractmethod
    def _gap_value(self, values: list[Num]) -> Num:
        """Value for idle bars before a trade's entry."""

    @abstractmethod
    def _accrue(self, values: list[Num], trade: Trade, entry_index: int, end_index: int) -> None:
        """Append values for bars ``entry_index + 1`` through ``end_index``."""

    def _tail_value(self, values: list[Num]) -> Num:
        return self._gap_value(values)

    def _build(self, trades: list[tuple[Trade, int]]) -> None:
        values = [self._origin_value()]
        for trade, final_index in trades:
            self._accrue_trade(values, trade, final_index)
        self._pad(values, self.series.bar_count, self._tail_value(values))
        self._values = tuple(values)

    def _trades_of(self, record: TradingRecord, final_index: int | None) -> list[tuple[Trade, int]]:
        end = self.series.end_index
        trades = [(trade, end) for trade in record.trades]
        current = record.current_trade
        if current is not None and current.is_open:
            trades.append((current, end if final_index is None else final_index))
        return trades

    def _accrue_trade(self, values: list[Num], trade: Trade, final_index: int) -> None:
        if trade.entry.num.name != self.num.name:
            raise InvalidArgumentError(
                f"trade uses the {trade.entry.num.name} backend but the series uses {self.num.name}"
            )
        entry_index = trade.entry.index
        if len(values) > entry_index + 1:
            raise InvalidArgumentError(
                f"trade entered at index {entry_index} overlaps bars already filled up to {len(values) - 1}"
            )
        end_index = self.determine_end_index(trade, final_index)
        if end_index - entry_index < 1:
            raise InvalidArgumentError(
                f"trade entered at index {entry_index} has no bars to accrue up to index {end_index}"
            )
        self._pad(values, entry_index + 1, self._gap_value(values))
        logger.debug(
            "Accruing %s %s trade over bars %d..%d",
            "open" if trade.is_open else "closed",
            "long" if trade.is_long else "short",
            entry_index,
            end_index,
        )
        self._accrue(values, trade, entry_index, end_index)

    def determine_end_index(self, trade: Trade, final_index: int) -> int:
        end_index = final_index
        if trade.exit is not None:
            end_index = min(trade.exit.index, final_index)
        return min(end_index, self.series.end_index)

    def amortized_cost(self, total_cost: Num, n_periods: int) -> Num:
        if n_periods < 1:
            raise InvalidArgumentError("cost can only be amortized over at least one period")
        return self.num.divide(total_cost, self.num.value_of(n_periods))

    @staticmethod
    def _pad(values: list[Num], length: int, fill: Num) -> None:
        if len(values) < length:
            values.extend([fill] * (length - len(values)))
