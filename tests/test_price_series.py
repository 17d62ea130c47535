from datetime import datetime
from decimal import Decimal

import pandas as pd
import pytest

from tradeflow.domain.models import Bar, PriceSeries
from tradeflow.errors import IndexOutOfRangeError, InvalidArgumentError
from tradeflow.num import DecimalContext, DoubleContext


def test_from_closes_builds_contiguous_bars() -> None:
    series = PriceSeries.from_closes([100, "101.5", 102.25])

    assert series.bar_count == 3
    assert series.begin_index == 0
    assert series.end_index == 2
    assert series.close_price_at(1) == Decimal("101.5")
    assert series.bar(2) == Bar(index=2, close=Decimal("102.25"))
    assert isinstance(series.num, DecimalContext)
    assert series.num_of(3) == Decimal(3)


def test_bar_indices_must_be_contiguous() -> None:
    with pytest.raises(InvalidArgumentError, match="contiguous"):
        PriceSeries([Bar(index=0, close=Decimal(1)), Bar(index=2, close=Decimal(1))])
    with pytest.raises(InvalidArgumentError, match="at least one bar"):
        PriceSeries([])


def test_close_price_out_of_range() -> None:
    series = PriceSeries.from_closes([100, 101])

    with pytest.raises(IndexOutOfRangeError):
        series.close_price_at(2)
    with pytest.raises(IndexOutOfRangeError):
        series.close_price_at(-1)


def test_from_frame_reads_close_column_and_timestamps() -> None:
    index = pd.date_range("2026-01-01", periods=3, freq="D")
    frame = pd.DataFrame({"close": [1.1, 1.2, 1.3], "volume": [10, 20, 30]}, index=index)

    series = PriceSeries.from_frame(frame, num=DoubleContext())

    assert series.bar(0).timestamp == datetime(2026, 1, 1)
    assert float(series.close_price_at(2)) == pytest.approx(1.3)
    assert list(series.timestamps()) == list(index)


def test_from_frame_without_timestamps_uses_range_index() -> None:
    series = PriceSeries.from_frame(pd.DataFrame({"close": [1.0, 2.0]}))

    assert series.bar(1).timestamp is None
    assert list(series.timestamps()) == [0, 1]


def test_from_frame_requires_close_column() -> None:
    with pytest.raises(InvalidArgumentError, match="no 'close' column"):
        PriceSeries.from_frame(pd.DataFrame({"open": [1.0]}))


def test_timestamps_length_must_match_closes() -> None:
    with pytest.raises(InvalidArgumentError, match="same length"):
        PriceSeries.from_closes([1, 2], timestamps=[datetime(2026, 1, 1)])
