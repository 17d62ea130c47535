from decimal import Decimal

import pytest

from tradeflow.analysis.return_type import ReturnType
from tradeflow.analysis.returns import Returns
from tradeflow.cost.models import LinearBorrowingCostModel, LinearTransactionCostModel
from tradeflow.domain.models import PriceSeries
from tradeflow.errors import IndexOutOfRangeError, InvalidArgumentError
from tradeflow.execution.models import Order, Side, Trade, TradingRecord
from tradeflow.num import DoubleContext, NaN, is_nan


def _record(series: PriceSeries, *operations: tuple[int, float], side: Side = Side.BUY) -> TradingRecord:
    record = TradingRecord(starting_side=side, num=series.num)
    for index, price in operations:
        record.operate(index, price)
    return record


def test_arithmetic_returns_of_long_trade() -> None:
    series = PriceSeries.from_closes([100, 110, 121, 100])
    record = _record(series, (0, 100), (2, 121))

    returns = Returns(series, record, ReturnType.ARITHMETIC)

    assert returns.value_at(0) is NaN
    assert list(returns.values[1:]) == [Decimal("0.1"), Decimal("0.1"), Decimal("0")]


def test_size_is_one_less_than_bar_count() -> None:
    series = PriceSeries.from_closes([100, 110, 121, 100])
    returns = Returns(series, _record(series, (0, 100), (2, 121)))

    assert returns.size() == 3
    assert len(returns) == 4
    assert is_nan(returns[0])


def test_single_step_round_trip() -> None:
    series = PriceSeries.from_closes([100, 120])
    record = _record(series, (0, 100), (1, 120))

    arithmetic = Returns(series, record, ReturnType.ARITHMETIC)
    log = Returns(series, record, ReturnType.LOG)

    assert arithmetic.value_at(1) == Decimal("0.2")
    assert log.value_at(1) == series.num.ln(Decimal("1.2"))


def test_log_returns_add_up_to_total_log_return() -> None:
    series = PriceSeries.from_closes([100, 105, 98, 120])
    record = _record(series, (0, 100), (3, 120))

    returns = Returns(series, record, ReturnType.LOG)

    total = sum(returns.values[1:], Decimal(0))
    assert abs(total - series.num.ln(Decimal("1.2"))) < Decimal("1e-20")


def test_gap_between_trades_is_zero_filled() -> None:
    series = PriceSeries.from_closes([100, 105, 110, 110, 110, 100, 95, 100])
    record = _record(series, (0, 100), (2, 110), (5, 100), (7, 100))

    returns = Returns(series, record)

    assert [returns.value_at(i) for i in (3, 4, 5)] == [0, 0, 0]
    assert returns.value_at(6) == Decimal("-0.05")


def test_short_log_returns_are_negated() -> None:
    series = PriceSeries.from_closes([100, 110, 121])
    record = _record(series, (0, 100), (2, 121), side=Side.SELL)

    returns = Returns(series, record, ReturnType.LOG)

    expected = series.num.negate(series.num.ln(Decimal("1.1")))
    assert returns.value_at(1) == expected
    assert returns.value_at(2) == expected


def test_short_arithmetic_returns_track_return_factor() -> None:
    series = PriceSeries.from_closes([100, 110, 121])
    num = series.num
    record = _record(series, (0, 100), (2, 121), side=Side.SELL)

    returns = Returns(series, record, ReturnType.ARITHMETIC)

    assert returns.value_at(1) == Decimal("-0.1")
    assert returns.value_at(2) == num.subtract(num.divide(Decimal("0.79"), Decimal("0.9")), num.one)
    # compounded short equity is 1 - 21% asset gain
    equity = (1 + returns.value_at(1)) * (1 + returns.value_at(2))
    assert abs(equity - Decimal("0.79")) < Decimal("1e-20")


def test_short_borrowing_cost_is_spread_over_bars() -> None:
    series = PriceSeries.from_closes([100, 100, 100])
    record = TradingRecord(
        starting_side=Side.SELL,
        holding_cost_model=LinearBorrowingCostModel(fee_per_period=0.01),
        num=series.num,
    )
    record.enter(0, 100, amount=1)
    record.exit(2, 100)

    returns = Returns(series, record, ReturnType.ARITHMETIC)

    assert returns.value_at(1) == Decimal("-0.01")
    assert returns.value_at(2) < 0


def test_transaction_cost_enters_through_net_prices() -> None:
    series = PriceSeries.from_closes([100, 110, 120])
    num = series.num
    record = TradingRecord(
        transaction_cost_model=LinearTransactionCostModel(fee_per_trade=0.01),
        num=num,
    )
    record.enter(0, 100, amount=1)
    record.exit(2, 120, amount=1)

    returns = Returns(series, record, ReturnType.ARITHMETIC)

    assert returns.value_at(1) == num.subtract(num.divide(Decimal("110"), Decimal("101")), num.one)
    assert returns.value_at(2) == num.subtract(num.divide(Decimal("118.8"), Decimal("110")), num.one)


def test_single_open_trade_accrues_to_final_index() -> None:
    series = PriceSeries.from_closes([100, 110, 121, 133.1])
    trade = Trade(entry=Order.create(0, Side.BUY, series.num_of(100), num=series.num))

    returns = Returns(series, trade, ReturnType.ARITHMETIC, final_index=2)

    assert list(returns.values[1:]) == [Decimal("0.1"), Decimal("0.1"), Decimal("0")]


def test_open_trade_in_record_is_clamped_to_series_end() -> None:
    series = PriceSeries.from_closes([100, 110, 121])
    record = _record(series, (0, 100))

    returns = Returns(series, record, ReturnType.ARITHMETIC, final_index=99)

    assert list(returns.values[1:]) == [Decimal("0.1"), Decimal("0.1")]


def test_final_index_before_entry_is_rejected() -> None:
    series = PriceSeries.from_closes([100, 110, 121, 130])
    record = _record(series, (2, 121))

    with pytest.raises(InvalidArgumentError):
        Returns(series, record, final_index=1)


def test_value_at_out_of_range() -> None:
    series = PriceSeries.from_closes([100, 110])
    returns = Returns(series, TradingRecord(num=series.num))

    assert returns.value_at(1) == 0
    with pytest.raises(IndexOutOfRangeError):
        returns.value_at(2)


def test_string_return_type_and_float_export() -> None:
    num = DoubleContext()
    series = PriceSeries.from_closes([100.0, 110.0, 121.0, 100.0], num=num)
    record = TradingRecord(num=num)
    record.enter(0, 100.0)
    record.exit(2, 121.0)

    exported = Returns(series, record, return_type="arithmetic").to_series()

    assert exported.isna().tolist() == [True, False, False, False]
    assert exported.iloc[1:].tolist() == pytest.approx([0.1, 0.1, 0.0])


def test_exit_beyond_series_end_still_prices_at_exit_order() -> None:
    series = PriceSeries.from_closes([100, 110, 121])
    num = series.num
    record = _record(series, (0, 100), (5, 200))

    returns = Returns(series, record, ReturnType.ARITHMETIC)

    assert returns.value_at(1) == Decimal("0.1")
    assert returns.value_at(2) == num.subtract(num.divide(Decimal("200"), Decimal("110")), num.one)


def test_record_on_another_backend_is_rejected() -> None:
    series = PriceSeries.from_closes([100, 110, 121])
    record = TradingRecord(num=DoubleContext())
    record.enter(0, 100)
    record.exit(2, 121)

    with pytest.raises(InvalidArgumentError, match="double backend but the series uses decimal"):
        Returns(series, record)
