from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tradeflow.cost.base import CostModel
from tradeflow.num import Num, NumContext

if TYPE_CHECKING:
    from tradeflow.execution.models import Trade


@dataclass(slots=True, frozen=True)
class ZeroCostModel(CostModel):
    """Cost model that never charges anything."""

    def order_cost(self, num: NumContext, price: Num, amount: Num) -> Num:
        return num.zero

    def trade_cost(self, trade: Trade, current_index: int, current_price: Num | None = None) -> Num:
        return trade.entry.num.zero


@dataclass(slots=True, frozen=True)
class LinearTransactionCostModel(CostModel):
    """Fee proportional to traded value, plus an optional fixed fee per order.

    The trade cost reuses the cost realized on each order when it was
    created: the entry order's cost while the trade is open, the exit
    order's cost once it is closed.
    """

    fee_per_trade: float
    initial_fee: float = 0.0

    def __post_init__(self) -> None:
        if self.fee_per_trade < 0:
            raise ValueError("fee_per_trade must be non-negative")
        if self.initial_fee < 0:
            raise ValueError("initial_fee must be non-negative")

    def order_cost(self, num: NumContext, price: Num, amount: Num) -> Num:
        traded_value = num.multiply(price, amount)
        proportional = num.multiply(traded_value, num.value_of(self.fee_per_trade))
        return num.add(proportional, num.value_of(self.initial_fee))

    def trade_cost(self, trade: Trade, current_index: int, current_price: Num | None = None) -> Num:
        if trade.exit is not None:
            return trade.exit.cost
        return trade.entry.cost


@dataclass(slots=True, frozen=True)
class LinearBorrowingCostModel(CostModel):
    """Holding cost of a short position, linear in the number of bars held."""

    fee_per_period: float

    def __post_init__(self) -> None:
        if self.fee_per_period < 0:
            raise ValueError("fee_per_period must be non-negative")

    def order_cost(self, num: NumContext, price: Num, amount: Num) -> Num:
        return num.zero

    def trade_cost(self, trade: Trade, current_index: int, current_price: Num | None = None) -> Num:
        entry = trade.entry
        num = entry.num
        if not entry.is_sell or entry.amount is None:
            return num.zero

        if trade.exit is not None:
            periods = trade.exit.index - entry.index
        else:
            periods = current_index - entry.index
        return self._holding_cost_for_periods(num, periods, entry.value)

    def _holding_cost_for_periods(self, num: NumContext, periods: int, traded_value: Num) -> Num:
        fee = num.multiply(num.value_of(periods), num.value_of(self.fee_per_period))
        return num.multiply(traded_value, fee)
