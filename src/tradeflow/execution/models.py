from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING

from tradeflow.cost.base import CostModel
from tradeflow.cost.models import ZeroCostModel
from tradeflow.errors import InvalidArgumentError
from tradeflow.num import DecimalContext, Num, NumContext, NumLiteral

if TYPE_CHECKING:
    from tradeflow.domain.models import PriceSeries

logger = logging.getLogger(__name__)


class Side(StrEnum):
    BUY = "buy"
    SELL = "sell"

    @property
    def opposite(self) -> Side:
        return Side.SELL if self is Side.BUY else Side.BUY


@dataclass(slots=True, frozen=True)
class Order:
    index: int
    side: Side
    price: Num
    amount: Num | None
    cost: Num
    net_price: Num
    num: NumContext = field(repr=False, compare=False)

    @classmethod
    def create(
        cls,
        index: int,
        side: Side,
        price: Num,
        amount: Num | None = None,
        cost_model: CostModel | None = None,
        num: NumContext | None = None,
    ) -> Order:
        """Build an order, realizing its cost and net price under ``cost_model``."""
        if index < 0:
            raise InvalidArgumentError("order index must be non-negative")
        context = num or DecimalContext()
        model = cost_model or ZeroCostModel()

        if amount is None:
            return cls(index, side, price, None, context.zero, price, context)

        cost = model.order_cost(context, price, amount)
        net_price = price
        if not context.is_zero(cost) and not context.is_zero(amount):
            cost_per_unit = context.divide(cost, amount)
            if side is Side.BUY:
                net_price = context.add(price, cost_per_unit)
            else:
                net_price = context.subtract(price, cost_per_unit)
        return cls(index, side, price, amount, cost, net_price, context)

    @property
    def is_buy(self) -> bool:
        return self.side is Side.BUY

    @property
    def is_sell(self) -> bool:
        return self.side is Side.SELL

    @property
    def value(self) -> Num:
        if self.amount is None:
            raise InvalidArgumentError(f"order at index {self.index} has no amount")
        return self.num.multiply(self.price, self.amount)


@dataclass(slots=True, frozen=True)
class Trade:
    """An entry order and, once closed, the matching exit order."""

    entry: Order
    exit: Order | None = None
    transaction_cost_model: CostModel = field(default_factory=ZeroCostModel)
    holding_cost_model: CostModel = field(default_factory=ZeroCostModel)

    def __post_init__(self) -> None:
        if self.exit is None:
            return
        if self.exit.side is self.entry.side:
            raise InvalidArgumentError("exit order must be on the opposite side of the entry")
        if self.exit.index <= self.entry.index:
            raise InvalidArgumentError(
                f"exit index {self.exit.index} must be after entry index {self.entry.index}"
            )

    @property
    def is_open(self) -> bool:
        return self.exit is None

    @property
    def is_closed(self) -> bool:
        return self.exit is not None

    @property
    def is_long(self) -> bool:
        return self.entry.is_buy

    @property
    def is_short(self) -> bool:
        return self.entry.is_sell

    def close(self, exit_order: Order) -> Trade:
        if self.exit is not None:
            raise InvalidArgumentError("trade is already closed")
        return replace(self, exit=exit_order)

    def cost_up_to(self, index: int, price: Num) -> Num:
        """Transaction plus holding cost accrued by bar ``index``."""
        num = self.entry.num
        transaction = self.transaction_cost_model.trade_cost(self, index, price)
        return num.add(transaction, self.holding_cost_up_to(index))

    def holding_cost_up_to(self, index: int) -> Num:
        return self.holding_cost_model.trade_cost(self, index)


class TradingRecord:
    """Closed trades in order of entry, plus at most one open trade.

    Orders are priced in ``num``, which must be the same backend as the price
    series the record is analyzed against; ``for_series`` shares it.
    """

    def __init__(
        self,
        starting_side: Side = Side.BUY,
        transaction_cost_model: CostModel | None = None,
        holding_cost_model: CostModel | None = None,
        num: NumContext | None = None,
    ) -> None:
        self.starting_side = starting_side
        self.transaction_cost_model = transaction_cost_model or ZeroCostModel()
        self.holding_cost_model = holding_cost_model or ZeroCostModel()
        self.num = num or DecimalContext()
        self._trades: list[Trade] = []
        self._current: Trade | None = None

    @classmethod
    def for_series(
        cls,
        series: PriceSeries,
        starting_side: Side = Side.BUY,
        transaction_cost_model: CostModel | None = None,
        holding_cost_model: CostModel | None = None,
    ) -> TradingRecord:
        return cls(
            starting_side=starting_side,
            transaction_cost_model=transaction_cost_model,
            holding_cost_model=holding_cost_model,
            num=series.num,
        )

    @property
    def trades(self) -> tuple[Trade, ...]:
        return tuple(self._trades)

    @property
    def current_trade(self) -> Trade | None:
        return self._current

    @property
    def trade_count(self) -> int:
        return len(self._trades)

    @property
    def last_trade(self) -> Trade | None:
        return self._trades[-1] if self._trades else None

    @property
    def is_closed(self) -> bool:
        return self._current is None

    def enter(self, index: int, price: NumLiteral, amount: NumLiteral | None = None) -> Trade:
        if self._current is not None:
            raise InvalidArgumentError("cannot enter while a trade is open")
        last = self.last_trade
        if last is not None and last.exit is not None and index < last.exit.index:
            raise InvalidArgumentError(
                f"entry index {index} is before the last exit index {last.exit.index}"
            )
        entry = self._order(index, self.starting_side, price, amount)
        trade = Trade(
            entry=entry,
            transaction_cost_model=self.transaction_cost_model,
            holding_cost_model=self.holding_cost_model,
        )
        self._current = trade
        logger.debug("Entered %s trade at index %d price %s", self.starting_side, index, entry.price)
        return trade

    def exit(self, index: int, price: NumLiteral, amount: NumLiteral | None = None) -> Trade:
        if self._current is None:
            raise InvalidArgumentError("cannot exit without an open trade")
        exit_amount = self._current.entry.amount if amount is None else amount
        exit_order = self._order(index, self.starting_side.opposite, price, exit_amount)
        trade = self._current.close(exit_order)
        self._trades.append(trade)
        self._current = None
        logger.debug("Exited trade at index %d price %s", index, exit_order.price)
        return trade

    def operate(self, index: int, price: NumLiteral, amount: NumLiteral | None = None) -> Trade:
        if self._current is None:
            return self.enter(index, price, amount)
        return self.exit(index, price, amount)

    def _order(
        self,
        index: int,
        side: Side,
        price: NumLiteral,
        amount: NumLiteral | Num | None,
    ) -> Order:
        return Order.create(
            index=index,
            side=side,
            price=self.num.value_of(price),
            amount=None if amount is None else self.num.value_of(amount),
            cost_model=self.transaction_cost_model,
            num=self.num,
        )
