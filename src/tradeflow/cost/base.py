from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tradeflow.num import Num, NumContext

if TYPE_CHECKING:
    from tradeflow.execution.models import Trade


class CostModel(ABC):
    @abstractmethod
    def order_cost(self, num: NumContext, price: Num, amount: Num) -> Num:
        """Return the absolute cost of executing ``amount`` at ``price``."""

    @abstractmethod
    def trade_cost(self, trade: Trade, current_index: int, current_price: Num | None = None) -> Num:
        """Return the absolute cost a trade has accrued up to ``current_index``."""
