from tradeflow.cost.base import CostModel
from tradeflow.cost.models import (
    LinearBorrowingCostModel,
    LinearTransactionCostModel,
    ZeroCostModel,
)

__all__ = [
    "CostModel",
    "ZeroCostModel",
    "LinearTransactionCostModel",
    "LinearBorrowingCostModel",
]
