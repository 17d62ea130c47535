from tradeflow.analysis import CashFlow, Returns, ReturnType, TradingAnalyzer, TradingSummary
from tradeflow.config import Settings
from tradeflow.cost import (
    CostModel,
    LinearBorrowingCostModel,
    LinearTransactionCostModel,
    ZeroCostModel,
)
from tradeflow.domain import Bar, PriceSeries
from tradeflow.errors import IndexOutOfRangeError, InvalidArgumentError, TradeflowError
from tradeflow.execution import Order, Side, Trade, TradingRecord
from tradeflow.num import DecimalContext, DoubleContext, NaN, NumContext, is_nan

__version__ = "0.1.0"

__all__ = [
    "Bar",
    "PriceSeries",
    "Side",
    "Order",
    "Trade",
    "TradingRecord",
    "CostModel",
    "ZeroCostModel",
    "LinearTransactionCostModel",
    "LinearBorrowingCostModel",
    "CashFlow",
    "Returns",
    "ReturnType",
    "TradingAnalyzer",
    "TradingSummary",
    "NumContext",
    "DecimalContext",
    "DoubleContext",
    "NaN",
    "is_nan",
    "Settings",
    "TradeflowError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "__version__",
]
