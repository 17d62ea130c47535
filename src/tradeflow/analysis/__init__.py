from tradeflow.analysis.cash_flow import CashFlow
from tradeflow.analysis.criteria import (
    annualized_return,
    cumulative_log_return,
    max_drawdown,
    sharpe_ratio,
    total_return,
)
from tradeflow.analysis.return_type import (
    ReturnFactor,
    ReturnType,
    leverage_adjusted_return,
    period_return,
)
from tradeflow.analysis.returns import Returns
from tradeflow.analysis.summary import TradingAnalyzer, TradingSummary

__all__ = [
    "CashFlow",
    "Returns",
    "ReturnType",
    "ReturnFactor",
    "period_return",
    "leverage_adjusted_return",
    "total_return",
    "annualized_return",
    "max_drawdown",
    "sharpe_ratio",
    "cumulative_log_return",
    "TradingAnalyzer",
    "TradingSummary",
]
