from __future__ import annotations

import math

import numpy as np
import pandas as pd

from tradeflow.analysis.cash_flow import CashFlow
from tradeflow.analysis.return_type import ReturnType
from tradeflow.analysis.returns import Returns


def total_return(cash_flow: CashFlow) -> float:
    return float(cash_flow.value_at(len(cash_flow) - 1)) - 1.0


def annualized_return(cash_flow: CashFlow, periods_per_year: int = 252) -> float:
    equity = cash_flow.to_series()
    if len(equity) < 2:
        return 0.0
    years = len(equity) / periods_per_year
    if years <= 0:
        return 0.0
    growth = float(equity.iloc[-1] / equity.iloc[0])
    if growth <= 0:
        return -1.0
    return float(growth ** (1.0 / years) - 1.0)


def max_drawdown(cash_flow: CashFlow) -> float:
    equity = cash_flow.to_series()
    running_max = equity.cummax()
    drawdown = (equity / running_max) - 1.0
    return float(drawdown.min())


def sharpe_ratio(
    returns: Returns,
    risk_free_rate: float = 0.0,
    periods_per_year: int = 252,
) -> float:
    series = returns.to_series().dropna()
    if series.empty:
        return 0.0

    excess = series - (risk_free_rate / periods_per_year)
    std = excess.std(ddof=1)
    if std == 0 or math.isnan(std):
        return 0.0
    return float((excess.mean() / std) * math.sqrt(periods_per_year))


def cumulative_log_return(returns: Returns) -> float:
    series: pd.Series = returns.to_series().dropna()
    if returns.return_type is ReturnType.LOG:
        return float(series.sum())
    return float(np.log1p(series).sum())
