from __future__ import annotations

import logging
from dataclasses import dataclass

from tradeflow.analysis.cash_flow import CashFlow
from tradeflow.analysis.criteria import (
    annualized_return,
    max_drawdown,
    sharpe_ratio,
    total_return,
)
from tradeflow.analysis.return_type import ReturnType
from tradeflow.analysis.returns import Returns
from tradeflow.domain.models import PriceSeries
from tradeflow.execution.models import TradingRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TradingSummary:
    cash_flow: CashFlow
    returns: Returns
    trade_count: int
    total_return: float
    annual_return: float
    max_drawdown: float
    sharpe: float
    benchmark_cash_flow: CashFlow
    benchmark_total_return: float
    benchmark_annual_return: float
    benchmark_max_drawdown: float


class TradingAnalyzer:
    def __init__(
        self,
        return_type: ReturnType = ReturnType.ARITHMETIC,
        periods_per_year: int = 252,
    ) -> None:
        if periods_per_year <= 0:
            raise ValueError("periods_per_year must be greater than zero")
        self.return_type = ReturnType(return_type)
        self.periods_per_year = periods_per_year

    def run(
        self,
        series: PriceSeries,
        record: TradingRecord,
        final_index: int | None = None,
    ) -> TradingSummary:
        cash_flow = CashFlow(series, record, final_index=final_index)
        returns = Returns(series, record, return_type=self.return_type, final_index=final_index)
        benchmark = self._buy_and_hold(series)
        logger.debug("Analyzed %d trades over %d bars", record.trade_count, series.bar_count)

        return TradingSummary(
            cash_flow=cash_flow,
            returns=returns,
            trade_count=record.trade_count,
            total_return=total_return(cash_flow),
            annual_return=annualized_return(cash_flow, self.periods_per_year),
            max_drawdown=max_drawdown(cash_flow),
            sharpe=sharpe_ratio(returns, periods_per_year=self.periods_per_year),
            benchmark_cash_flow=benchmark,
            benchmark_total_return=total_return(benchmark),
            benchmark_annual_return=annualized_return(benchmark, self.periods_per_year),
            benchmark_max_drawdown=max_drawdown(benchmark),
        )

    @staticmethod
    def _buy_and_hold(series: PriceSeries) -> CashFlow:
        record = TradingRecord.for_series(series)
        if series.end_index > 0:
            record.enter(0, series.close_price_at(0))
            record.exit(series.end_index, series.close_price_at(series.end_index))
        return CashFlow(series, record)
