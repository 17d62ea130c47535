from __future__ import annotations

from tradeflow.analysis.base import TradeAccrual
from tradeflow.domain.models import PriceSeries
from tradeflow.errors import InvalidArgumentError
from tradeflow.execution.models import Trade, TradingRecord
from tradeflow.num import Num


class CashFlow(TradeAccrual):
    """Cumulative multiplicative cash flow, 1 at bar 0.

    Built from a single closed trade, or from a trading record whose open
    trade (if any) accrues up to ``final_index``.
    """

    def __init__(
        self,
        series: PriceSeries,
        source: Trade | TradingRecord,
        final_index: int | None = None,
    ) -> None:
        super().__init__(series)
        if isinstance(source, Trade):
            if source.is_open:
                raise InvalidArgumentError("cash flow of a single trade requires a closed trade")
            bound = series.end_index if final_index is None else final_index
            self._build([(source, bound)])
        else:
            self._build(self._trades_of(source, final_index))

    def size(self) -> int:
        return self.series.bar_count

    def _origin_value(self) -> Num:
        return self.num.one

    def _gap_value(self, values: list[Num]) -> Num:
        return values[-1]

    def _accrue(self, values: list[Num], trade: Trade, entry_index: int, end_index: int) -> None:
        num = self.num
        total_cost = trade.cost_up_to(end_index, self.series.close_price_at(end_index))
        avg_cost = self.amortized_cost(total_cost, end_index - entry_index)
        entry_close = self.series.close_price_at(entry_index)
        base = values[entry_index]

        for i in range(entry_index + 1, end_index + 1):
            close = self.series.close_price_at(i)
            if trade.is_long:
                ratio = num.divide(num.subtract(close, avg_cost), entry_close)
            else:
                # Legacy short ratio: no sign inversion and no cost, kept for
                # compatibility with previously published numbers.
                ratio = num.divide(close, entry_close)
            values.append(num.multiply(base, ratio))
