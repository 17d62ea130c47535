from __future__ import annotations

from tradeflow.analysis.base import TradeAccrual
from tradeflow.analysis.return_type import (
    ReturnFactor,
    ReturnType,
    leverage_adjusted_return,
    period_return,
)
from tradeflow.domain.models import PriceSeries
from tradeflow.execution.models import Trade, TradingRecord
from tradeflow.num import NaN, Num


class Returns(TradeAccrual):
    """Per-bar returns of the traded position.

    Bar 0 holds the ``NaN`` sentinel since there is no prior bar. Holding
    costs are spread evenly over each trade's bars; transaction costs enter
    through the entry and exit net prices.
    """

    def __init__(
        self,
        series: PriceSeries,
        source: Trade | TradingRecord,
        return_type: ReturnType = ReturnType.ARITHMETIC,
        final_index: int | None = None,
    ) -> None:
        super().__init__(series)
        self.return_type = ReturnType(return_type)
        if isinstance(source, Trade):
            bound = series.end_index if final_index is None else final_index
            self._build([(source, bound)])
        else:
            self._build(self._trades_of(source, final_index))

    def size(self) -> int:
        return self.series.bar_count - 1

    def _origin_value(self) -> Num:
        return NaN  # type: ignore[return-value]

    def _gap_value(self, values: list[Num]) -> Num:
        return self.num.zero

    def _accrue(self, values: list[Num], trade: Trade, entry_index: int, end_index: int) -> None:
        holding_cost = trade.holding_cost_up_to(end_index)
        avg_cost = self.amortized_cost(holding_cost, end_index - entry_index)
        factor = ReturnFactor.at_entry(self.num) if trade.is_short else None

        # returns chain bar to bar, starting from the entry's net price
        last_price = trade.entry.net_price
        for i in range(entry_index + 1, end_index):
            close = self.series.close_price_at(i)
            net_price = self._with_cost(close, avg_cost, trade.is_long)
            values.append(self._strategy_return(net_price, last_price, factor))
            last_price = close

        if trade.exit is not None:
            exit_price = trade.exit.net_price
        else:
            exit_price = self.series.close_price_at(end_index)
        net_price = self._with_cost(exit_price, avg_cost, trade.is_long)
        values.append(self._strategy_return(net_price, last_price, factor))

    def _strategy_return(self, new: Num, old: Num, factor: ReturnFactor | None) -> Num:
        asset_return = period_return(self.return_type, self.num, new, old)
        if factor is None:
            return asset_return
        return leverage_adjusted_return(self.return_type, self.num, asset_return, factor)

    def _with_cost(self, price: Num, cost: Num, is_long: bool) -> Num:
        # cost always eats into profit: lower exit for longs, higher for shorts
        if is_long:
            return self.num.subtract(price, cost)
        return self.num.add(price, cost)
