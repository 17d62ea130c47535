from tradeflow.execution.models import Order, Side, Trade, TradingRecord

__all__ = ["Order", "Side", "Trade", "TradingRecord"]
