from tradeflow.domain.models import Bar, PriceSeries

__all__ = ["Bar", "PriceSeries"]
