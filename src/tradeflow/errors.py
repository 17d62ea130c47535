"""Typed errors raised by tradeflow."""


class TradeflowError(Exception):
    """Base class for tradeflow errors."""


class InvalidArgumentError(TradeflowError, ValueError):
    """Raised when trades, records or indices violate a precondition."""


class IndexOutOfRangeError(TradeflowError, IndexError):
    """Raised when a bar or series position is read outside its bounds."""
