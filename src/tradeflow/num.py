"""Numeric contexts used by every calculation in tradeflow.

Values are plain number objects (``Decimal`` or ``numpy.float64``); a
context owns the arithmetic so that precision is bound to the context
instance rather than to process-wide state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Context, Decimal
from typing import Final, Union

import numpy as np

Num = Union[Decimal, float]
NumLiteral = Union[int, float, str, Decimal]


class _NotANumber:
    """Marker for an undefined value; never takes part in arithmetic."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NaN"

    def __eq__(self, other: object) -> bool:
        return other is self

    def __hash__(self) -> int:
        return hash("tradeflow.NaN")

    def __reduce__(self) -> str:
        return "NaN"


NaN: Final = _NotANumber()


def is_nan(value: object) -> bool:
    return value is NaN


class NumContext(ABC):
    name: str

    def __init__(self) -> None:
        self.zero = self.value_of(0)
        self.one = self.value_of(1)

    @abstractmethod
    def value_of(self, literal: NumLiteral) -> Num:
        """Build a value of this context from an int, float, str or Decimal."""

    @abstractmethod
    def add(self, left: Num, right: Num) -> Num: ...

    @abstractmethod
    def subtract(self, left: Num, right: Num) -> Num: ...

    @abstractmethod
    def multiply(self, left: Num, right: Num) -> Num: ...

    @abstractmethod
    def divide(self, left: Num, right: Num) -> Num: ...

    @abstractmethod
    def negate(self, value: Num) -> Num: ...

    @abstractmethod
    def ln(self, value: Num) -> Num: ...

    def is_zero(self, value: Num) -> bool:
        return value == self.zero

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DecimalContext(NumContext):
    """Arbitrary-precision backend on top of a private ``decimal.Context``."""

    name = "decimal"

    def __init__(self, precision: int = 32) -> None:
        if precision <= 0:
            raise ValueError("precision must be greater than zero")
        self.precision = precision
        self._context = Context(prec=precision)
        super().__init__()

    def value_of(self, literal: NumLiteral) -> Decimal:
        if isinstance(literal, float):
            # repr gives the shortest round-tripping digits, so 0.1 stays 0.1
            return self._context.create_decimal(repr(float(literal)))
        return self._context.create_decimal(literal)

    def add(self, left: Num, right: Num) -> Decimal:
        return self._context.add(left, right)

    def subtract(self, left: Num, right: Num) -> Decimal:
        return self._context.subtract(left, right)

    def multiply(self, left: Num, right: Num) -> Decimal:
        return self._context.multiply(left, right)

    def divide(self, left: Num, right: Num) -> Decimal:
        return self._context.divide(left, right)

    def negate(self, value: Num) -> Decimal:
        return self._context.minus(value)

    def ln(self, value: Num) -> Decimal:
        return self._context.ln(value)

    def __repr__(self) -> str:
        return f"DecimalContext(precision={self.precision})"


class DoubleContext(NumContext):
    """Binary floating point backend on ``numpy.float64``."""

    name = "double"

    def value_of(self, literal: NumLiteral) -> np.float64:
        return np.float64(literal)

    def add(self, left: Num, right: Num) -> np.float64:
        return np.float64(left) + np.float64(right)

    def subtract(self, left: Num, right: Num) -> np.float64:
        return np.float64(left) - np.float64(right)

    def multiply(self, left: Num, right: Num) -> np.float64:
        return np.float64(left) * np.float64(right)

    def divide(self, left: Num, right: Num) -> np.float64:
        if right == 0:
            raise ZeroDivisionError("division by zero")
        return np.float64(left) / np.float64(right)

    def negate(self, value: Num) -> np.float64:
        return -np.float64(value)

    def ln(self, value: Num) -> np.float64:
        if value <= 0:
            raise ArithmeticError("ln is only defined for positive values")
        return np.log(np.float64(value))
