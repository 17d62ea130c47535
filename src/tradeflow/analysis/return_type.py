from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import assert_never

from tradeflow.num import Num, NumContext


class ReturnType(StrEnum):
    LOG = "log"
    ARITHMETIC = "arithmetic"


@dataclass(slots=True)
class ReturnFactor:
    """Equity of a short position relative to its entry.

    ``growth`` is the compounded asset growth since entry and ``factor`` is
    ``1 - (growth - 1)``, the value of the short per unit of entry equity.
    """

    growth: Num
    factor: Num

    @classmethod
    def at_entry(cls, num: NumContext) -> ReturnFactor:
        return cls(growth=num.one, factor=num.one)


def period_return(return_type: ReturnType, num: NumContext, new: Num, old: Num) -> Num:
    match return_type:
        case ReturnType.LOG:
            return num.ln(num.divide(new, old))
        case ReturnType.ARITHMETIC:
            return num.subtract(num.divide(new, old), num.one)
        case _:
            assert_never(return_type)


def leverage_adjusted_return(
    return_type: ReturnType,
    num: NumContext,
    asset_return: Num,
    factor: ReturnFactor,
) -> Num:
    """Turn an asset return into the return of a short position.

    Log returns are additive, so the short return is the negated asset
    return. Arithmetic returns compound, so ``factor`` is advanced and the
    return is taken between its previous and current value.
    """
    match return_type:
        case ReturnType.LOG:
            return num.negate(asset_return)
        case ReturnType.ARITHMETIC:
            factor.growth = num.multiply(factor.growth, num.add(num.one, asset_return))
            previous = factor.factor
            factor.factor = num.subtract(num.value_of(2), factor.growth)
            return period_return(ReturnType.ARITHMETIC, num, factor.factor, previous)
        case _:
            assert_never(return_type)
