from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradeflow.analysis.return_type import ReturnType
from tradeflow.analysis.summary import TradingAnalyzer
from tradeflow.cost.base import CostModel
from tradeflow.cost.models import (
    LinearBorrowingCostModel,
    LinearTransactionCostModel,
    ZeroCostModel,
)
from tradeflow.num import DecimalContext, DoubleContext, NumContext


class Settings(BaseSettings):
    """Environment-backed runtime settings."""

    log_level: str = "INFO"

    num_backend: Literal["decimal", "double"] = "decimal"
    decimal_precision: int = Field(default=32, gt=0)
    return_type: ReturnType = ReturnType.ARITHMETIC
    periods_per_year: int = Field(default=252, gt=0)

    fee_per_trade: float = Field(default=0.0, ge=0)
    initial_fee: float = Field(default=0.0, ge=0)
    borrowing_fee_per_period: float = Field(default=0.0, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    model_config = SettingsConfigDict(
        env_prefix="TRADEFLOW_",
        env_file=".env",
        env_file_encoding="utf-8-sig",
        extra="ignore",
    )

    def num_context(self) -> NumContext:
        if self.num_backend == "double":
            return DoubleContext()
        return DecimalContext(precision=self.decimal_precision)

    def transaction_cost_model(self) -> CostModel:
        if self.fee_per_trade == 0 and self.initial_fee == 0:
            return ZeroCostModel()
        return LinearTransactionCostModel(
            fee_per_trade=self.fee_per_trade,
            initial_fee=self.initial_fee,
        )

    def holding_cost_model(self) -> CostModel:
        if self.borrowing_fee_per_period == 0:
            return ZeroCostModel()
        return LinearBorrowingCostModel(fee_per_period=self.borrowing_fee_per_period)

    def analyzer(self) -> TradingAnalyzer:
        return TradingAnalyzer(
            return_type=self.return_type,
            periods_per_year=self.periods_per_year,
        )
