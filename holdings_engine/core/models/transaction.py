# holdings_engine/core/models/transaction.py

from datetime import date, datetime, timezone
from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, Field, condecimal, ConfigDict, field_validator, model_validator

from holdings_engine.core.enums.transaction_type import TransactionType
from holdings_engine.core.models.asset import Asset
from holdings_engine.core.config.settings import settings


class Transaction(BaseModel):
    """
    Represents a single investment transaction as supplied by the transaction store.

    Optional numeric fields may be missing; the lot engine treats them as zero.
    Instances are frozen: the engine reads them but never mutates them.
    """
    id: str = Field(..., description="Unique identifier for the transaction")
    type: TransactionType = Field(..., description="buy, sell, dividend, fee, interest or split")
    asset_id: Optional[str] = Field(None, description="Asset reference; empty for account-level cash events")
    portfolio_account_id: Optional[str] = Field(None, description="Account the transaction was booked in")
    quantity: Optional[Decimal] = Field(None, description="Units traded, or the ratio for a split")
    price: Optional[Decimal] = Field(None, description="Per-unit trade price")
    amount: Optional[Decimal] = Field(None, description="Cash amount for fee, dividend and interest records")
    fee: condecimal(ge=0) = Field(default=Decimal(0), description="Flat transaction cost")
    currency: str = Field(default=settings.DEFAULT_CURRENCY, description="Trade currency")
    trade_date: date = Field(..., description="Date the transaction is economically effective")
    settle_date: Optional[date] = Field(None, description="Settlement date")
    created_at: datetime = Field(..., description="Record creation time; orders same-day transactions")
    notes: Optional[str] = Field(None)
    asset: Optional[Asset] = Field(None, description="Embedded asset record, when the store joins it")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        from_attributes=True,
        extra='ignore'
    )

    @field_validator("fee", mode="before")
    @classmethod
    def _missing_fee_is_zero(cls, value):
        return Decimal(0) if value is None else value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive and aware timestamps cannot be compared while sorting.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TransactionInput(Transaction):
    """
    A transaction as entered by a user. Adds the entry rules that the
    transaction form enforces before a record is accepted.
    """
    quantity: Optional[condecimal(gt=0)] = Field(None, description="Units traded, or the ratio for a split")
    price: Optional[condecimal(gt=0)] = Field(None, description="Per-unit trade price")
    currency: str = Field(default=settings.DEFAULT_CURRENCY, min_length=3, max_length=3)

    @model_validator(mode="after")
    def _check_required_by_type(self) -> "TransactionInput":
        missing = []
        if self.type in TransactionType.position_types() and not self.asset_id:
            missing.append("asset_id")
        if self.type in TransactionType.position_types() and self.quantity is None:
            missing.append("quantity")
        if self.type in (TransactionType.BUY, TransactionType.SELL) and self.price is None:
            missing.append("price")
        if missing:
            raise ValueError(f"{self.type.value} transactions require {', '.join(missing)}")
        return self
