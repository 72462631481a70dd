# holdings_engine/core/models/holding.py

from datetime import date
from typing import Optional
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

from holdings_engine.core.enums.asset_type import PriceSource


class Holding(BaseModel):
    """
    An open position derived from the full transaction history of one asset.
    """
    asset_id: str = Field(..., description="Asset the position is held in")
    symbol: str = Field(..., description="Symbol copied from the asset directory")
    name: str = Field(..., description="Name copied from the asset directory")
    quantity: Decimal = Field(..., description="Open units, the sum of all open lots")
    avg_cost: Decimal = Field(..., description="cost_basis / quantity")
    cost_basis: Decimal = Field(..., description="Remaining acquisition cost of the open lots")
    realized_pnl: Decimal = Field(..., description="Sell proceeds net of fees minus consumed lot cost, to date")

    model_config = ConfigDict(frozen=True)


class EquityQuote(BaseModel):
    """A live equity price, already resolved to an asset id by the caller."""
    price: Decimal
    currency: Optional[str] = None


class NavQuote(BaseModel):
    """A published mutual fund NAV."""
    nav: Decimal
    nav_date: Optional[date] = None


class HoldingWithPrice(Holding):
    """
    A holding with its current market valuation attached.
    Valuation fields are None when no live price was available.
    """
    current_price: Optional[Decimal] = Field(None, description="Latest price or NAV per unit")
    price_date: Optional[date] = Field(None, description="NAV date, for mutual fund prices")
    market_value: Optional[Decimal] = Field(None, description="quantity * current_price")
    unrealized_pnl: Optional[Decimal] = Field(None, description="market_value - cost_basis")
    unrealized_pnl_pct: Optional[Decimal] = Field(None, description="unrealized_pnl as a percentage of cost_basis")
    price_source: PriceSource = Field(default=PriceSource.MANUAL)
