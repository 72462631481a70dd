# holdings_engine/core/models/asset.py

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from holdings_engine.core.enums.asset_type import AssetType
from holdings_engine.core.config.settings import settings

class AssetInfo(BaseModel):
    """
    Display metadata the lot engine copies onto a position when it first sees an asset.
    """
    symbol: str = Field(..., description="Ticker or scheme code shown to the user")
    name: str = Field(..., description="Human readable asset name")
    asset_type: Optional[AssetType] = Field(None, description="Asset class, used to pick a price source")

    model_config = ConfigDict(extra='ignore')


class Asset(AssetInfo):
    """
    A full asset directory record, as embedded in transactions returned by the store.
    """
    id: str = Field(..., description="Unique identifier of the asset")
    isin: Optional[str] = Field(None, description="International Securities Identification Number")
    exchange: Optional[str] = Field(None, description="Listing exchange")
    currency: str = Field(default=settings.DEFAULT_CURRENCY, description="Quote currency")
    is_active: bool = Field(default=True)

    def to_info(self) -> AssetInfo:
        return AssetInfo(symbol=self.symbol, name=self.name, asset_type=self.asset_type)
