# holdings_engine/core/models/request.py

from pydantic import BaseModel, Field, ConfigDict

from holdings_engine.core.models.asset import AssetInfo
from holdings_engine.core.models.holding import EquityQuote, NavQuote

class HoldingsRequest(BaseModel):
    """
    Represents the input payload for the holdings computation.
    """
    # Raw dictionaries, so one malformed record is reported instead of failing the request.
    transactions: list[dict] = Field(
        ...,
        description="The complete transaction history for the scope being computed, in any order."
    )
    assets: dict[str, AssetInfo] = Field(
        default_factory=dict,
        description="Asset directory: asset_id -> {symbol, name, asset_type}. "
                    "Merged with asset records embedded in the transactions."
    )

    model_config = ConfigDict(
        json_schema_extra = {
            "example": {
                "transactions": [
                    {
                        "id": "tx-001",
                        "type": "buy",
                        "asset_id": "asset-infy",
                        "quantity": 10,
                        "price": 100,
                        "fee": 0,
                        "trade_date": "2024-01-02",
                        "created_at": "2024-01-02T09:15:00Z"
                    },
                    {
                        "id": "tx-002",
                        "type": "buy",
                        "asset_id": "asset-infy",
                        "quantity": 10,
                        "price": 200,
                        "fee": 0,
                        "trade_date": "2024-02-01",
                        "created_at": "2024-02-01T09:15:00Z"
                    },
                    {
                        "id": "tx-003",
                        "type": "sell",
                        "asset_id": "asset-infy",
                        "quantity": 12,
                        "price": 150,
                        "fee": 20,
                        "trade_date": "2024-03-01",
                        "created_at": "2024-03-01T09:15:00Z"
                    }
                ],
                "assets": {
                    "asset-infy": {"symbol": "INFY", "name": "Infosys Ltd", "asset_type": "stock"}
                }
            }
        },
        extra='ignore'
    )


class ValuationRequest(HoldingsRequest):
    """
    Holdings input plus prices already fetched by the caller, keyed by asset_id.
    """
    equity_prices: dict[str, EquityQuote] = Field(
        default_factory=dict,
        description="Live equity quotes: asset_id -> {price, currency}."
    )
    mf_navs: dict[str, NavQuote] = Field(
        default_factory=dict,
        description="Mutual fund NAVs: asset_id -> {nav, nav_date}."
    )
