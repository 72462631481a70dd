# holdings_engine/core/models/response.py

from typing import List
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from holdings_engine.core.models.holding import Holding, HoldingWithPrice

class ErroredTransaction(BaseModel):
    """
    Represents a transaction that was rejected or only partly applied, with the reason.
    """
    transaction_id: str = Field(..., description="The ID of the affected transaction.")
    error_reason: str = Field(..., description="Why the transaction was rejected or skipped.")


class HoldingsResponse(BaseModel):
    """
    Represents the output of the holdings computation.
    """
    holdings: List[Holding] = Field(
        ...,
        description="Open positions derived from the accepted transactions."
    )
    invested_amount: Decimal = Field(
        ...,
        description="Net cash put into the portfolio: buys plus fees, minus sell proceeds."
    )
    errored_transactions: List[ErroredTransaction] = Field(
        default_factory=list,
        description="Transactions that failed validation and were left out of the computation."
    )
    skipped_transactions: List[ErroredTransaction] = Field(
        default_factory=list,
        description="Valid transactions the lot engine ignored or only partly applied (unknown asset, over-sell, ...)."
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "holdings": [
                    {
                        "asset_id": "asset-infy",
                        "symbol": "INFY",
                        "name": "Infosys Ltd",
                        "quantity": "8",
                        "avg_cost": "200",
                        "cost_basis": "1600",
                        "realized_pnl": "380"
                    }
                ],
                "invested_amount": "1220",
                "errored_transactions": [
                    {
                        "transaction_id": "tx-bad",
                        "error_reason": "Validation error: quantity: Input should be greater than 0"
                    }
                ],
                "skipped_transactions": []
            }
        }
    )


class ValuationResponse(HoldingsResponse):
    """
    Holdings output with live prices attached.
    """
    holdings: List[HoldingWithPrice] = Field(
        ...,
        description="Open positions with market value and unrealized P&L where a price was available."
    )
