# holdings_engine/api/v1/holdings.py

from fastapi import APIRouter, Depends
from holdings_engine.core.models.request import HoldingsRequest, ValuationRequest
from holdings_engine.core.models.response import HoldingsResponse, ValuationResponse
from holdings_engine.services.holdings_processor import HoldingsProcessor
from holdings_engine.logic.parser import TransactionParser
from holdings_engine.logic.sorter import TransactionSorter
from holdings_engine.logic.holdings_calculator import HoldingsCalculator
from holdings_engine.logic.error_reporter import ErrorReporter

router = APIRouter()

def get_holdings_processor() -> HoldingsProcessor:
    """
    Provides a new HoldingsProcessor per request with its own reporters.
    """
    error_reporter = ErrorReporter()
    skip_reporter = ErrorReporter()

    return HoldingsProcessor(
        parser=TransactionParser(error_reporter=error_reporter),
        calculator=HoldingsCalculator(sorter=TransactionSorter(), error_reporter=skip_reporter),
        error_reporter=error_reporter,
        skip_reporter=skip_reporter
    )

@router.post(
    "/holdings",
    response_model=HoldingsResponse,
    summary="Compute open holdings from a transaction history",
    description="Validates the transactions, replays them in trade order with FIFO lot "
                "consumption and returns open holdings, the net invested amount, and "
                "the transactions that were rejected or skipped."
)
async def compute_holdings_endpoint(
    request: HoldingsRequest,
    processor: HoldingsProcessor = Depends(get_holdings_processor)
) -> HoldingsResponse:
    return processor.compute(
        transactions_raw=request.transactions,
        assets=request.assets
    )

@router.post(
    "/holdings/valuation",
    response_model=ValuationResponse,
    summary="Compute open holdings and value them at supplied prices",
    description="Same as /holdings, then attaches market value and unrealized P&L using "
                "equity quotes for listed assets and NAVs for mutual funds."
)
async def compute_valuation_endpoint(
    request: ValuationRequest,
    processor: HoldingsProcessor = Depends(get_holdings_processor)
) -> ValuationResponse:
    return processor.compute_with_valuation(
        transactions_raw=request.transactions,
        assets=request.assets,
        equity_prices=request.equity_prices,
        mf_navs=request.mf_navs
    )
