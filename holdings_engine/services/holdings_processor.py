# holdings_engine/services/holdings_processor.py

import logging
from typing import Any, Mapping, Tuple

from holdings_engine.core.models.asset import AssetInfo
from holdings_engine.core.models.holding import EquityQuote, NavQuote
from holdings_engine.core.models.response import HoldingsResponse, ValuationResponse
from holdings_engine.core.models.transaction import Transaction
from holdings_engine.logic.parser import TransactionParser
from holdings_engine.logic.holdings_calculator import HoldingsCalculator
from holdings_engine.logic.invested_amount import compute_invested_amount
from holdings_engine.logic.valuation import enrich_holdings_with_prices, split_holdings_by_asset_type
from holdings_engine.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)


def build_asset_lookup(
    transactions: list[Transaction],
    assets: Mapping[str, AssetInfo]
) -> dict[str, AssetInfo]:
    """
    Asset directory for one computation: records embedded in the transactions,
    overridden by the explicitly supplied directory. A directory entry without
    an asset_type keeps the embedded record's type.
    """
    lookup: dict[str, AssetInfo] = {}
    for txn in transactions:
        if txn.asset is not None:
            lookup.setdefault(txn.asset.id, txn.asset.to_info())

    for asset_id, info in assets.items():
        embedded = lookup.get(asset_id)
        if info.asset_type is None and embedded is not None and embedded.asset_type is not None:
            info = info.model_copy(update={"asset_type": embedded.asset_type})
        lookup[asset_id] = info
    return lookup


class HoldingsProcessor:
    """
    Orchestrates a holdings request end to end: validation, asset lookup,
    lot replay, invested amount and, optionally, valuation.
    """
    def __init__(
        self,
        parser: TransactionParser,
        calculator: HoldingsCalculator,
        error_reporter: ErrorReporter,
        skip_reporter: ErrorReporter
    ):
        # error_reporter collects rejected records, skip_reporter what the lot engine passed over
        self._parser = parser
        self._calculator = calculator
        self._error_reporter = error_reporter
        self._skip_reporter = skip_reporter

    def _prepare(
        self,
        transactions_raw: list[dict[str, Any]],
        assets: Mapping[str, AssetInfo]
    ) -> Tuple[list[Transaction], dict[str, AssetInfo]]:
        logger.info(f"Starting holdings computation for {len(transactions_raw)} transactions and {len(assets)} directory assets.")
        transactions = self._parser.parse_transactions(transactions_raw)
        return transactions, build_asset_lookup(transactions, assets)

    def _finish(self, response: HoldingsResponse) -> HoldingsResponse:
        logger.info(
            f"Finished holdings computation. {len(response.holdings)} open holdings, "
            f"{len(response.errored_transactions)} rejected, {len(response.skipped_transactions)} skipped."
        )
        # The reporters belong to this processor; reset them for the next request.
        self._error_reporter.clear()
        self._skip_reporter.clear()
        return response

    def compute(
        self,
        transactions_raw: list[dict[str, Any]],
        assets: Mapping[str, AssetInfo]
    ) -> HoldingsResponse:
        transactions, lookup = self._prepare(transactions_raw, assets)
        holdings = self._calculator.compute_holdings(transactions, lookup)

        return self._finish(HoldingsResponse(
            holdings=holdings,
            invested_amount=compute_invested_amount(transactions),
            errored_transactions=self._error_reporter.get_errors(),
            skipped_transactions=self._skip_reporter.get_errors()
        ))

    def compute_with_valuation(
        self,
        transactions_raw: list[dict[str, Any]],
        assets: Mapping[str, AssetInfo],
        equity_prices: Mapping[str, EquityQuote],
        mf_navs: Mapping[str, NavQuote]
    ) -> ValuationResponse:
        transactions, lookup = self._prepare(transactions_raw, assets)
        holdings = self._calculator.compute_holdings(transactions, lookup)

        equity, mutual_funds = split_holdings_by_asset_type(
            holdings, {asset_id: info.asset_type for asset_id, info in lookup.items()}
        )
        valued = enrich_holdings_with_prices(equity, mutual_funds, equity_prices, mf_navs)

        return self._finish(ValuationResponse(
            holdings=valued,
            invested_amount=compute_invested_amount(transactions),
            errored_transactions=self._error_reporter.get_errors(),
            skipped_transactions=self._skip_reporter.get_errors()
        ))
