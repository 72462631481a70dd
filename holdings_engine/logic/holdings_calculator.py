# holdings_engine/logic/holdings_calculator.py

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Sequence, Union

from holdings_engine.core.models.asset import AssetInfo
from holdings_engine.core.models.holding import Holding
from holdings_engine.core.models.transaction import Transaction
from holdings_engine.logic.error_reporter import ErrorReporter
from holdings_engine.logic.lot_objects import Position
from holdings_engine.logic.position_handlers import PositionUpdater
from holdings_engine.logic.sorter import TransactionSorter

logger = logging.getLogger(__name__)

AssetLookup = Union[Mapping, Callable[[str], Any]]


def ensure_transaction_list(transactions: Any) -> Sequence[Transaction]:
    """
    Rejects input the calling layer should never pass. These are programming
    errors rather than data errors, so they raise instead of degrading.
    """
    if not isinstance(transactions, (list, tuple)):
        raise TypeError(f"transactions must be a list of Transaction, got {type(transactions).__name__}")
    for txn in transactions:
        if not isinstance(txn, Transaction):
            raise TypeError(f"transactions must contain Transaction objects, got {type(txn).__name__}")
    return transactions


def _resolver_for(asset_lookup: AssetLookup) -> Callable[[str], Optional[AssetInfo]]:
    if isinstance(asset_lookup, Mapping):
        fetch = asset_lookup.get
    elif callable(asset_lookup):
        fetch = asset_lookup
    else:
        raise TypeError(f"asset_lookup must be a mapping or a callable, got {type(asset_lookup).__name__}")

    def resolve(asset_id: str) -> Optional[AssetInfo]:
        info = fetch(asset_id)
        if info is None or isinstance(info, AssetInfo):
            return info
        return AssetInfo.model_validate(info)

    return resolve


class HoldingsCalculator:
    """
    Derives open positions from a complete transaction history by FIFO lot replay.

    Every call replays the whole history from scratch; nothing is cached between
    calls. An instance without an error_reporter can be shared freely; with one,
    skip reports accumulate until the reporter is cleared.
    """
    def __init__(
        self,
        sorter: Optional[TransactionSorter] = None,
        error_reporter: Optional[ErrorReporter] = None
    ):
        self._sorter = sorter or TransactionSorter()
        self._error_reporter = error_reporter

    def replay(self, transactions: Sequence[Transaction], asset_lookup: AssetLookup) -> Dict[str, Position]:
        """
        Folds the sorted history into one Position per asset, closed positions included.
        """
        ensure_transaction_list(transactions)
        resolve = _resolver_for(asset_lookup)
        updater = PositionUpdater(error_reporter=self._error_reporter)
        positions: Dict[str, Position] = {}

        for transaction in self._sorter.sort_transactions(transactions):
            if not transaction.asset_id:
                logger.debug(f"Transaction {transaction.id} ({transaction.type.value}) has no asset; not a position event.")
                continue

            position = positions.get(transaction.asset_id)
            if position is None:
                asset = resolve(transaction.asset_id)
                if asset is None:
                    logger.warning(f"Transaction {transaction.id} references unknown asset '{transaction.asset_id}'; skipped.")
                    if self._error_reporter is not None:
                        self._error_reporter.add_error(transaction.id, f"Unknown asset '{transaction.asset_id}'; transaction ignored.")
                    continue
                position = Position(asset_id=transaction.asset_id, symbol=asset.symbol, name=asset.name)
                positions[transaction.asset_id] = position

            updater.apply(position, transaction)

        return positions

    def compute_holdings(self, transactions: Sequence[Transaction], asset_lookup: AssetLookup) -> list[Holding]:
        positions = self.replay(transactions, asset_lookup)
        holdings = [
            Holding(
                asset_id=p.asset_id,
                symbol=p.symbol,
                name=p.name,
                quantity=p.quantity,
                avg_cost=p.avg_cost,
                cost_basis=p.cost_basis,
                realized_pnl=p.realized_pnl
            )
            for p in positions.values() if p.is_open()
        ]
        logger.debug(f"Replayed {len(transactions)} transactions into {len(positions)} positions, {len(holdings)} open.")
        return holdings


def compute_holdings(transactions: Sequence[Transaction], asset_lookup: AssetLookup) -> list[Holding]:
    """
    Open holdings for the given history. `asset_lookup` maps asset_id to
    {symbol, name}; it may be a mapping or a callable returning None for
    unknown assets. Transactions for unknown assets are left out.
    """
    return HoldingsCalculator().compute_holdings(transactions, asset_lookup)
