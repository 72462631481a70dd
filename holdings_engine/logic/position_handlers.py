# holdings_engine/logic/position_handlers.py

import logging
from typing import Protocol, Optional
from decimal import Decimal

from holdings_engine.core.models.transaction import Transaction
from holdings_engine.core.enums.transaction_type import TransactionType
from holdings_engine.logic.lot_objects import Lot, Position
from holdings_engine.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)


class PositionHandler(Protocol):
    """
    Protocol (interface) for applying one transaction type to a position.
    Each handler mutates the position in place and never raises for bad data.
    """
    def apply(
        self,
        position: Position,
        transaction: Transaction,
        error_reporter: Optional[ErrorReporter] = None
    ) -> None:
        ...


class BuyHandler:
    """Opens a new lot. The fee is spread over the purchased units."""
    def apply(
        self,
        position: Position,
        transaction: Transaction,
        error_reporter: Optional[ErrorReporter] = None
    ) -> None:
        quantity = transaction.quantity or Decimal(0)
        if quantity <= 0:
            logger.warning(f"Buy {transaction.id} for {position.symbol} has non-positive quantity {quantity}; skipped.")
            if error_reporter is not None:
                error_reporter.add_error(transaction.id, f"Buy quantity must be positive, got {quantity}; transaction ignored.")
            return

        price = transaction.price or Decimal(0)
        cost_per_unit = price + transaction.fee / quantity
        position.add_lot(Lot(
            transaction_id=transaction.id,
            quantity=quantity,
            cost_per_unit=cost_per_unit,
            purchase_date=transaction.trade_date
        ))
        logger.debug(f"Buy {transaction.id}: +{quantity} {position.symbol} @ {cost_per_unit}. Position qty={position.quantity}, cost_basis={position.cost_basis}")


class SellHandler:
    """
    Consumes open lots oldest-first and books the realized gain or loss.
    Selling more than is held sells what is available.
    """
    def apply(
        self,
        position: Position,
        transaction: Transaction,
        error_reporter: Optional[ErrorReporter] = None
    ) -> Decimal:
        """Returns the quantity actually sold."""
        requested = transaction.quantity or Decimal(0)
        price = transaction.price or Decimal(0)

        consumed_cost, sold_quantity = position.consume_fifo(requested)
        proceeds = sold_quantity * price - transaction.fee

        if sold_quantity < requested:
            logger.warning(f"Sell {transaction.id} for {position.symbol} requested {requested} but only {sold_quantity} was held; sold the available quantity.")
            if error_reporter is not None:
                error_reporter.add_error(
                    transaction.id,
                    f"Sell quantity ({requested}) exceeds open quantity ({sold_quantity}) for {position.symbol}; only {sold_quantity} sold."
                )

        position.close_units(sold_quantity, consumed_cost, proceeds)
        logger.debug(f"Sell {transaction.id}: -{sold_quantity} {position.symbol}, consumed cost {consumed_cost}, proceeds {proceeds}. Position qty={position.quantity}, realized_pnl={position.realized_pnl}")
        return sold_quantity


class SplitHandler:
    """Scales every open lot by the split ratio carried in the quantity field."""
    def apply(
        self,
        position: Position,
        transaction: Transaction,
        error_reporter: Optional[ErrorReporter] = None
    ) -> None:
        ratio = transaction.quantity or Decimal(1)
        if ratio <= 0:
            logger.warning(f"Split {transaction.id} for {position.symbol} has non-positive ratio {ratio}; treated as 1.")
            if error_reporter is not None:
                error_reporter.add_error(transaction.id, f"Split ratio must be positive, got {ratio}; treated as 1.")
            ratio = Decimal(1)

        position.apply_split(ratio)
        logger.debug(f"Split {transaction.id}: ratio {ratio} for {position.symbol}. Position qty={position.quantity}, avg_cost={position.avg_cost}")


class CashEventHandler:
    """
    Dividends, standalone fees and interest leave the lot structure alone.
    They only count towards the invested amount.
    """
    def apply(
        self,
        position: Position,
        transaction: Transaction,
        error_reporter: Optional[ErrorReporter] = None
    ) -> None:
        logger.debug(f"{transaction.type.value.capitalize()} {transaction.id} for {position.symbol}: no effect on lots.")


class PositionUpdater:
    """
    Applies the appropriate handler based on transaction type.
    """

    def __init__(self, error_reporter: Optional[ErrorReporter] = None):
        self._error_reporter = error_reporter
        self._handlers: dict[TransactionType, PositionHandler] = {
            TransactionType.BUY: BuyHandler(),
            TransactionType.SELL: SellHandler(),
            TransactionType.SPLIT: SplitHandler(),
            TransactionType.DIVIDEND: CashEventHandler(),
            TransactionType.FEE: CashEventHandler(),
            TransactionType.INTEREST: CashEventHandler(),
        }
        self._default_handler = CashEventHandler()

    def apply(self, position: Position, transaction: Transaction) -> None:
        handler = self._handlers.get(transaction.type, self._default_handler)
        handler.apply(position, transaction, self._error_reporter)
