# holdings_engine/logic/parser.py

import logging
from typing import Any
from pydantic import ValidationError, TypeAdapter

from holdings_engine.core.models.transaction import Transaction, TransactionInput
from holdings_engine.logic.error_reporter import ErrorReporter

logger = logging.getLogger(__name__)

UNKNOWN_TRANSACTION_ID = "UNKNOWN_ID"


class TransactionParser:
    """
    Parses raw transaction dictionaries into validated Transaction objects.
    Applies the entry rules of the transaction form (positive quantity and price,
    required fields per type) using Pydantic.
    Records that fail are reported to the shared ErrorReporter and left out.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._single_transaction_adapter = TypeAdapter(TransactionInput)
        self._error_reporter = error_reporter

    def parse_transactions(self, raw_transactions_data: list[Any]) -> list[Transaction]:
        """
        Returns the valid transactions in input order. Every rejected record is
        reported under its id, or UNKNOWN_ID when it has none.
        """
        parsed_transactions: list[Transaction] = []

        for raw_txn_data in raw_transactions_data:
            if not isinstance(raw_txn_data, dict):
                self._error_reporter.add_error(
                    UNKNOWN_TRANSACTION_ID,
                    f"Validation error: expected an object, got {type(raw_txn_data).__name__}"
                )
                continue

            transaction_id = str(raw_txn_data.get("id") or UNKNOWN_TRANSACTION_ID)
            try:
                parsed_transactions.append(self._single_transaction_adapter.validate_python(raw_txn_data))
            except ValidationError as e:
                error_reason = f"Validation error: {self._format_errors(e)}"
                logger.warning(f"TransactionParser: Rejected transaction {transaction_id}: {error_reason}")
                self._error_reporter.add_error(transaction_id, error_reason)

        logger.debug(f"TransactionParser: Accepted {len(parsed_transactions)} of {len(raw_transactions_data)} transactions.")
        return parsed_transactions

    @staticmethod
    def _format_errors(error: ValidationError) -> str:
        messages = []
        for err in error.errors():
            location = ".".join(str(part) for part in err["loc"]) or "transaction"
            messages.append(f"{location}: {err['msg']}")
        return "; ".join(messages)
