# holdings_engine/logic/error_reporter.py

from holdings_engine.core.models.response import ErroredTransaction

class ErrorReporter:
    """
    Collects per-transaction problems so one bad record never fails a whole request.
    Used both for records rejected at validation and for records the lot engine
    skipped or only partly applied.
    """
    def __init__(self):
        self._errored_transactions: dict[str, ErroredTransaction] = {}

    def add_error(self, transaction_id: str, error_reason: str):
        """
        Adds an error for a specific transaction. A second reason for the same
        transaction ID is appended to the first one.
        """
        if transaction_id in self._errored_transactions:
            existing_reason = self._errored_transactions[transaction_id].error_reason
            if error_reason not in existing_reason:
                self._errored_transactions[transaction_id].error_reason += f"; {error_reason}"
        else:
            self._errored_transactions[transaction_id] = ErroredTransaction(
                transaction_id=transaction_id,
                error_reason=error_reason
            )

    def add_errored_transaction(self, errored_txn: ErroredTransaction):
        self.add_error(errored_txn.transaction_id, errored_txn.error_reason)

    def get_errors(self) -> list[ErroredTransaction]:
        """
        Returns all collected errors in the order the transactions were first reported.
        """
        return list(self._errored_transactions.values())

    def has_errors(self) -> bool:
        return bool(self._errored_transactions)

    def has_errors_for(self, transaction_id: str) -> bool:
        return transaction_id in self._errored_transactions

    def clear(self):
        self._errored_transactions = {}
