# holdings_engine/logic/sorter.py

from typing import Iterable, List
from holdings_engine.core.models.transaction import Transaction

class TransactionSorter:
    """
    Puts transactions into the economic event order the lot engine replays.
    """

    def sort_transactions(self, transactions: Iterable[Transaction]) -> List[Transaction]:
        """
        Returns a new list sorted for replay. The input is not modified.

        Sorting Rules:
        1. Primary sort: trade_date ascending.
        2. Secondary sort: created_at ascending (entry order for same-day transactions).

        Neither id nor the order the records arrived in takes part in the ordering.
        """
        return sorted(transactions, key=lambda txn: (txn.trade_date, txn.created_at))
