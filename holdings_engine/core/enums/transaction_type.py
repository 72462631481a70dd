# holdings_engine/core/enums/transaction_type.py

from enum import Enum

class TransactionType(str, Enum):
    """
    Defines the supported types of investment transactions.
    Inheriting from 'str' keeps the values directly comparable with raw string input.
    """
    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    FEE = "fee"
    INTEREST = "interest"
    SPLIT = "split"

    @classmethod
    def position_types(cls) -> set["TransactionType"]:
        """Types that must reference an asset because they change a position's lots."""
        return {cls.BUY, cls.SELL, cls.SPLIT}
