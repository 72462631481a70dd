# holdings_engine/logic/invested_amount.py

from decimal import Decimal
from typing import Sequence

from holdings_engine.core.models.transaction import Transaction
from holdings_engine.core.enums.transaction_type import TransactionType
from holdings_engine.logic.holdings_calculator import ensure_transaction_list


def compute_invested_amount(transactions: Sequence[Transaction]) -> Decimal:
    """
    Net cash put into the portfolio: buys (with fees) minus sell proceeds
    (net of fees), plus standalone fees.

    This is a plain sum, so transaction order does not matter. It is
    deliberately unrelated to lot tracking and can diverge from the cost
    basis of open positions, e.g. after a sell and rebuy at another price.
    """
    ensure_transaction_list(transactions)
    invested = Decimal(0)

    for txn in transactions:
        quantity = txn.quantity or Decimal(0)
        price = txn.price or Decimal(0)

        if txn.type == TransactionType.BUY:
            invested += quantity * price + txn.fee
        elif txn.type == TransactionType.SELL:
            invested -= quantity * price - txn.fee
        elif txn.type == TransactionType.FEE:
            invested += txn.amount or txn.fee

    return invested
