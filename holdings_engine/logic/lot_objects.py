# holdings_engine/logic/lot_objects.py

from datetime import date
from decimal import Decimal
from typing import Tuple


class Lot:
    """Represents a batch of units acquired through a single BUY transaction."""
    def __init__(self, transaction_id: str, quantity: Decimal, cost_per_unit: Decimal, purchase_date: date):
        self.transaction_id = transaction_id
        self.quantity = quantity
        self.cost_per_unit = cost_per_unit
        self.purchase_date = purchase_date

    @property
    def total_cost(self) -> Decimal:
        """Remaining cost carried by this lot."""
        return self.quantity * self.cost_per_unit

    def __repr__(self) -> str:
        return (f"Lot(txn_id='{self.transaction_id}', "
                f"qty={self.quantity}, "
                f"cost_per_unit={self.cost_per_unit}, "
                f"purchase_date={self.purchase_date})")


class Position:
    """
    The running state of one asset while a transaction history is replayed.

    Lots live in an append-only list; `_head` points at the oldest open lot.
    Fully consumed lots are passed over by advancing `_head`, so a long run of
    small sells never shifts the list.
    """
    def __init__(self, asset_id: str, symbol: str, name: str):
        self.asset_id = asset_id
        self.symbol = symbol
        self.name = name
        self.quantity = Decimal(0)
        self.avg_cost = Decimal(0)
        self.cost_basis = Decimal(0)
        self.realized_pnl = Decimal(0)
        self._lots: list[Lot] = []
        self._head = 0

    @property
    def lots(self) -> list[Lot]:
        """Open lots, oldest first."""
        return self._lots[self._head:]

    def add_lot(self, lot: Lot) -> None:
        self._lots.append(lot)
        self.quantity += lot.quantity
        self.cost_basis += lot.total_cost
        self.recompute_avg_cost()

    def consume_fifo(self, requested: Decimal) -> Tuple[Decimal, Decimal]:
        """
        Removes up to `requested` units from the oldest lots first.

        Returns (consumed_cost, sold_quantity). When the open lots hold fewer
        units than requested, only what is available is consumed.
        Position totals are not touched here; see `close_units`.
        """
        remaining = requested
        consumed_cost = Decimal(0)

        while remaining > 0 and self._head < len(self._lots):
            lot = self._lots[self._head]
            if lot.quantity <= remaining:
                consumed_cost += lot.quantity * lot.cost_per_unit
                remaining -= lot.quantity
                lot.quantity = Decimal(0)
                self._head += 1
            else:
                consumed_cost += remaining * lot.cost_per_unit
                lot.quantity -= remaining
                remaining = Decimal(0)

        sold_quantity = requested - remaining
        return consumed_cost, sold_quantity

    def close_units(self, sold_quantity: Decimal, consumed_cost: Decimal, proceeds: Decimal) -> None:
        self.quantity -= sold_quantity
        self.cost_basis -= consumed_cost
        self.recompute_avg_cost()
        self.realized_pnl += proceeds - consumed_cost

    def apply_split(self, ratio: Decimal) -> None:
        for lot in self.lots:
            lot.quantity *= ratio
            lot.cost_per_unit /= ratio
        self.quantity *= ratio
        # cost_basis is unchanged by a split
        self.recompute_avg_cost()

    def recompute_avg_cost(self) -> None:
        if self.quantity > 0:
            self.avg_cost = self.cost_basis / self.quantity
        else:
            self.avg_cost = Decimal(0)

    def is_open(self) -> bool:
        return self.quantity > 0

    def __repr__(self) -> str:
        return (f"Position(asset_id='{self.asset_id}', symbol='{self.symbol}', "
                f"qty={self.quantity}, cost_basis={self.cost_basis}, "
                f"open_lots={[l.transaction_id for l in self.lots]})")
