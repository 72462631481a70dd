# holdings_engine/tests/unit/test_lot_objects.py

import pytest
from datetime import date
from decimal import Decimal

from holdings_engine.logic.lot_objects import Lot, Position

@pytest.fixture
def position():
    """A position with two open lots: 10 @ 100 and 10 @ 200."""
    position = Position(asset_id="A", symbol="INFY", name="Infosys Ltd")
    position.add_lot(Lot("B1", Decimal("10"), Decimal("100"), date(2024, 1, 1)))
    position.add_lot(Lot("B2", Decimal("10"), Decimal("200"), date(2024, 2, 1)))
    return position

def test_add_lot_updates_totals(position):
    assert position.quantity == Decimal("20")
    assert position.cost_basis == Decimal("3000")
    assert position.avg_cost == Decimal("150")
    assert [lot.transaction_id for lot in position.lots] == ["B1", "B2"]

def test_consume_fifo_whole_and_partial_lot(position):
    consumed_cost, sold_quantity = position.consume_fifo(Decimal("12"))

    assert consumed_cost == Decimal("1400")
    assert sold_quantity == Decimal("12")
    assert [lot.transaction_id for lot in position.lots] == ["B2"]
    assert position.lots[0].quantity == Decimal("8")

def test_consume_fifo_exact_lot_removes_it(position):
    consumed_cost, sold_quantity = position.consume_fifo(Decimal("10"))

    assert consumed_cost == Decimal("1000")
    assert sold_quantity == Decimal("10")
    assert [lot.transaction_id for lot in position.lots] == ["B2"]
    assert position.lots[0].quantity == Decimal("10")

def test_consume_fifo_partial_keeps_lot_in_place(position):
    position.consume_fifo(Decimal("3"))

    assert [lot.transaction_id for lot in position.lots] == ["B1", "B2"]
    assert position.lots[0].quantity == Decimal("7")

def test_consume_fifo_beyond_available(position):
    consumed_cost, sold_quantity = position.consume_fifo(Decimal("25"))

    assert consumed_cost == Decimal("3000")
    assert sold_quantity == Decimal("20")
    assert position.lots == []

@pytest.mark.parametrize("requested", [Decimal("0"), Decimal("-4")])
def test_consume_fifo_non_positive_request_sells_nothing(position, requested):
    consumed_cost, sold_quantity = position.consume_fifo(requested)

    assert consumed_cost == Decimal("0")
    assert sold_quantity == Decimal("0")
    assert len(position.lots) == 2

def test_close_units_to_zero_resets_avg_cost(position):
    consumed_cost, sold_quantity = position.consume_fifo(Decimal("20"))
    position.close_units(sold_quantity, consumed_cost, proceeds=Decimal("3500"))

    assert position.quantity == Decimal("0")
    assert position.cost_basis == Decimal("0")
    assert position.avg_cost == Decimal("0")
    assert position.realized_pnl == Decimal("500")
    assert position.is_open() is False

def test_apply_split_on_empty_position():
    position = Position(asset_id="A", symbol="INFY", name="Infosys Ltd")
    position.apply_split(Decimal("2"))

    assert position.quantity == Decimal("0")
    assert position.avg_cost == Decimal("0")

def test_lot_total_cost():
    lot = Lot("B1", Decimal("4"), Decimal("2.5"), date(2024, 1, 1))
    assert lot.total_cost == Decimal("10.0")
    assert "B1" in repr(lot)
