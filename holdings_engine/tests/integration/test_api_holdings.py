# holdings_engine/tests/integration/test_api_holdings.py

import pytest
from fastapi.testclient import TestClient
from holdings_engine.api.main import app
from holdings_engine.core.models.response import HoldingsResponse, ValuationResponse
from holdings_engine.core.enums.asset_type import PriceSource
from decimal import Decimal


@pytest.fixture(scope="module")
def client():
    """Provides a TestClient for the FastAPI application."""
    with TestClient(app) as c:
        yield c

ASSETS = {
    "asset-infy": {"symbol": "INFY", "name": "Infosys Ltd", "asset_type": "stock"},
    "asset-ppfas": {"symbol": "PPFAS", "name": "Parag Parikh Flexi Cap Fund", "asset_type": "mutual_fund"},
}

def get_sample_transaction(id, type, quantity=None, price=None, fee="0", asset_id="asset-infy",
                           date_str="2024-01-05", time_str="10:00:00", amount=None):
    return {
        "id": id,
        "type": type,
        "asset_id": asset_id,
        "portfolio_account_id": "acct-zerodha",
        "quantity": quantity,
        "price": price,
        "fee": fee,
        "amount": amount,
        "trade_date": date_str,
        "created_at": f"{date_str}T{time_str}Z",
        "currency": "INR"
    }

# --- Test Cases ---

def test_holdings_fifo_buy_buy_sell(client):
    request_body = {
        "transactions": [
            get_sample_transaction("s1", "sell", quantity="12", price="150", fee="20", date_str="2024-03-01"),
            get_sample_transaction("b2", "buy", quantity="10", price="200", date_str="2024-02-01"),
            get_sample_transaction("b1", "buy", quantity="10", price="100", date_str="2024-01-01"),
        ],
        "assets": ASSETS
    }
    response = client.post("/api/v1/holdings", json=request_body)

    assert response.status_code == 200
    response_data = HoldingsResponse(**response.json())
    assert len(response_data.holdings) == 1

    holding = response_data.holdings[0]
    assert holding.asset_id == "asset-infy"
    assert holding.symbol == "INFY"
    assert holding.quantity == Decimal("8")
    assert holding.avg_cost == Decimal("200")
    assert holding.cost_basis == Decimal("1600")
    # proceeds 1800 - 20, consumed 1400
    assert holding.realized_pnl == Decimal("380")
    assert response_data.invested_amount == Decimal("1220")
    assert response_data.errored_transactions == []


def test_holdings_decimals_serialized_as_strings(client):
    request_body = {
        "transactions": [get_sample_transaction("b1", "buy", quantity="3", price="10.10", fee="0.30")],
        "assets": ASSETS
    }
    response = client.post("/api/v1/holdings", json=request_body)

    holding = response.json()["holdings"][0]
    assert isinstance(holding["cost_basis"], str)
    assert Decimal(holding["cost_basis"]) == Decimal("30.60")
    assert Decimal(holding["avg_cost"]) == Decimal("10.20")


def test_holdings_split_then_sell(client):
    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="10", price="100", fee="20", date_str="2024-01-01"),
            get_sample_transaction("sp", "split", quantity="2", date_str="2024-02-01"),
            get_sample_transaction("s1", "sell", quantity="5", price="60", date_str="2024-03-01"),
        ],
        "assets": ASSETS
    }
    response = client.post("/api/v1/holdings", json=request_body)

    holding = HoldingsResponse(**response.json()).holdings[0]
    assert holding.quantity == Decimal("15")
    assert holding.avg_cost == Decimal("51")
    assert holding.cost_basis == Decimal("765")
    assert holding.realized_pnl == Decimal("45") # 300 - 5 * 51


def test_holdings_closed_position_omitted(client):
    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="5", price="100", date_str="2024-01-01"),
            get_sample_transaction("s1", "sell", quantity="5", price="90", date_str="2024-01-02"),
        ],
        "assets": ASSETS
    }
    response_data = HoldingsResponse(**client.post("/api/v1/holdings", json=request_body).json())

    assert response_data.holdings == []
    assert response_data.invested_amount == Decimal("50")


def test_holdings_invalid_record_is_reported_not_fatal(client):
    invalid = get_sample_transaction("b-bad", "buy", quantity="10", price="100")
    del invalid["trade_date"]

    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="1", price="100"),
            invalid,
        ],
        "assets": ASSETS
    }
    response = client.post("/api/v1/holdings", json=request_body)

    assert response.status_code == 200
    response_data = HoldingsResponse(**response.json())
    assert len(response_data.holdings) == 1
    assert len(response_data.errored_transactions) == 1
    errored = response_data.errored_transactions[0]
    assert errored.transaction_id == "b-bad"
    assert "field required" in errored.error_reason.lower()


def test_holdings_oversell_and_unknown_asset_are_skipped(client):
    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="10", price="100", date_str="2024-01-01"),
            get_sample_transaction("s-over", "sell", quantity="15", price="120", date_str="2024-01-02"),
            get_sample_transaction("b-ghost", "buy", quantity="1", price="1", asset_id="asset-unknown"),
        ],
        "assets": ASSETS
    }
    response = client.post("/api/v1/holdings", json=request_body)

    assert response.status_code == 200
    response_data = HoldingsResponse(**response.json())
    assert response_data.holdings == []
    assert response_data.errored_transactions == []
    assert {e.transaction_id for e in response_data.skipped_transactions} == {"s-over", "b-ghost"}


def test_holdings_account_level_events(client):
    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="10", price="100", date_str="2024-01-01"),
            get_sample_transaction("fee1", "fee", asset_id=None, amount="15", date_str="2024-01-02"),
            get_sample_transaction("div1", "dividend", asset_id=None, amount="40", date_str="2024-01-03"),
        ],
        "assets": ASSETS
    }
    response_data = HoldingsResponse(**client.post("/api/v1/holdings", json=request_body).json())

    assert response_data.holdings[0].cost_basis == Decimal("1000")
    assert response_data.invested_amount == Decimal("1015")
    assert response_data.skipped_transactions == []


def test_holdings_malformed_body_is_unprocessable(client):
    response = client.post("/api/v1/holdings", json={"assets": ASSETS})
    assert response.status_code == 422


def test_valuation_endpoint(client):
    request_body = {
        "transactions": [
            get_sample_transaction("b1", "buy", quantity="10", price="100", date_str="2024-01-01"),
            get_sample_transaction("b2", "buy", quantity="200", price="50", asset_id="asset-ppfas", date_str="2024-01-01"),
        ],
        "assets": ASSETS,
        "equity_prices": {"asset-infy": {"price": "125", "currency": "INR"}},
        "mf_navs": {"asset-ppfas": {"nav": "55.5", "nav_date": "2024-06-28"}}
    }
    response = client.post("/api/v1/holdings/valuation", json=request_body)

    assert response.status_code == 200
    response_data = ValuationResponse(**response.json())
    by_id = {h.asset_id: h for h in response_data.holdings}

    assert by_id["asset-infy"].market_value == Decimal("1250")
    assert by_id["asset-infy"].unrealized_pnl == Decimal("250")
    assert by_id["asset-infy"].unrealized_pnl_pct == Decimal("25")
    assert by_id["asset-infy"].price_source == PriceSource.YAHOO

    assert by_id["asset-ppfas"].market_value == Decimal("11100")
    assert by_id["asset-ppfas"].unrealized_pnl == Decimal("1100")
    assert by_id["asset-ppfas"].price_source == PriceSource.AMFI
    assert str(by_id["asset-ppfas"].price_date) == "2024-06-28"


def test_valuation_without_prices_is_manual(client):
    request_body = {
        "transactions": [get_sample_transaction("b1", "buy", quantity="10", price="100")],
        "assets": ASSETS
    }
    response_data = ValuationResponse(**client.post("/api/v1/holdings/valuation", json=request_body).json())

    holding = response_data.holdings[0]
    assert holding.price_source == PriceSource.MANUAL
    assert holding.market_value is None
    assert holding.cost_basis == Decimal("1000")


def test_root_redirects_to_docs(client):
    response = client.get("/", follow_redirects=False)
    assert response.status_code in (302, 307)
    assert response.headers["location"] == "/docs"
