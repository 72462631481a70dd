# holdings_engine/logic/valuation.py

import logging
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Tuple

from holdings_engine.core.enums.asset_type import AssetType, PriceSource
from holdings_engine.core.models.holding import EquityQuote, Holding, HoldingWithPrice, NavQuote

logger = logging.getLogger(__name__)


def split_holdings_by_asset_type(
    holdings: Sequence[Holding],
    asset_types: Mapping[str, Optional[AssetType]]
) -> Tuple[list[Holding], list[Holding]]:
    """
    Partitions holdings into (equity, mutual fund). Anything that is not a
    mutual fund is priced from equity quotes.
    """
    equity: list[Holding] = []
    mutual_funds: list[Holding] = []
    for holding in holdings:
        if asset_types.get(holding.asset_id) == AssetType.MUTUAL_FUND:
            mutual_funds.append(holding)
        else:
            equity.append(holding)
    return equity, mutual_funds


def value_holding(
    holding: Holding,
    current_price: Optional[Decimal],
    source: PriceSource,
    price_date=None
) -> HoldingWithPrice:
    """
    Attaches market value and unrealized P&L. A missing or zero price leaves
    the valuation empty and marks the holding as manually priced.
    """
    if not current_price:
        return HoldingWithPrice(**holding.model_dump(), price_source=PriceSource.MANUAL)

    market_value = holding.quantity * current_price
    unrealized_pnl = market_value - holding.cost_basis
    unrealized_pnl_pct = None
    if holding.cost_basis > 0:
        unrealized_pnl_pct = unrealized_pnl / holding.cost_basis * 100

    return HoldingWithPrice(
        **holding.model_dump(),
        current_price=current_price,
        price_date=price_date,
        market_value=market_value,
        unrealized_pnl=unrealized_pnl,
        unrealized_pnl_pct=unrealized_pnl_pct,
        price_source=source
    )


def enrich_holdings_with_prices(
    equity_holdings: Sequence[Holding],
    mf_holdings: Sequence[Holding],
    equity_prices: Mapping[str, EquityQuote],
    mf_navs: Mapping[str, NavQuote]
) -> list[HoldingWithPrice]:
    """
    Values equity holdings from live quotes and mutual fund holdings from
    published NAVs. Prices are fetched by the caller and keyed by asset_id.
    Equity holdings come first in the result, then mutual funds.
    """
    enriched: list[HoldingWithPrice] = []

    for holding in equity_holdings:
        quote = equity_prices.get(holding.asset_id)
        enriched.append(value_holding(
            holding,
            quote.price if quote else None,
            PriceSource.YAHOO
        ))

    for holding in mf_holdings:
        nav = mf_navs.get(holding.asset_id)
        enriched.append(value_holding(
            holding,
            nav.nav if nav else None,
            PriceSource.AMFI,
            price_date=nav.nav_date if nav else None
        ))

    priced = sum(1 for h in enriched if h.price_source != PriceSource.MANUAL)
    logger.debug(f"Valued {priced} of {len(enriched)} holdings from live prices.")
    return enriched
