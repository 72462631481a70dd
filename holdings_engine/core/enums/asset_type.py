# holdings_engine/core/enums/asset_type.py

from enum import Enum

class AssetType(str, Enum):
    """
    Defines the asset classes known to the asset directory.
    """
    STOCK = "stock"
    MUTUAL_FUND = "mutual_fund"
    ETF = "etf"
    BOND = "bond"
    COMMODITY = "commodity"
    CRYPTO = "crypto"


class PriceSource(str, Enum):
    """
    Where the current price attached to a holding came from.
    MANUAL means no live price was available and the holding is shown at cost.
    """
    YAHOO = "yahoo"
    AMFI = "amfi"
    MANUAL = "manual"
