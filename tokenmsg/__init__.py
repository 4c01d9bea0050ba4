"""
Token Instantiation Message Package

Models and checks for fungible-token instantiation messages: name, ticker
symbol, decimals, initial balances, minting authority and marketing metadata.
"""

from .exceptions import (
    InstantiateError,
    InvalidNameError,
    InvalidSymbolError,
    InvalidDecimalsError,
    error_for_kind,
)
from .schema import (
    InstantiateMsg,
    InstantiateMarketingInfo,
    MinterResponse,
    Cw20Coin,
    Logo,
    EmbeddedLogo,
    MintingPolicy,
    is_valid_name,
    is_valid_symbol,
    is_valid_decimals,
)

__version__ = "0.1.0"

__all__ = [
    "InstantiateError",
    "InvalidNameError",
    "InvalidSymbolError",
    "InvalidDecimalsError",
    "error_for_kind",
    "InstantiateMsg",
    "InstantiateMarketingInfo",
    "MinterResponse",
    "Cw20Coin",
    "Logo",
    "EmbeddedLogo",
    "MintingPolicy",
    "is_valid_name",
    "is_valid_symbol",
    "is_valid_decimals",
]
