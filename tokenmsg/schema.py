"""
Token Instantiation Message Models

This module defines the Pydantic models describing a fungible-token
instantiation message and the checks that gate it before any token state is
created: name length, ticker symbol format and decimal precision.

Decoding (types, required fields, integer ranges) is handled by the models
themselves. The semantic checks live in ``InstantiateMsg.validate`` so that a
decoded message can be rejected with one of the fixed rejection reasons.
"""

import re
import string
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    WithJsonSchema,
    model_validator,
)

from .exceptions import InvalidDecimalsError, InvalidNameError, InvalidSymbolError


NAME_MIN_BYTES = 3
NAME_MAX_BYTES = 50
SYMBOL_MIN_BYTES = 3
SYMBOL_MAX_BYTES = 12
MAX_DECIMALS = 18

UINT8_MAX = 2**8 - 1
UINT128_MAX = 2**128 - 1

SYMBOL_ALLOWED_CHARS = frozenset(string.ascii_uppercase + string.ascii_lowercase + "-")


def _parse_uint128(value: Any) -> int:
    """Accept the decimal-string wire form or a plain integer."""
    if isinstance(value, bool):
        raise ValueError("Uint128 must be a decimal string or an integer")
    if isinstance(value, str):
        if not re.fullmatch(r'[0-9]+', value):
            raise ValueError("Uint128 string must contain only decimal digits")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError("Uint128 must be a decimal string or an integer")
    if value < 0 or value > UINT128_MAX:
        raise ValueError("Uint128 value out of range")
    return value


Uint128 = Annotated[
    int,
    BeforeValidator(_parse_uint128),
    PlainSerializer(lambda v: str(v), return_type=str, when_used="json"),
    WithJsonSchema({"type": "string", "pattern": "^[0-9]+$", "description": "128-bit unsigned integer"}),
]


def _require_utf8(value: str) -> str:
    """Reject strings holding lone surrogates, which have no UTF-8 form."""
    try:
        value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValueError("String must be valid UTF-8") from e
    return value


Utf8Str = Annotated[str, AfterValidator(_require_utf8)]


class MintingPolicy(str, Enum):
    """Minting authority configured by an instantiation message."""
    DISABLED = "disabled"
    UNCAPPED = "uncapped"
    CAPPED = "capped"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Cw20Coin(_FrozenModel):
    """Initial balance allocation. Opaque to instantiation checks."""

    address: str = Field(..., description="Recipient address")
    amount: Uint128 = Field(..., description="Initial balance")


class MinterResponse(_FrozenModel):
    """Minting authority with an optional hard ceiling on total supply."""

    minter: str = Field(..., description="Address allowed to mint new supply")
    cap: Optional[Uint128] = Field(None, description="Maximum total supply, if any")


class EmbeddedLogo(_FrozenModel):
    """Logo stored on chain, either SVG or PNG, base64 encoded."""

    svg: Optional[str] = Field(None, description="Base64 encoded SVG")
    png: Optional[str] = Field(None, description="Base64 encoded PNG")

    @model_validator(mode='after')
    def validate_single_variant(self):
        """Exactly one embedded format must be set."""
        if (self.svg is None) == (self.png is None):
            raise ValueError('Embedded logo must be exactly one of "svg" or "png"')
        return self


class Logo(_FrozenModel):
    """Token logo: a URL or an embedded image."""

    url: Optional[str] = Field(None, description="Link to an externally hosted logo")
    embedded: Optional[EmbeddedLogo] = Field(None, description="Logo stored on chain")

    @model_validator(mode='after')
    def validate_single_variant(self):
        """Exactly one logo variant must be set."""
        if (self.url is None) == (self.embedded is None):
            raise ValueError('Logo must be exactly one of "url" or "embedded"')
        return self


class InstantiateMarketingInfo(_FrozenModel):
    """Free-form marketing metadata, never checked for content."""

    project: Optional[str] = None
    description: Optional[str] = None
    marketing: Optional[str] = Field(None, description="Marketing contact address")
    logo: Optional[Logo] = None


def is_valid_name(name: str) -> bool:
    """Check that the name is between 3 and 50 UTF-8 bytes long."""
    length = len(name.encode('utf-8', 'surrogatepass'))
    return NAME_MIN_BYTES <= length <= NAME_MAX_BYTES


def is_symbol_char(char: str) -> bool:
    """ASCII letter of either case, or a hyphen."""
    return char in SYMBOL_ALLOWED_CHARS


def is_valid_symbol(symbol: str) -> bool:
    """Check the 3-12 byte length and the [a-zA-Z-] allow-list."""
    length = len(symbol.encode('utf-8', 'surrogatepass'))
    if length < SYMBOL_MIN_BYTES or length > SYMBOL_MAX_BYTES:
        return False
    # Any non-ASCII character fails the allow-list, so checking characters
    # is equivalent to checking every encoded byte.
    return all(is_symbol_char(char) for char in symbol)


def is_valid_decimals(decimals: int) -> bool:
    return decimals <= MAX_DECIMALS


class InstantiateMsg(_FrozenModel):
    """
    Fungible token instantiation message.

    Constructed once from an incoming message, checked once with
    ``validate`` and then handed to the caller that creates token state.
    """

    name: Utf8Str = Field(..., description="Human readable token name")
    symbol: Utf8Str = Field(..., description="Ticker symbol")
    decimals: int = Field(..., ge=0, le=UINT8_MAX, strict=True, description="Fractional precision (u8)")
    initial_balances: List[Cw20Coin] = Field(..., description="Initial allocations, passed through unchecked")
    mint: Optional[MinterResponse] = None
    marketing: Optional[InstantiateMarketingInfo] = None

    def get_cap(self) -> Optional[int]:
        """
        Return the supply cap, if any.

        ``None`` both when minting is disabled and when the minter is
        uncapped; use ``minting_policy`` to tell those apart.
        """
        if self.mint is None:
            return None
        return self.mint.cap

    def minting_policy(self) -> MintingPolicy:
        if self.mint is None:
            return MintingPolicy.DISABLED
        if self.mint.cap is None:
            return MintingPolicy.UNCAPPED
        return MintingPolicy.CAPPED

    def validate(self) -> None:
        """
        Check name, symbol and decimals, in that order.

        Raises:
            InvalidNameError: name is not 3-50 UTF-8 bytes
            InvalidSymbolError: symbol is not [a-zA-Z-]{3,12}
            InvalidDecimalsError: decimals exceed 18
        """
        if not is_valid_name(self.name):
            raise InvalidNameError()
        if not is_valid_symbol(self.symbol):
            raise InvalidSymbolError()
        if not is_valid_decimals(self.decimals):
            raise InvalidDecimalsError()
