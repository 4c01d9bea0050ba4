"""
Token Instantiation Exceptions

This module defines the rejection reasons raised when a token instantiation
message is not well-formed. Each rejection is fatal to the instantiation
attempt; callers abort and surface the message unchanged.
"""

from typing import Dict, Optional, Type


class InstantiateError(Exception):
    """Base exception for all instantiation message rejections."""

    kind = "invalid_instantiate_msg"
    default_message = "Instantiate message is not in the expected format"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __eq__(self, other):
        if not isinstance(other, InstantiateError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self):
        return hash((type(self), self.message))


class InvalidNameError(InstantiateError):
    """Raised when the token name is outside 3-50 UTF-8 bytes."""

    kind = "invalid_name"
    default_message = "Name is not in the expected format (3-50 UTF-8 bytes)"


class InvalidSymbolError(InstantiateError):
    """Raised when the ticker symbol has a bad length or a disallowed byte."""

    kind = "invalid_symbol"
    default_message = "Ticker symbol is not in expected format [a-zA-Z\\-]{3,12}"


class InvalidDecimalsError(InstantiateError):
    """Raised when decimals exceed 18."""

    kind = "invalid_decimals"
    default_message = "Decimals must not exceed 18"


ERROR_CLASSES: Dict[str, Type[InstantiateError]] = {
    cls.kind: cls
    for cls in (InvalidNameError, InvalidSymbolError, InvalidDecimalsError)
}


def error_for_kind(kind: str, message: Optional[str] = None) -> InstantiateError:
    """Build the rejection instance registered for ``kind``."""
    try:
        error_class = ERROR_CLASSES[kind]
    except KeyError:
        raise ValueError(f"Unknown rejection kind: {kind}") from None
    return error_class(message)
