"""
Symbol Format Rule

This module implements the SymbolFormatRule class that validates ticker
symbols against the [a-zA-Z-]{3,12} format.
"""

from validator.core import ValidationRule, ValidationContext
from tokenmsg.exceptions import InvalidSymbolError
from tokenmsg.schema import SYMBOL_ALLOWED_CHARS, is_valid_symbol


class SymbolFormatRule(ValidationRule):
    """
    Validation rule that enforces the ticker symbol format.

    Symbols are compared literally: no case folding and no uniqueness check
    against other tokens.
    """

    def __init__(self):
        super().__init__(
            name="symbol_format",
            description="Enforces [a-zA-Z-]{3,12} ticker symbols"
        )

    def validate(self, context: ValidationContext) -> bool:
        symbol = context.msg.symbol
        if is_valid_symbol(symbol):
            return True

        bad_chars = sorted({char for char in symbol if char not in SYMBOL_ALLOWED_CHARS})
        if bad_chars:
            context.add_warning(self.name, f"Disallowed characters: {''.join(bad_chars)!r}")
        return self.reject(context, InvalidSymbolError())
