"""
Decimals Rule

This module implements the DecimalsRule class that bounds the fractional
precision of a token to at most 18 decimal places.
"""

from validator.core import ValidationRule, ValidationContext
from tokenmsg.exceptions import InvalidDecimalsError
from tokenmsg.schema import MAX_DECIMALS, is_valid_decimals


class DecimalsRule(ValidationRule):
    """Validation rule that rejects more than 18 decimal places."""

    def __init__(self):
        super().__init__(
            name="decimals",
            description=f"Limits decimal precision to {MAX_DECIMALS}"
        )

    def validate(self, context: ValidationContext) -> bool:
        if not is_valid_decimals(context.msg.decimals):
            return self.reject(context, InvalidDecimalsError())
        return True
