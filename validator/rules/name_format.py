"""
Name Format Rule

This module implements the NameFormatRule class that rejects token names
whose UTF-8 encoding is shorter than 3 or longer than 50 bytes.
"""

from validator.core import ValidationRule, ValidationContext
from tokenmsg.exceptions import InvalidNameError
from tokenmsg.schema import is_valid_name


class NameFormatRule(ValidationRule):
    """
    Validation rule that enforces the token name length.

    Length is measured in encoded bytes, so multi-byte characters count by
    their UTF-8 size.
    """

    def __init__(self):
        super().__init__(
            name="name_format",
            description="Enforces 3-50 UTF-8 byte token names"
        )

    def validate(self, context: ValidationContext) -> bool:
        name = context.msg.name
        if not is_valid_name(name):
            return self.reject(context, InvalidNameError())

        self.logger.debug(f"Name length ok: {len(name.encode('utf-8', 'surrogatepass'))} bytes")
        return True
