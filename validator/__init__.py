"""
Instantiation Validator Module

This module runs the token instantiation checks as an ordered set of rules
and reports the first rejection, if any, in a serialisable summary.
"""

from .core import (
    ValidationEngine,
    ValidationContext,
    ValidationRule,
    ValidationResult,
    ValidationError,
    ConfigurationError,
    create_default_validator,
    validate_instantiate_quick
)

from .rules import (
    NameFormatRule,
    SymbolFormatRule,
    DecimalsRule
)

__all__ = [
    "ValidationEngine",
    "ValidationContext",
    "ValidationRule",
    "ValidationResult",
    "ValidationError",
    "ConfigurationError",
    "create_default_validator",
    "validate_instantiate_quick",
    "NameFormatRule",
    "SymbolFormatRule",
    "DecimalsRule"
]
