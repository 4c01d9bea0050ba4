"""
Instantiation Validator Rules Module

This module contains the concrete rules applied to token instantiation
messages, in the order the engine registers them: name, symbol, decimals.
"""

from .name_format import NameFormatRule
from .symbol_format import SymbolFormatRule
from .decimals import DecimalsRule

__all__ = [
    "NameFormatRule",
    "SymbolFormatRule",
    "DecimalsRule"
]
