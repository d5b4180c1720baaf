"""
Text codec для Decimal: разбор литералов и форматирование.
"""

from src.core.codec.text import (
    FORMAT_SPEC_DEFAULT_PRECISION,
    DecimalParseError,
    format_exponential,
    format_fixed,
    format_general,
    format_precision,
    format_with_spec,
    mantissa_with_decimal_places,
    parse_decimal,
)

__all__ = [
    # Constants
    "FORMAT_SPEC_DEFAULT_PRECISION",
    # Exceptions
    "DecimalParseError",
    # Parsing
    "parse_decimal",
    # Formatting
    "format_general",
    "format_exponential",
    "format_fixed",
    "format_precision",
    "format_with_spec",
    "mantissa_with_decimal_places",
]
