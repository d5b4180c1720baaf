"""
Domain value objects.

Contains the Decimal big-number value object.
"""

from src.core.domain.big_decimal import Decimal, DecimalLike

__all__ = [
    "Decimal",
    "DecimalLike",
]
