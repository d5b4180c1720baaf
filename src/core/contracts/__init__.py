"""
Contract Validation Module

Сериализованная форма Decimal и валидация JSON контрактов.
"""

from .records import DecimalRecord
from .validators import (
    ContractValidator,
    DecimalRecordValidator,
    SchemaLoader,
    validate_decimal_record,
)

__all__ = [
    # Models
    "DecimalRecord",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalRecordValidator",
    # Functions
    "validate_decimal_record",
]
