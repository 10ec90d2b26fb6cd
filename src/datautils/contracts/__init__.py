"""
Contract Validation Module

Валидация JSON запросов datautils по формальным JSON Schema контрактам.
"""

from .validators import (
    CONTRACT_NAMES,
    ContractValidator,
    SchemaLoader,
    validate_contract,
    validator_for,
)

__all__ = [
    "CONTRACT_NAMES",
    "SchemaLoader",
    "ContractValidator",
    "validator_for",
    "validate_contract",
]
