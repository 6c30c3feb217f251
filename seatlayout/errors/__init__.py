"""
errors/ - Layout error taxonomy

Structured exceptions raised by the generator, validator and
reconciliation engine.
"""

from .taxonomy import (
    ErrorCategory,
    ValidationErrorCode,
    LayoutError,
    ConfigurationError,
    ValidationError,
    floor_config_not_found,
)

__all__ = [
    "ErrorCategory",
    "ValidationErrorCode",
    "LayoutError",
    "ConfigurationError",
    "ValidationError",
    "floor_config_not_found",
]
