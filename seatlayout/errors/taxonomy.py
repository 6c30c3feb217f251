"""
errors/taxonomy.py - Layout error taxonomy

Structured exception types raised by the layout engine. Every error
carries a stable code, a category and a details dict so API layers can
translate them into transport responses without parsing messages.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from seatlayout.layout.validation import ValidationIssue


# =============================================================================
# CATEGORIES AND CODES
# =============================================================================

class ErrorCategory(Enum):
    """Categories of layout errors."""
    CONFIGURATION = "configuration"  # Inconsistent layout spec (caller bug)
    VALIDATION = "validation"        # Submitted layout data is invalid


class ValidationErrorCode(str, Enum):
    """Reason codes for rejected layout submissions."""
    MISSING_REQUIRED_FIELDS = "MISSING_REQUIRED_FIELDS"
    SEAT_NUMBER_REQUIRED = "SEAT_NUMBER_REQUIRED"
    DUPLICATE_POSITIONS = "DUPLICATE_POSITIONS"
    DUPLICATE_SEAT_NUMBERS = "DUPLICATE_SEAT_NUMBERS"
    INVALID_FLOOR_NUMBER = "INVALID_FLOOR_NUMBER"
    INVALID_ROW_NUMBER = "INVALID_ROW_NUMBER"
    INVALID_COLUMN_NUMBER = "INVALID_COLUMN_NUMBER"
    FLOOR_CONFIG_NOT_FOUND = "FLOOR_CONFIG_NOT_FOUND"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"


# =============================================================================
# BASE ERROR CLASS
# =============================================================================

class LayoutError(Exception):
    """
    Base class for layout engine errors.

    Provides:
    - Error code for programmatic handling
    - Human-readable message
    - Offending values in ``details`` for diagnostics
    """

    code: str = "LAYOUT_000"
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str = "",
        *,
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Layout error"
        self.details = dict(details or {})
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# =============================================================================
# SPECIFIC ERROR TYPES
# =============================================================================

class ConfigurationError(LayoutError):
    """Layout specification is internally inconsistent."""

    code = "LAYOUT_CONFIG"
    category = ErrorCategory.CONFIGURATION


class ValidationError(LayoutError):
    """
    Submitted layout data violates a structural or uniqueness rule.

    ``code`` is the ValidationErrorCode of the first violation. In
    collect mode ``issues`` holds every violation found, in input order.
    """

    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        code: ValidationErrorCode,
        message: str,
        *,
        issues: Optional[List["ValidationIssue"]] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        super().__init__(message, details=details, **kwargs)
        self.code = ValidationErrorCode(code)
        self.issues = list(issues or [])

    @property
    def codes(self) -> List[ValidationErrorCode]:
        """All reason codes carried by this error, first violation first."""
        if not self.issues:
            return [self.code]
        return [issue.code for issue in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.code.value
        data["issues"] = [issue.to_dict() for issue in self.issues]
        return data

    def __str__(self) -> str:
        text = f"[{self.code.value}] {self.message}"
        if len(self.issues) > 1:
            text += f" (+{len(self.issues) - 1} more)"
        return text


def floor_config_not_found(floor_number: int) -> ValidationError:
    """Factory for the missing floor error raised during validation/reconciliation."""
    return ValidationError(
        ValidationErrorCode.FLOOR_CONFIG_NOT_FOUND,
        f"Floor configuration not found for floor {floor_number}",
        floor_number=floor_number,
    )
