"""
layout/validation.py - Space configuration validation

Checks a submitted list of space configurations against structural and
uniqueness rules, and optionally against the bounds of a layout spec.

Pass 1 (always): required fields, seat numbers, duplicate positions and
duplicate seat numbers. Pass 2 (with a layout spec): floor, row and
column bounds. Violations are produced in input order, pass 1 first.
"""

from dataclasses import dataclass, field
from itertools import chain
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence
import logging

from seatlayout.bootstrap.config import ValidationConfig
from seatlayout.errors.taxonomy import ValidationError, ValidationErrorCode
from seatlayout.layout.models import LayoutSpec
from seatlayout.layout.schema import SpaceConfigInput, coerce_space_configs

__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "LayoutValidator",
    "check_space_configs",
    "validate_space_configs",
    "VALIDATION_MESSAGES",
]

logger = logging.getLogger(__name__)


VALIDATION_MESSAGES = {
    ValidationErrorCode.MISSING_REQUIRED_FIELDS:
        "Missing required fields: floor_number and position are required for space identification",
    ValidationErrorCode.SEAT_NUMBER_REQUIRED:
        "Seat number is required for seat spaces",
    ValidationErrorCode.DUPLICATE_POSITIONS:
        "Duplicate position {key} found in payload",
    ValidationErrorCode.DUPLICATE_SEAT_NUMBERS:
        "Duplicate seat number {seat_number} found in payload",
    ValidationErrorCode.INVALID_FLOOR_NUMBER:
        "Invalid floor number {floor_number}. Must be between 1 and {max_floors}",
    ValidationErrorCode.FLOOR_CONFIG_NOT_FOUND:
        "Floor configuration not found for floor {floor_number}",
    ValidationErrorCode.INVALID_ROW_NUMBER:
        "Invalid row number {row} for floor {floor_number}. Must be between 1 and {max_rows}",
    ValidationErrorCode.INVALID_COLUMN_NUMBER:
        "Invalid column number {column} for floor {floor_number}. Must be between 0 and {max_column}",
}


# =============================================================================
# VALIDATION ISSUE
# =============================================================================

@dataclass
class ValidationIssue:
    """
    A single violation found in a submitted layout.

    Attributes:
        code: Reason code
        message: Human-readable description
        index: Position of the offending item in the submitted list
        details: Offending values
    """

    code: ValidationErrorCode
    message: str
    index: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, code: ValidationErrorCode, index: Optional[int] = None, **details) -> "ValidationIssue":
        message = VALIDATION_MESSAGES[code].format(**details)
        return cls(code=code, message=message, index=index, details=details)

    def to_error(self, issues: Optional[List["ValidationIssue"]] = None) -> ValidationError:
        return ValidationError(
            self.code,
            self.message,
            issues=issues,
            details={"index": self.index, **self.details},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "index": self.index,
            "details": self.details,
        }


# =============================================================================
# VALIDATION RESULT
# =============================================================================

@dataclass
class ValidationResult:
    """
    Every violation found in a submitted layout.

    Attributes:
        is_valid: Whether the layout passes validation
        issues: Violations in the order they were found
        checked_items: Number of configurations inspected
    """

    is_valid: bool = True
    issues: List[ValidationIssue] = field(default_factory=list)
    checked_items: int = 0

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)
        self.is_valid = False

    def get_issues_by_code(self, code: ValidationErrorCode) -> List[ValidationIssue]:
        return [i for i in self.issues if i.code == code]

    @property
    def codes(self) -> List[ValidationErrorCode]:
        return [i.code for i in self.issues]

    def raise_if_invalid(self) -> None:
        """Raise one ValidationError carrying every issue."""
        if self.issues:
            raise self.issues[0].to_error(issues=self.issues)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "is_valid": self.is_valid,
            "issues": [i.to_dict() for i in self.issues],
            "checked_items": self.checked_items,
        }


# =============================================================================
# CHECKS
# =============================================================================

def _structural_issues(configs: Sequence[SpaceConfigInput]) -> Iterator[ValidationIssue]:
    """Pass 1: required fields and uniqueness."""
    position_keys = set()
    seat_numbers = set()

    for index, config in enumerate(configs):
        if config.key is None:
            yield ValidationIssue.create(ValidationErrorCode.MISSING_REQUIRED_FIELDS, index)
            continue

        if config.is_seat and not config.seat_number:
            yield ValidationIssue.create(
                ValidationErrorCode.SEAT_NUMBER_REQUIRED, index,
                key=str(config.key),
            )

        key = str(config.key)
        if key in position_keys:
            yield ValidationIssue.create(ValidationErrorCode.DUPLICATE_POSITIONS, index, key=key)
        position_keys.add(key)

        if config.is_seat and config.seat_number:
            if config.seat_number in seat_numbers:
                yield ValidationIssue.create(
                    ValidationErrorCode.DUPLICATE_SEAT_NUMBERS, index,
                    seat_number=config.seat_number,
                )
            seat_numbers.add(config.seat_number)


def _bound_issues(
    configs: Sequence[SpaceConfigInput],
    layout_spec: LayoutSpec,
) -> Iterator[ValidationIssue]:
    """Pass 2: positions must fall inside the layout spec."""
    for index, config in enumerate(configs):
        if config.key is None:
            continue

        floor_number = config.floor_number
        if floor_number > layout_spec.num_floors:
            yield ValidationIssue.create(
                ValidationErrorCode.INVALID_FLOOR_NUMBER, index,
                floor_number=floor_number,
                max_floors=layout_spec.num_floors,
            )
            continue

        floor_spec = layout_spec.floor(floor_number)
        if floor_spec is None:
            yield ValidationIssue.create(
                ValidationErrorCode.FLOOR_CONFIG_NOT_FOUND, index,
                floor_number=floor_number,
            )
            continue

        row = config.position.y
        if row < 1 or row > floor_spec.num_rows:
            yield ValidationIssue.create(
                ValidationErrorCode.INVALID_ROW_NUMBER, index,
                row=row,
                floor_number=floor_number,
                max_rows=floor_spec.num_rows,
            )

        # Any column up to the outer bound is allowed for any space type,
        # including the aisle (foldable seats, vans, last-row benches)
        column = config.position.x
        if column < 0 or column > floor_spec.max_column:
            yield ValidationIssue.create(
                ValidationErrorCode.INVALID_COLUMN_NUMBER, index,
                column=column,
                floor_number=floor_number,
                max_column=floor_spec.max_column,
            )


def _issues(
    configs: Sequence[SpaceConfigInput],
    layout_spec: Optional[LayoutSpec],
) -> Iterator[ValidationIssue]:
    if layout_spec is None:
        return _structural_issues(configs)
    return chain(_structural_issues(configs), _bound_issues(configs, layout_spec))


# =============================================================================
# VALIDATOR
# =============================================================================

class LayoutValidator:
    """
    Validates submitted space configurations.

    Fail-fast mode raises on the first violation; collect mode raises a
    single ValidationError whose ``issues`` lists every violation.
    """

    def __init__(self, config: Optional[ValidationConfig] = None):
        self._config = config or ValidationConfig()

    def check(
        self,
        space_configs: Iterable[Any],
        layout_spec: Optional[LayoutSpec] = None,
    ) -> ValidationResult:
        """Collect every violation without raising."""
        configs = coerce_space_configs(space_configs)
        result = ValidationResult(checked_items=len(configs))
        for issue in _issues(configs, layout_spec):
            result.add_issue(issue)
        return result

    def validate(
        self,
        space_configs: Iterable[Any],
        layout_spec: Optional[LayoutSpec] = None,
        collect_all: Optional[bool] = None,
    ) -> List[SpaceConfigInput]:
        """
        Validate configurations, raising on violation.

        Args:
            space_configs: SpaceConfigInput models or plain dicts
            layout_spec: When given, positions are checked against its bounds
            collect_all: Override the configured mode

        Returns:
            The parsed configurations

        Raises:
            ValidationError: On the first violation (or all, in collect mode)
        """
        if collect_all is None:
            collect_all = self._config.collect_all

        configs = coerce_space_configs(space_configs)

        if collect_all:
            result = ValidationResult(checked_items=len(configs))
            for issue in _issues(configs, layout_spec):
                result.add_issue(issue)
            if not result.is_valid:
                logger.debug(f"Layout validation failed with {len(result.issues)} issue(s)")
            result.raise_if_invalid()
        else:
            first = next(_issues(configs, layout_spec), None)
            if first is not None:
                logger.debug(f"Layout validation failed: {first.code.value} at index {first.index}")
                raise first.to_error()

        logger.debug(f"Validated {len(configs)} space configuration(s)")
        return configs


def validate_space_configs(
    space_configs: Iterable[Any],
    layout_spec: Optional[LayoutSpec] = None,
    *,
    collect_all: Optional[bool] = None,
    config: Optional[ValidationConfig] = None,
) -> List[SpaceConfigInput]:
    """Validate configurations; see LayoutValidator.validate."""
    return LayoutValidator(config).validate(space_configs, layout_spec, collect_all)


def check_space_configs(
    space_configs: Iterable[Any],
    layout_spec: Optional[LayoutSpec] = None,
) -> ValidationResult:
    """Return every violation without raising."""
    return LayoutValidator().check(space_configs, layout_spec)
