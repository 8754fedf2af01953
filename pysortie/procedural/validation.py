"""Validation and error handling for procedural mission generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

if TYPE_CHECKING:
    from ..classes.records import CommonSettings
    from .spec import MissionTemplate


class ProceduralGenerationError(Exception):
    """Base exception for procedural generation failures. Aborts the whole build."""
    pass


class ReferenceNotFoundError(ProceduralGenerationError):
    """Raised when a database id is unknown or a task does not fit its target."""
    pass


class AllocationExhaustedError(ProceduralGenerationError):
    """Raised when no spawn point or parking spot satisfies the requested constraints."""

    def __init__(self, message: str, constraints: Optional[dict] = None):
        super().__init__(message)
        self.constraints = constraints or {}


class ConstraintViolationError(ProceduralGenerationError):
    """Raised when objectives break a structural rule (land/sea mix, airbase sub-task)."""
    pass


class GroupCreationFailedError(ProceduralGenerationError):
    """Raised when the unit maker returns no units or no group."""
    pass


class InvalidTemplateError(ProceduralGenerationError):
    """Raised when the mission template is outside the database limits."""
    pass


@dataclass
class ValidationResult:
    """Result of a validation check."""
    valid: bool
    message: str = ""

    def raise_if_invalid(self, error_class: type = ProceduralGenerationError):
        """Raise an error if validation failed."""
        if not self.valid:
            raise error_class(self.message)


def describe_types(types: Iterable) -> str:
    """Comma separated spawn point type names for error messages."""
    return ", ".join(getattr(t, "value", str(t)) for t in types)


class TemplateValidator:
    """Validates a mission template against database-wide limits."""

    def __init__(self, common: "CommonSettings"):
        self.common = common

    def validate_objective_count(self, template: "MissionTemplate") -> ValidationResult:
        if not template.objectives:
            return ValidationResult(valid=False, message="Mission template has no objectives.")
        if len(template.objectives) > self.common.max_objectives:
            return ValidationResult(
                valid=False,
                message=f"Too many objectives: {len(template.objectives)} (maximum {self.common.max_objectives})"
            )
        return ValidationResult(valid=True)

    def validate_flight_plan(self, template: "MissionTemplate") -> ValidationResult:
        """
        Validate flight plan distance parameters (nautical miles).

        Returns:
            ValidationResult indicating if the flight plan ranges are usable
        """
        distance = template.flight_plan_objective_distance
        separation = template.flight_plan_objective_separation

        if distance.min > self.common.max_objective_distance:
            return ValidationResult(
                valid=False,
                message=f"Objective distance starts beyond the theater limit: {distance.min:.0f}NM "
                        f"(max {self.common.max_objective_distance}NM)"
            )

        if separation.min > self.common.max_objective_separation:
            return ValidationResult(
                valid=False,
                message=f"Objective separation starts beyond the limit: {separation.min:.0f}NM "
                        f"(max {self.common.max_objective_separation}NM)"
            )

        return ValidationResult(valid=True)

    def validate(self, template: "MissionTemplate"):
        """Run every check, raising InvalidTemplateError on the first failure."""
        self.validate_objective_count(template).raise_if_invalid(InvalidTemplateError)
        self.validate_flight_plan(template).raise_if_invalid(InvalidTemplateError)
