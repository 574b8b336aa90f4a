from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating user input. Errors are values, never raised."""

    is_valid: bool
    message: str | None = None

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(is_valid=True)

    @classmethod
    def error(cls, message: str) -> ValidationResult:
        return cls(is_valid=False, message=message)
