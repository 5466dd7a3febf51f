"""Outcome of an in-place validated mutation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationResult:
    """Result of a validation check.

    A failed check leaves the validated object untouched; ``errors``
    explains why the value was refused.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
