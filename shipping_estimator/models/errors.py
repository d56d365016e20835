"""
Validation errors raised while building estimation inputs.
"""

from __future__ import annotations

import math
from typing import Any


class PackagingValidationError(ValueError):
    """Raised when a cart line or packaging description cannot be estimated."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"{field} must be positive, got {value!r}")


def require_positive(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PackagingValidationError(name, value, f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise PackagingValidationError(name, value, f"{name} must be a finite number, got {value!r}")
    if value <= 0:
        raise PackagingValidationError(name, value)
    return value


def require_positive_int(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PackagingValidationError(name, value, f"{name} must be a whole number, got {value!r}")
    if value <= 0:
        raise PackagingValidationError(name, value)
    return value


def optional_positive(name: str, value: float | None) -> float | None:
    if value is None:
        return None
    return float(require_positive(name, value))
