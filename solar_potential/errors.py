"""Error taxonomy for the estimation pipeline."""

from __future__ import annotations

import math


class InvalidInput(ValueError):
    """An estimation input violated its constraint.

    Attributes:
        field: Wire (camelCase) name of the offending input.
        constraint: The violated constraint, e.g. ``">= 0"`` or ``"in (0, 1]"``.
        value: The rejected value.
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"{field} must be {constraint}, got {value!r}")

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "constraint": self.constraint, "message": str(self)}


def require_finite(field: str, value: float) -> float:
    """Return *value* as ``float`` or raise ``InvalidInput`` for NaN/inf/non-numbers."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(field, "a number", value) from None
    if not math.isfinite(number):
        raise InvalidInput(field, "finite", value)
    return number
