"""Evaluation status cycle.

Evaluation status is set by hand. The only transition the engine offers
is a fixed round-robin used by the "cycle" action:

    VALIDATED -> CONFLICT -> UNCERTAIN -> VALIDATED
"""

from __future__ import annotations

from archctl.domain.types import ValidationStatus

EVALUATION_CYCLE: dict[ValidationStatus, ValidationStatus] = {
    ValidationStatus.VALIDATED: ValidationStatus.CONFLICT,
    ValidationStatus.CONFLICT: ValidationStatus.UNCERTAIN,
    ValidationStatus.UNCERTAIN: ValidationStatus.VALIDATED,
}


def next_evaluation_status(current: str) -> ValidationStatus:
    """Return the status that follows *current* in the cycle.

    Raises:
        ValueError: If *current* is not a ValidationStatus value.
    """
    return EVALUATION_CYCLE[ValidationStatus(current)]
