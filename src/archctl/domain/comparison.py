"""Structural comparison of two arrangements.

Services are partitioned by id. Rules are evaluated separately for each
side with that side's own rules and services; they are never merged.
"""

from __future__ import annotations

from pydantic import BaseModel

from archctl.domain.evaluation import get_evaluated_rules
from archctl.domain.models import Arrangement, ArrangementState, EvaluatedRule, ExternalService
from archctl.domain.types import ValidationStatus


class StatusDivergence(BaseModel):
    """A service both sides hold, with different evaluation status."""

    model_config = {"frozen": True}

    service_id: str
    name: str
    status_a: ValidationStatus
    status_b: ValidationStatus


class ComparisonResult(BaseModel):
    """Side-by-side view of arrangements A and B.

    ``common`` reports A's copies; ``status_divergence`` lists the common
    services whose status differs between the two sides.
    """

    model_config = {"frozen": True}

    unique_to_a: tuple[ExternalService, ...] = ()
    unique_to_b: tuple[ExternalService, ...] = ()
    common: tuple[ExternalService, ...] = ()
    evaluated_rules_a: tuple[EvaluatedRule, ...] = ()
    evaluated_rules_b: tuple[EvaluatedRule, ...] = ()
    status_divergence: tuple[StatusDivergence, ...] = ()


def compare(a: Arrangement, b: Arrangement | None) -> ComparisonResult:
    """Compare *a* against *b*. An unset *b* yields an empty result."""
    if b is None:
        return ComparisonResult()

    ids_a = set(a.service_ids())
    ids_b = set(b.service_ids())

    divergence: list[StatusDivergence] = []
    for service in a.services:
        other = b.find_service(service.id)
        if other is not None and other.evaluation_status != service.evaluation_status:
            divergence.append(
                StatusDivergence(
                    service_id=service.id,
                    name=service.name,
                    status_a=service.evaluation_status,
                    status_b=other.evaluation_status,
                )
            )

    return ComparisonResult(
        unique_to_a=tuple(s for s in a.services if s.id not in ids_b),
        unique_to_b=tuple(s for s in b.services if s.id not in ids_a),
        common=tuple(s for s in a.services if s.id in ids_b),
        evaluated_rules_a=tuple(get_evaluated_rules(a)),
        evaluated_rules_b=tuple(get_evaluated_rules(b)),
        status_divergence=tuple(divergence),
    )


def comparison_candidates(state: ArrangementState, a_id: str) -> list[Arrangement]:
    """Arrangements that can be compared against *a_id* (all others)."""
    return [arr for arr in state.arrangements if arr.id != a_id]
