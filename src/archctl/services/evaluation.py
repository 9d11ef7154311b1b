"""EvaluationService — rule verdicts and side-by-side comparison.

Verdicts are recomputed on every call from the current state. Nothing
here caches an EvaluatedRule.
"""

from __future__ import annotations

from typing import Any

from archctl.domain.comparison import compare, comparison_candidates
from archctl.domain.evaluation import get_evaluated_rules, summarize
from archctl.domain.models import Arrangement
from archctl.services.base import BaseService
from archctl.services.contracts import (
    CompareData,
    EvaluateRulesData,
    arrangement_item,
    divergence_item,
    dump_validated,
    rule_item,
    service_item,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import trace_span, traced


def _side(arr: Arrangement) -> dict[str, Any]:
    return {
        "id": arr.id,
        "name": arr.name,
        "version_label": arr.container.version_label,
        "hypothesis": arr.container.hypothesis,
    }


class EvaluationService(BaseService):
    """Evaluates rules and compares arrangements."""

    @traced
    def rules(self, arrangement_id: str | None = None) -> ServiceResult:
        """Evaluate every active rule of one arrangement (default: active)."""
        arr = self._resolve(arrangement_id)
        if arr is None:
            return self._not_found("evaluate_rules", "arrangement", self._target_id(arrangement_id))

        with trace_span("evaluate") as span:
            evaluated = get_evaluated_rules(arr)
            if span:
                span.annotate("rules", len(evaluated))
                span.annotate("services", len(arr.services))

        data = dump_validated(
            EvaluateRulesData,
            {
                "arrangement_id": arr.id,
                "name": arr.name,
                "version_label": arr.container.version_label,
                "count": len(evaluated),
                "summary": summarize(evaluated),
                "items": [rule_item(r) for r in evaluated],
            },
        )
        return ServiceResult(ok=True, op="evaluate_rules", data=data)

    @traced
    def compare(self, a_id: str | None = None, b_id: str | None = None) -> ServiceResult:
        """Compare arrangement A (default: active) against B.

        A missing or unknown B is treated as "not chosen yet": the diff
        and rule lists come back empty, along with the candidates B may
        be picked from.
        """
        state = self._workspace.state
        a = self._resolve(a_id)
        if a is None:
            return self._not_found("compare", "arrangement", self._target_id(a_id))

        warnings: list[str] = []
        b = state.get(b_id) if b_id else None
        if b_id and b is None:
            warnings.append(f"Comparison target '{b_id}' not found; no target selected")

        with trace_span("compare") as span:
            result = compare(a, b)
            if span:
                span.annotate("unique_to_a", len(result.unique_to_a))
                span.annotate("unique_to_b", len(result.unique_to_b))
                span.annotate("common", len(result.common))

        candidates = [
            arrangement_item(arr, active_id=state.active_id)
            for arr in comparison_candidates(state, a.id)
        ]
        data = dump_validated(
            CompareData,
            {
                "a": _side(a),
                "b": _side(b) if b is not None else None,
                "unique_to_a": [service_item(s) for s in result.unique_to_a],
                "unique_to_b": [service_item(s) for s in result.unique_to_b],
                "common": [service_item(s) for s in result.common],
                "rules_a": [rule_item(r) for r in result.evaluated_rules_a],
                "rules_b": [rule_item(r) for r in result.evaluated_rules_b],
                "status_divergence": [divergence_item(d) for d in result.status_divergence],
                "candidates": candidates,
            },
        )
        return ServiceResult(ok=True, op="compare", data=data, warnings=warnings)
