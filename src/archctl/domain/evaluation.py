"""Rule evaluation — (rule, services) -> verdict.

A service is *relevant* to a rule when any of its contract metrics
contains the rule's matcher, compared case-insensitively. The verdict
then depends only on the evaluation status of the relevant services:

- none relevant: CRITICAL rules are VIOLATED, others NOT_EVALUABLE
- any CONFLICT: VIOLATED
- any UNCERTAIN: NOT_EVALUABLE
- all VALIDATED: SATISFIED

Pure functions; nothing here is cached, so results always reflect the
services passed in.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from archctl.domain.models import Arrangement, EvaluatedRule, ExternalService, Rule
from archctl.domain.types import RuleStatus, Severity, ValidationStatus


def matches(rule: Rule, service: ExternalService) -> bool:
    """Whether any of *service*'s metrics contains *rule*'s matcher."""
    needle = rule.matcher.casefold()
    return any(needle in metric.casefold() for metric in service.contract_metrics)


def evaluate(rule: Rule, services: Sequence[ExternalService]) -> EvaluatedRule:
    """Evaluate *rule* against one arrangement's services."""
    relevant = [s for s in services if matches(rule, s)]

    if not relevant:
        status = (
            RuleStatus.VIOLATED if rule.severity == Severity.CRITICAL else RuleStatus.NOT_EVALUABLE
        )
    else:
        statuses = {s.evaluation_status for s in relevant}
        if ValidationStatus.CONFLICT in statuses:
            status = RuleStatus.VIOLATED
        elif ValidationStatus.UNCERTAIN in statuses:
            status = RuleStatus.NOT_EVALUABLE
        else:
            status = RuleStatus.SATISFIED

    return EvaluatedRule(
        rule=rule,
        status=status,
        matching_services=tuple(s.name for s in relevant),
    )


def get_evaluated_rules(arrangement: Arrangement) -> list[EvaluatedRule]:
    """Evaluate every active rule of *arrangement*, in rule order."""
    return [evaluate(rule, arrangement.services) for rule in arrangement.container.active_rules]


def summarize(evaluated: Iterable[EvaluatedRule]) -> dict[str, int]:
    """Count verdicts per status. Every status is present, zero if unused."""
    counts = {str(status): 0 for status in RuleStatus}
    for item in evaluated:
        counts[str(item.status)] += 1
    return counts
