"""Entity models — services, rules, container versions, arrangements.

All models are frozen Pydantic models and every sequence is a tuple, so
a published entity can never change underneath a reader. "Mutation"
always means building a replacement with ``model_copy(update=...)`` or
one of the explicit copy constructors below.

Validation runs once, when a feed is loaded. A blank rule matcher, a
duplicate service id within one arrangement, or a dangling parent
reference is rejected there instead of producing odd verdicts later.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from archctl.domain.types import RuleStatus, ServiceType, Severity, ValidationStatus


def _duplicates(values: list[str]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for value in values:
        if value in seen and value not in dupes:
            dupes.append(value)
        seen.add(value)
    return dupes


class ExternalService(BaseModel):
    """A service an arrangement depends on, with its claimed contract.

    ``contract_metrics`` are free-text capability claims that rule
    matchers search. ``evaluation_status`` is the externally supplied
    verdict on whether those claims hold.
    """

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    name: str
    type: ServiceType
    contract_metrics: tuple[str, ...] = ()
    is_experimental: bool = False
    evaluation_status: ValidationStatus = ValidationStatus.VALIDATED

    def clone(self) -> ExternalService:
        """Return an independent copy of this service."""
        return self.model_copy(deep=True)

    def with_status(self, status: ValidationStatus) -> ExternalService:
        """Return a copy carrying a different evaluation status."""
        return self.model_copy(update={"evaluation_status": status})


class Rule(BaseModel):
    """A declarative predicate over service contract metrics."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    description: str
    severity: Severity
    matcher: str

    @field_validator("matcher")
    @classmethod
    def _matcher_not_blank(cls, value: str) -> str:
        # A blank matcher is a substring of every metric.
        if not value.strip():
            msg = "rule matcher must not be blank"
            raise ValueError(msg)
        return value


class EvaluatedRule(BaseModel):
    """A rule paired with its derived verdict.

    Recomputed on every read; never stored as a source of truth.
    """

    model_config = {"frozen": True}

    rule: Rule
    status: RuleStatus
    matching_services: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return self.rule.id

    @property
    def description(self) -> str:
        return self.rule.description

    @property
    def severity(self) -> Severity:
        return self.rule.severity

    @property
    def matcher(self) -> str:
        return self.rule.matcher


class ContainerVersion(BaseModel):
    """The hypothesis and rule set behind one arrangement."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    version_label: str
    hypothesis: str = ""
    active_rules: tuple[Rule, ...] = ()

    @model_validator(mode="after")
    def _unique_rule_ids(self) -> Self:
        dupes = _duplicates([r.id for r in self.active_rules])
        if dupes:
            msg = f"duplicate rule ids in container '{self.id}': {', '.join(dupes)}"
            raise ValueError(msg)
        return self

    def clone(self, *, new_id: str, version_label: str, hypothesis: str) -> ContainerVersion:
        """Copy constructor used when forking.

        Rules are carried over unchanged (they are immutable); everything
        else identifying the container is replaced.
        """
        return ContainerVersion(
            id=new_id,
            version_label=version_label,
            hypothesis=hypothesis,
            active_rules=tuple(r.model_copy() for r in self.active_rules),
        )


class Arrangement(BaseModel):
    """A named snapshot: one container version plus a concrete service set."""

    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    name: str
    container: ContainerVersion
    services: tuple[ExternalService, ...] = ()
    parent_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _unique_service_ids(self) -> Self:
        dupes = _duplicates([s.id for s in self.services])
        if dupes:
            msg = f"duplicate service ids in arrangement '{self.id}': {', '.join(dupes)}"
            raise ValueError(msg)
        return self

    def service_ids(self) -> list[str]:
        return [s.id for s in self.services]

    def has_service(self, service_id: str) -> bool:
        return any(s.id == service_id for s in self.services)

    def find_service(self, service_id: str) -> ExternalService | None:
        for service in self.services:
            if service.id == service_id:
                return service
        return None


class ArrangementState(BaseModel):
    """The canonical arrangement collection plus the active selection.

    Every version-graph operation takes a state and returns a state. A
    no-op returns the very same object, so ``new is old`` tells callers
    nothing changed.
    """

    model_config = {"frozen": True}

    arrangements: tuple[Arrangement, ...]
    active_id: str

    @model_validator(mode="after")
    def _consistent(self) -> Self:
        if not self.arrangements:
            msg = "at least one arrangement is required"
            raise ValueError(msg)
        ids = [a.id for a in self.arrangements]
        dupes = _duplicates(ids)
        if dupes:
            msg = f"duplicate arrangement ids: {', '.join(dupes)}"
            raise ValueError(msg)
        known = set(ids)
        if self.active_id not in known:
            msg = f"active arrangement '{self.active_id}' does not exist"
            raise ValueError(msg)
        for arr in self.arrangements:
            if arr.parent_id is not None and arr.parent_id not in known:
                msg = f"arrangement '{arr.id}' has unknown parent '{arr.parent_id}'"
                raise ValueError(msg)
        return self

    @property
    def active(self) -> Arrangement:
        arr = self.get(self.active_id)
        assert arr is not None
        return arr

    def ids(self) -> list[str]:
        return [a.id for a in self.arrangements]

    def container_ids(self) -> list[str]:
        return [a.container.id for a in self.arrangements]

    def get(self, arrangement_id: str) -> Arrangement | None:
        for arr in self.arrangements:
            if arr.id == arrangement_id:
                return arr
        return None

    def replace(self, arrangement: Arrangement) -> ArrangementState:
        """Return a new state with the same-id arrangement swapped out."""
        arrangements = tuple(
            arrangement if a.id == arrangement.id else a for a in self.arrangements
        )
        return self.model_copy(update={"arrangements": arrangements})
