"""Typed payload contracts for service boundaries.

Services build plain dicts and validate them against these models before
they leave the service layer, so a renamed key (``items`` vs
``services``) fails in tests instead of in a renderer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from archctl.domain.comparison import StatusDivergence
from archctl.domain.models import Arrangement, EvaluatedRule, ExternalService


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, object]) -> dict[str, object]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


# --- Row shapes ---


class ServiceItem(BaseModel):
    """One service row."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    type: str
    contract_metrics: list[str]
    is_experimental: bool
    evaluation_status: str


class RuleItem(BaseModel):
    """One evaluated rule row."""

    id: str
    description: str
    severity: str
    matcher: str
    status: str
    matching_services: list[str]


class ArrangementItem(BaseModel):
    """One arrangement summary row."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    version_label: str
    parent_id: str | None = None
    active: bool
    service_count: int
    rule_count: int
    created_at: str


class RuleSummary(BaseModel):
    """Verdict counts for one arrangement."""

    SATISFIED: int = 0
    VIOLATED: int = 0
    NOT_EVALUABLE: int = 0


def service_item(service: ExternalService, **extra: object) -> dict[str, object]:
    return {
        "id": service.id,
        "name": service.name,
        "type": str(service.type),
        "contract_metrics": list(service.contract_metrics),
        "is_experimental": service.is_experimental,
        "evaluation_status": str(service.evaluation_status),
        **extra,
    }


def rule_item(evaluated: EvaluatedRule) -> dict[str, object]:
    return {
        "id": evaluated.id,
        "description": evaluated.description,
        "severity": str(evaluated.severity),
        "matcher": evaluated.matcher,
        "status": str(evaluated.status),
        "matching_services": list(evaluated.matching_services),
    }


def arrangement_item(arr: Arrangement, *, active_id: str, **extra: object) -> dict[str, object]:
    return {
        "id": arr.id,
        "name": arr.name,
        "version_label": arr.container.version_label,
        "parent_id": arr.parent_id,
        "active": arr.id == active_id,
        "service_count": len(arr.services),
        "rule_count": len(arr.container.active_rules),
        "created_at": arr.created_at.isoformat(),
        **extra,
    }


# --- Query payloads ---


class ListArrangementsData(BaseModel):
    """Payload contract for ``QueryService.list_arrangements``."""

    active_id: str
    count: int
    items: list[ArrangementItem]


class ContainerData(BaseModel):
    id: str
    version_label: str
    hypothesis: str


class ArrangementDetailData(BaseModel):
    """Payload contract for ``QueryService.get_arrangement``."""

    id: str
    name: str
    parent_id: str | None = None
    active: bool
    created_at: str
    container: ContainerData
    services: list[ServiceItem]
    rules: list[RuleItem]
    summary: RuleSummary


class CatalogData(BaseModel):
    """Payload contract for ``QueryService.catalog``."""

    arrangement_id: str | None = None
    count: int
    items: list[ServiceItem]


# --- Evaluation payloads ---


class EvaluateRulesData(BaseModel):
    """Payload contract for ``EvaluationService.rules``."""

    arrangement_id: str
    name: str
    version_label: str
    count: int
    summary: RuleSummary
    items: list[RuleItem]


class ComparedSide(BaseModel):
    id: str
    name: str
    version_label: str
    hypothesis: str


class DivergenceItem(BaseModel):
    service_id: str
    name: str
    status_a: str
    status_b: str


class CompareData(BaseModel):
    """Payload contract for ``EvaluationService.compare``."""

    a: ComparedSide
    b: ComparedSide | None = None
    unique_to_a: list[ServiceItem] = Field(default_factory=list)
    unique_to_b: list[ServiceItem] = Field(default_factory=list)
    common: list[ServiceItem] = Field(default_factory=list)
    rules_a: list[RuleItem] = Field(default_factory=list)
    rules_b: list[RuleItem] = Field(default_factory=list)
    status_divergence: list[DivergenceItem] = Field(default_factory=list)
    candidates: list[ArrangementItem] = Field(default_factory=list)


def divergence_item(item: StatusDivergence) -> dict[str, object]:
    return item.model_dump(mode="json")


# --- Mutation payloads ---


class ForkData(BaseModel):
    """Payload contract for ``VersionService.fork``."""

    changed: bool
    source_id: str
    id: str | None = None
    name: str | None = None
    version_label: str | None = None
    active_id: str


class ToggleServiceData(BaseModel):
    """Payload contract for ``VersionService.toggle_service``."""

    changed: bool
    arrangement_id: str
    service_id: str
    action: Literal["added", "removed"] | None = None
    service_count: int | None = None


class UpdateHypothesisData(BaseModel):
    """Payload contract for ``VersionService.update_hypothesis``."""

    changed: bool
    arrangement_id: str
    hypothesis: str | None = None


class CycleStatusData(BaseModel):
    """Payload contract for ``VersionService.cycle_status``."""

    changed: bool
    arrangement_id: str
    service_id: str
    previous: str | None = None
    status: str | None = None


class ActivateData(BaseModel):
    """Payload contract for ``VersionService.activate``."""

    changed: bool
    id: str
    previous: str


# --- Lineage payloads ---


class LineageNode(BaseModel):
    id: str
    name: str
    version_label: str
    children: list[LineageNode] = Field(default_factory=list)


class LineageTreeData(BaseModel):
    """Payload contract for ``LineageService.tree``."""

    count: int
    roots: list[str]
    tree: list[LineageNode]


class LineageListData(BaseModel):
    """Payload contract for ``LineageService.ancestors`` / ``descendants``."""

    id: str
    count: int
    items: list[ArrangementItem]


class InitWorkspaceData(BaseModel):
    """Payload contract for ``InitService.init_workspace``."""

    path: str
    arrangements: int
    catalog: int
    active_id: str
