"""QueryService — read-only views of arrangements and the service catalog."""

from __future__ import annotations

from archctl.domain.evaluation import get_evaluated_rules, summarize
from archctl.services.base import BaseService
from archctl.services.contracts import (
    ArrangementDetailData,
    CatalogData,
    ListArrangementsData,
    arrangement_item,
    dump_validated,
    rule_item,
    service_item,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import traced


class QueryService(BaseService):
    """Lists and inspects arrangements."""

    @traced
    def list_arrangements(self) -> ServiceResult:
        """All arrangements in collection order, active one flagged."""
        state = self._workspace.state
        items = [arrangement_item(a, active_id=state.active_id) for a in state.arrangements]
        data = dump_validated(
            ListArrangementsData,
            {"active_id": state.active_id, "count": len(items), "items": items},
        )
        return ServiceResult(ok=True, op="list_arrangements", data=data)

    @traced
    def get_arrangement(self, arrangement_id: str | None = None) -> ServiceResult:
        """Full detail of one arrangement, including freshly evaluated rules."""
        arr = self._resolve(arrangement_id)
        if arr is None:
            return self._not_found("get_arrangement", "arrangement", self._target_id(arrangement_id))

        evaluated = get_evaluated_rules(arr)
        data = dump_validated(
            ArrangementDetailData,
            {
                "id": arr.id,
                "name": arr.name,
                "parent_id": arr.parent_id,
                "active": arr.id == self._workspace.state.active_id,
                "created_at": arr.created_at.isoformat(),
                "container": {
                    "id": arr.container.id,
                    "version_label": arr.container.version_label,
                    "hypothesis": arr.container.hypothesis,
                },
                "services": [service_item(s) for s in arr.services],
                "rules": [rule_item(r) for r in evaluated],
                "summary": summarize(evaluated),
            },
        )
        return ServiceResult(ok=True, op="get_arrangement", data=data)

    @traced
    def catalog(self, arrangement_id: str | None = None) -> ServiceResult:
        """The service catalog, each entry flagged with membership in an arrangement.

        With no *arrangement_id* membership is reported for the active
        arrangement.
        """
        arr = self._resolve(arrangement_id)
        if arr is None:
            return self._not_found("catalog", "arrangement", self._target_id(arrangement_id))

        items = [
            service_item(s, in_arrangement=arr.has_service(s.id)) for s in self._workspace.catalog
        ]
        data = dump_validated(
            CatalogData,
            {"arrangement_id": arr.id, "count": len(items), "items": items},
        )
        return ServiceResult(ok=True, op="catalog", data=data)
