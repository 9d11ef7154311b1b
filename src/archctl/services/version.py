"""VersionService — fork, toggle, hypothesis, status cycle, activate.

Each method applies one pure function from :mod:`archctl.domain.versioning`
through :meth:`Workspace.apply`. A stale arrangement or service id is not
an error: the result is ``ok`` with ``changed=False`` and a warning.

``arrangement_id=None`` targets the active arrangement.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

import structlog

from archctl.domain import versioning
from archctl.services.base import BaseService
from archctl.services.contracts import (
    ActivateData,
    CycleStatusData,
    ForkData,
    ToggleServiceData,
    UpdateHypothesisData,
    dump_validated,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import traced

if TYPE_CHECKING:
    from archctl.domain.models import ArrangementState

log = structlog.get_logger(__name__)


class VersionService(BaseService):
    """Mutations of the arrangement version graph."""

    @traced
    def fork(self, source_id: str | None = None) -> ServiceResult:
        """Fork an arrangement (default: active) and make the fork active."""
        ws = self._workspace
        source = self._target_id(source_id)
        new_id: str | None = None

        def _fork(state: ArrangementState) -> ArrangementState:
            nonlocal new_id
            new_state, new_id = versioning.fork(
                state, source, ids=ws.ids, policy=ws.fork_policy
            )
            return new_state

        _before, after = ws.apply(_fork)

        if new_id is None:
            data = dump_validated(
                ForkData,
                {"changed": False, "source_id": source, "active_id": after.active_id},
            )
            return ServiceResult(
                ok=True,
                op="fork",
                data=data,
                warnings=[f"Arrangement '{source}' not found; nothing forked"],
            )

        forked = after.get(new_id)
        assert forked is not None
        log.info(
            "arrangement.forked",
            source_id=source,
            arrangement_id=new_id,
            version_label=forked.container.version_label,
        )
        data = dump_validated(
            ForkData,
            {
                "changed": True,
                "source_id": source,
                "id": forked.id,
                "name": forked.name,
                "version_label": forked.container.version_label,
                "active_id": after.active_id,
            },
        )
        return ServiceResult(ok=True, op="fork", data=data)

    @traced
    def toggle_service(self, service_id: str, arrangement_id: str | None = None) -> ServiceResult:
        """Remove a service if present, otherwise add a fresh copy from the catalog."""
        ws = self._workspace
        target = self._target_id(arrangement_id)
        before, after = ws.apply(
            partial(
                versioning.toggle_service,
                arrangement_id=target,
                service_id=service_id,
                catalog=ws.catalog,
            )
        )

        if after is before:
            reason = (
                f"Arrangement '{target}' not found"
                if before.get(target) is None
                else f"Service '{service_id}' is not in the catalog"
            )
            data = dump_validated(
                ToggleServiceData,
                {"changed": False, "arrangement_id": target, "service_id": service_id},
            )
            return ServiceResult(
                ok=True,
                op="toggle_service",
                data=data,
                warnings=[f"{reason}; nothing toggled"],
            )

        old_arr = before.get(target)
        new_arr = after.get(target)
        assert old_arr is not None and new_arr is not None
        action = "removed" if old_arr.has_service(service_id) else "added"
        log.info("service.toggled", arrangement_id=target, service_id=service_id, action=action)
        data = dump_validated(
            ToggleServiceData,
            {
                "changed": True,
                "arrangement_id": target,
                "service_id": service_id,
                "action": action,
                "service_count": len(new_arr.services),
            },
        )
        return ServiceResult(ok=True, op="toggle_service", data=data)

    @traced
    def update_hypothesis(self, text: str, arrangement_id: str | None = None) -> ServiceResult:
        """Replace the hypothesis of one arrangement's container."""
        target = self._target_id(arrangement_id)
        before, after = self._workspace.apply(
            partial(versioning.update_hypothesis, arrangement_id=target, text=text)
        )

        if after is before:
            warnings: list[str] = []
            if before.get(target) is None:
                warnings.append(f"Arrangement '{target}' not found; hypothesis unchanged")
            data = dump_validated(
                UpdateHypothesisData, {"changed": False, "arrangement_id": target}
            )
            return ServiceResult(
                ok=True, op="update_hypothesis", data=data, warnings=warnings
            )

        log.info("hypothesis.updated", arrangement_id=target, length=len(text))
        data = dump_validated(
            UpdateHypothesisData,
            {"changed": True, "arrangement_id": target, "hypothesis": text},
        )
        return ServiceResult(ok=True, op="update_hypothesis", data=data)

    @traced
    def cycle_status(self, service_id: str, arrangement_id: str | None = None) -> ServiceResult:
        """Advance one service's evaluation status to the next in the cycle."""
        target = self._target_id(arrangement_id)
        before, after = self._workspace.apply(
            partial(
                versioning.cycle_evaluation_status,
                arrangement_id=target,
                service_id=service_id,
            )
        )

        if after is before:
            reason = (
                f"Arrangement '{target}' not found"
                if before.get(target) is None
                else f"Service '{service_id}' not in arrangement '{target}'"
            )
            data = dump_validated(
                CycleStatusData,
                {"changed": False, "arrangement_id": target, "service_id": service_id},
            )
            return ServiceResult(
                ok=True,
                op="cycle_status",
                data=data,
                warnings=[f"{reason}; status unchanged"],
            )

        old_arr = before.get(target)
        new_arr = after.get(target)
        assert old_arr is not None and new_arr is not None
        old_svc = old_arr.find_service(service_id)
        new_svc = new_arr.find_service(service_id)
        assert old_svc is not None and new_svc is not None
        log.info(
            "status.cycled",
            arrangement_id=target,
            service_id=service_id,
            previous=str(old_svc.evaluation_status),
            status=str(new_svc.evaluation_status),
        )
        data = dump_validated(
            CycleStatusData,
            {
                "changed": True,
                "arrangement_id": target,
                "service_id": service_id,
                "previous": str(old_svc.evaluation_status),
                "status": str(new_svc.evaluation_status),
            },
        )
        return ServiceResult(ok=True, op="cycle_status", data=data)

    @traced
    def activate(self, arrangement_id: str) -> ServiceResult:
        """Select the active arrangement."""
        before, after = self._workspace.apply(
            partial(versioning.activate, arrangement_id=arrangement_id)
        )
        warnings: list[str] = []
        if after is before and before.get(arrangement_id) is None:
            warnings.append(f"Arrangement '{arrangement_id}' not found; active unchanged")

        data = dump_validated(
            ActivateData,
            {
                "changed": after is not before,
                "id": after.active_id,
                "previous": before.active_id,
            },
        )
        return ServiceResult(ok=True, op="activate", data=data, warnings=warnings)
