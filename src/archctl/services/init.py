"""InitService — write a workspace file seeded with the built-in scenario."""

from __future__ import annotations

import logging

from archctl.infrastructure.feeds import FeedError, WorkspaceDocument, dump_workspace
from archctl.infrastructure.scenario import build_scenario
from archctl.services.base import BaseService
from archctl.services.contracts import InitWorkspaceData, dump_validated
from archctl.services.result import ServiceError, ServiceResult
from archctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class InitService(BaseService):
    """Creates workspace files."""

    @traced
    def init_workspace(self, *, force: bool = False) -> ServiceResult:
        """Write the built-in scenario to the workspace path.

        Refuses to overwrite an existing file unless *force* is set.
        """
        path = self._workspace.path
        if path is None:
            return ServiceResult(
                ok=False,
                op="init_workspace",
                error=ServiceError(code="NO_PATH", message="Workspace has no file path"),
            )
        if path.exists() and not force:
            return ServiceResult(
                ok=False,
                op="init_workspace",
                error=ServiceError(
                    code="WORKSPACE_EXISTS",
                    message=f"Workspace file already exists: {path}",
                    detail={"path": str(path), "hint": "Use --force to overwrite"},
                ),
            )

        state, catalog = build_scenario()
        try:
            dump_workspace(WorkspaceDocument.from_state(state, catalog), path)
        except FeedError as exc:
            return ServiceResult(
                ok=False,
                op="init_workspace",
                error=ServiceError(
                    code="WRITE_FAILED",
                    message=str(exc),
                    detail={"path": str(path)},
                ),
            )
        logger.info("Initialized workspace at %s", path)

        data = dump_validated(
            InitWorkspaceData,
            {
                "path": str(path),
                "arrangements": len(state.arrangements),
                "catalog": len(catalog),
                "active_id": state.active_id,
            },
        )
        return ServiceResult(ok=True, op="init_workspace", data=data)
