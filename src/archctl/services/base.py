"""BaseService — shared foundation for all archctl services.

Every service receives a :class:`Workspace` at construction time. Reads
go through ``self._workspace.state``; writes go through
``self._workspace.apply(fn)`` with a pure function from
:mod:`archctl.domain.versioning`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from archctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from archctl.domain.models import Arrangement
    from archctl.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class VersionService(BaseService):
            def fork(self, source_id: str | None = None) -> ServiceResult:
                before, after = self._workspace.apply(...)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _target_id(self, arrangement_id: str | None) -> str:
        """Explicit arrangement id, or the active one when None."""
        return arrangement_id or self._workspace.state.active_id

    def _resolve(self, arrangement_id: str | None) -> Arrangement | None:
        return self._workspace.state.get(self._target_id(arrangement_id))

    @staticmethod
    def _not_found(op: str, kind: str, ident: str) -> ServiceResult:
        """Error result for a read that referenced a missing id."""
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="NOT_FOUND",
                message=f"{kind.capitalize()} '{ident}' not found",
                detail={kind: ident},
            ),
        )
