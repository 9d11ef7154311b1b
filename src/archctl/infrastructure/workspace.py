"""Workspace — owner of the current arrangement state.

The Workspace is the single dependency injected into every service. It
holds the current :class:`ArrangementState`, the service catalog, the id
allocator, and the fork policy, and it knows where the workspace file
lives.

State is replaced, never edited. :meth:`apply` runs a pure state
function and publishes its result under a lock, so "read current state,
compute, publish" is atomic with respect to other writers. A function
that returns the same state object is a no-op and publishes nothing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from archctl.domain.ids import CounterIdAllocator, IdAllocator, UuidIdAllocator
from archctl.domain.versioning import ForkPolicy
from archctl.infrastructure.feeds import WorkspaceDocument, dump_workspace, load_workspace
from archctl.infrastructure.graph.engine import LineageGraph
from archctl.infrastructure.scenario import build_scenario

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.domain.models import ArrangementState, ExternalService

logger = logging.getLogger(__name__)

type StateFn = Callable[[ArrangementState], ArrangementState]


def allocator_for(strategy: str) -> IdAllocator:
    """Return the id allocator configured by *strategy*."""
    if strategy == "uuid":
        return UuidIdAllocator()
    return CounterIdAllocator()


class Workspace:
    """In-memory arrangement state plus the file it was loaded from."""

    def __init__(
        self,
        state: ArrangementState,
        catalog: tuple[ExternalService, ...],
        *,
        path: Path | None = None,
        ids: IdAllocator | None = None,
        fork_policy: ForkPolicy | None = None,
    ) -> None:
        self._state = state
        self._catalog = catalog
        self._path = path
        self._ids = ids or CounterIdAllocator()
        self._fork_policy = fork_policy or ForkPolicy()
        self._lock = threading.RLock()
        self._dirty = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(cls, settings: ArchSettings) -> Workspace:
        """Load the configured workspace file, or the built-in scenario if absent."""
        path = settings.workspace_path
        if path.is_file():
            doc = load_workspace(path)
            state, catalog = doc.to_state(), doc.catalog
        else:
            logger.debug("No workspace at %s; using built-in scenario", path)
            state, catalog = build_scenario()

        policy = ForkPolicy(
            name_suffix=settings.fork.name_suffix,
            label_suffix=settings.fork.label_suffix,
            hypothesis=settings.fork.hypothesis,
            arrangement_prefix=settings.ids.arrangement_prefix,
            container_prefix=settings.ids.container_prefix,
        )
        return cls(
            state,
            catalog,
            path=path,
            ids=allocator_for(settings.ids.strategy),
            fork_policy=policy,
        )

    @classmethod
    def from_scenario(cls, *, path: Path | None = None) -> Workspace:
        state, catalog = build_scenario()
        return cls(state, catalog, path=path)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ArrangementState:
        return self._state

    @property
    def catalog(self) -> tuple[ExternalService, ...]:
        return self._catalog

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def ids(self) -> IdAllocator:
        return self._ids

    @property
    def fork_policy(self) -> ForkPolicy:
        return self._fork_policy

    @property
    def dirty(self) -> bool:
        """True when state changed since load or the last save."""
        return self._dirty

    @property
    def lineage(self) -> LineageGraph:
        """Lineage graph of the current state (rebuilt per access)."""
        return LineageGraph(self._state)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply(self, fn: StateFn) -> tuple[ArrangementState, ArrangementState]:
        """Publish ``fn(current)`` atomically.

        Returns ``(before, after)``; ``after is before`` means no change.
        """
        with self._lock:
            before = self._state
            after = fn(before)
            if after is not before:
                self._state = after
                self._dirty = True
            return before, after

    # ------------------------------------------------------------------
    # Persistence of the feed file
    # ------------------------------------------------------------------

    def to_document(self) -> WorkspaceDocument:
        return WorkspaceDocument.from_state(self._state, self._catalog)

    def save(self, path: Path | None = None) -> Path:
        """Write the current state and catalog to the workspace file."""
        target = path or self._path
        if target is None:
            msg = "workspace has no file path"
            raise ValueError(msg)
        with self._lock:
            dump_workspace(self.to_document(), target)
            self._dirty = False
        return target
