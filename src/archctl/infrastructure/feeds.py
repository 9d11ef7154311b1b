"""Workspace file I/O — the catalog and seed feeds as one YAML document.

Layout::

    active: arr-legacy
    catalog:
      - id: svc-onprem-db
        name: Legacy SQL Cluster (On-Prem)
        type: DATABASE
        contract_metrics: [...]
        is_experimental: false
        evaluation_status: VALIDATED
    arrangements:
      - id: arr-legacy
        name: Legacy On-Premise
        parent_id: null
        created_at: '2025-01-01T00:00:00+00:00'
        container: {id, version_label, hypothesis, active_rules: [...]}
        services: [...]

Malformed documents fail here, at load time, with :class:`FeedError`.
Nothing downstream re-validates.
"""

from __future__ import annotations

import logging
import os
from io import StringIO
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ValidationError, model_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from archctl.domain.models import Arrangement, ArrangementState, ExternalService
from archctl.infrastructure.graph.engine import LineageGraph

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """A workspace document could not be read or failed validation."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        prefix = f"{path}: " if path is not None else ""
        super().__init__(f"{prefix}{message}")


class WorkspaceDocument(BaseModel):
    """Validated contents of a workspace file."""

    model_config = {"frozen": True}

    active: str | None = None
    catalog: tuple[ExternalService, ...] = ()
    arrangements: tuple[Arrangement, ...]

    @model_validator(mode="after")
    def _unique_catalog_ids(self) -> Self:
        ids = [s.id for s in self.catalog]
        if len(ids) != len(set(ids)):
            msg = "catalog service ids must be unique"
            raise ValueError(msg)
        return self

    def to_state(self) -> ArrangementState:
        """Build the arrangement state; the first arrangement is active by default."""
        if not self.arrangements:
            msg = "workspace has no arrangements"
            raise FeedError(msg)
        active = self.active or self.arrangements[0].id
        try:
            state = ArrangementState(arrangements=self.arrangements, active_id=active)
        except ValidationError as exc:
            raise FeedError(_first_error(exc)) from exc

        lineage = LineageGraph(state)
        if not lineage.is_forest():
            cycle = " -> ".join(lineage.find_cycle())
            msg = f"arrangement lineage contains a cycle: {cycle}"
            raise FeedError(msg)
        return state

    @classmethod
    def from_state(
        cls,
        state: ArrangementState,
        catalog: tuple[ExternalService, ...],
    ) -> WorkspaceDocument:
        return cls(active=state.active_id, catalog=catalog, arrangements=state.arrangements)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def _new_yaml() -> YAML:
    """Create a fresh YAML emitter for one dump (the object is stateful)."""
    y = YAML()
    y.default_flow_style = False
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def parse_workspace(text: str, *, path: Path | None = None) -> WorkspaceDocument:
    """Parse and validate workspace YAML text."""
    try:
        data: Any = YAML(typ="safe").load(text)
    except YAMLError as exc:
        raise FeedError(f"invalid YAML: {exc}", path=path) from exc

    if not isinstance(data, dict):
        raise FeedError("workspace document must be a mapping", path=path)

    try:
        doc = WorkspaceDocument.model_validate(data)
    except ValidationError as exc:
        raise FeedError(_first_error(exc), path=path) from exc

    try:
        doc.to_state()
    except FeedError as exc:
        raise FeedError(str(exc), path=path) from exc
    return doc


def load_workspace(path: Path) -> WorkspaceDocument:
    """Read and validate a workspace file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FeedError(f"cannot read workspace: {exc}", path=path) from exc
    doc = parse_workspace(text, path=path)
    logger.debug(
        "Loaded workspace %s (%d arrangements, %d catalog services)",
        path,
        len(doc.arrangements),
        len(doc.catalog),
    )
    return doc


def render_workspace(doc: WorkspaceDocument) -> str:
    """Serialize *doc* to YAML text."""
    payload = doc.model_dump(mode="json")
    buf = StringIO()
    _new_yaml().dump(payload, buf)
    return buf.getvalue()


def dump_workspace(doc: WorkspaceDocument, path: Path) -> None:
    """Write *doc* to *path*, creating parent directories as needed.

    The document is written to a sibling temp file and moved into place,
    so *path* holds either the previous document or the new one, never a
    partial write.

    Raises:
        FeedError: If the file cannot be written. *path* is left as it was.
    """
    text = render_workspace(doc)
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise FeedError(f"cannot write workspace: {exc}", path=path) from exc
    logger.debug("Wrote workspace %s", path)
