"""Shared pytest fixtures and test helpers for archctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from archctl.domain.models import (
    Arrangement,
    ArrangementState,
    ContainerVersion,
    ExternalService,
    Rule,
)
from archctl.domain.types import ServiceType, Severity, ValidationStatus
from archctl.infrastructure.scenario import build_scenario
from archctl.infrastructure.workspace import Workspace


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``--verbose`` enables telemetry on the current context; undo it."""
    yield
    from archctl.services.telemetry import _current_span, disable_telemetry

    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def scenario() -> tuple[ArrangementState, tuple[ExternalService, ...]]:
    """Fresh ``(state, catalog)`` of the built-in migration scenario."""
    return build_scenario()


@pytest.fixture
def workspace() -> Workspace:
    """In-memory workspace seeded with the built-in scenario (no file)."""
    return Workspace.from_scenario()


@pytest.fixture
def workspace_file(tmp_path: Path) -> Path:
    return tmp_path / "arrangements.yaml"


@pytest.fixture
def file_workspace(workspace_file: Path) -> Workspace:
    """Scenario workspace bound to a (not yet written) file under tmp_path."""
    return Workspace.from_scenario(path=workspace_file)


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from an empty temp directory.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes. The workspace file resolves to ``tmp_path/arrangements.yaml``.
    """
    monkeypatch.delenv("ARCHCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_service(
    service_id: str,
    *metrics: str,
    status: ValidationStatus = ValidationStatus.VALIDATED,
    name: str | None = None,
) -> ExternalService:
    """Build a service with the given contract metrics."""
    return ExternalService(
        id=service_id,
        name=name or service_id.replace("_", " ").title(),
        type=ServiceType.API,
        contract_metrics=metrics,
        evaluation_status=status,
    )


def make_rule(
    rule_id: str,
    matcher: str,
    severity: Severity = Severity.CRITICAL,
) -> Rule:
    return Rule(id=rule_id, description=f"{matcher} rule", severity=severity, matcher=matcher)


def make_arrangement(
    arrangement_id: str,
    services: tuple[ExternalService, ...] = (),
    rules: tuple[Rule, ...] = (),
    *,
    parent_id: str | None = None,
) -> Arrangement:
    """Build an arrangement with a container named after it."""
    return Arrangement(
        id=arrangement_id,
        name=arrangement_id.upper(),
        container=ContainerVersion(
            id=f"container-{arrangement_id}",
            version_label="v1",
            hypothesis=f"{arrangement_id} hypothesis",
            active_rules=rules,
        ),
        services=services,
        parent_id=parent_id,
    )
