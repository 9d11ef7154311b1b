"""Command group: fork and edit arrangements.

Every subcommand acts on the active arrangement unless ``--arrangement``
names another one, and saves the workspace file when something changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup
from archctl.services.version import VersionService

if TYPE_CHECKING:
    from archctl.commands._context import AppContext

_VERSION_EXAMPLES = """\
  archctl version fork
  archctl version fork arr-cloud
  archctl version toggle cloud_backup_DR
  archctl version cycle human_consistency_review -a arr-cloud
  archctl version hypothesis "Hybrid keeps compliance local."
  archctl version activate arr-legacy"""

_arrangement_option = click.option(
    "-a",
    "--arrangement",
    "arrangement_id",
    default=None,
    help="Target arrangement (default: active).",
)


@click.group(cls=ArchGroup, examples=_VERSION_EXAMPLES)
@click.pass_obj
def version(app: AppContext) -> None:
    """Fork arrangements and edit their services and hypothesis."""


@version.command(
    examples="""\
  archctl version fork
  archctl version fork arr-legacy
  archctl -q version fork""",
)
@click.argument("source_id", required=False)
@click.pass_obj
def fork(app: AppContext, source_id: str | None) -> None:
    """Fork an arrangement (default: active); the fork becomes active."""
    app.emit_and_save(VersionService(app.workspace).fork(source_id))


@version.command(
    examples="""\
  archctl version toggle cloud_backup_DR
  archctl version toggle svc-onprem-db -a arr-0001""",
)
@click.argument("service_id")
@_arrangement_option
@click.pass_obj
def toggle(app: AppContext, service_id: str, arrangement_id: str | None) -> None:
    """Add a catalog service, or remove it if already present."""
    app.emit_and_save(VersionService(app.workspace).toggle_service(service_id, arrangement_id))


@version.command(
    examples="""\
  archctl version hypothesis "Cloud DR meets the 1h RTO target."
  archctl version hypothesis "Keep reporting on-prem." -a arr-0001""",
)
@click.argument("text")
@_arrangement_option
@click.pass_obj
def hypothesis(app: AppContext, text: str, arrangement_id: str | None) -> None:
    """Replace the hypothesis text of an arrangement."""
    app.emit_and_save(VersionService(app.workspace).update_hypothesis(text, arrangement_id))


@version.command(
    examples="""\
  archctl version cycle human_consistency_review
  archctl version cycle cloud_backup_DR -a arr-cloud""",
)
@click.argument("service_id")
@_arrangement_option
@click.pass_obj
def cycle(app: AppContext, service_id: str, arrangement_id: str | None) -> None:
    """Cycle a service's status: VALIDATED -> CONFLICT -> UNCERTAIN."""
    app.emit_and_save(VersionService(app.workspace).cycle_status(service_id, arrangement_id))


@version.command(
    examples="""\
  archctl version activate arr-cloud""",
)
@click.argument("arrangement_id")
@click.pass_obj
def activate(app: AppContext, arrangement_id: str) -> None:
    """Make an arrangement the active one."""
    app.emit_and_save(VersionService(app.workspace).activate(arrangement_id))
