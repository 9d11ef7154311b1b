"""init — write a workspace file seeded with the built-in scenario."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand
from archctl.services.init import InitService

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    "init",
    cls=ArchCommand,
    examples="""\
  archctl init
  archctl init --force
  archctl -w scenarios/migration.yaml init""",
)
@click.option("--force", is_flag=True, help="Overwrite an existing workspace file.")
@click.pass_obj
def init_cmd(app: AppContext, force: bool) -> None:
    """Create a workspace file from the built-in migration scenario."""
    from archctl.infrastructure.workspace import Workspace

    workspace = Workspace.from_scenario(path=app.settings.workspace_path)
    app.emit(InitService(workspace).init_workspace(force=force))
