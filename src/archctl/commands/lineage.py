"""Command group: fork lineage."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup
from archctl.services.lineage import LineageService

if TYPE_CHECKING:
    from archctl.commands._context import AppContext

_LINEAGE_EXAMPLES = """\
  archctl lineage tree
  archctl lineage ancestors arr-0002
  archctl lineage descendants arr-legacy"""


@click.group(cls=ArchGroup, examples=_LINEAGE_EXAMPLES)
@click.pass_obj
def lineage(app: AppContext) -> None:
    """Show how arrangements were forked from one another."""


@lineage.command(
    examples="""\
  archctl lineage tree
  archctl --json lineage tree""",
)
@click.pass_obj
def tree(app: AppContext) -> None:
    """Print the fork forest."""
    app.emit(LineageService(app.workspace).tree())


@lineage.command(
    examples="""\
  archctl lineage ancestors
  archctl lineage ancestors arr-0002""",
)
@click.argument("arrangement_id", required=False)
@click.pass_obj
def ancestors(app: AppContext, arrangement_id: str | None) -> None:
    """List the parent chain of an arrangement (default: active)."""
    app.emit(LineageService(app.workspace).ancestors(arrangement_id))


@lineage.command(
    examples="""\
  archctl lineage descendants arr-legacy""",
)
@click.argument("arrangement_id", required=False)
@click.pass_obj
def descendants(app: AppContext, arrangement_id: str | None) -> None:
    """List every fork derived from an arrangement (default: active)."""
    app.emit(LineageService(app.workspace).descendants(arrangement_id))
