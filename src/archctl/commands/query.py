"""Command group: inspect arrangements and the service catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchGroup
from archctl.services.query import QueryService

if TYPE_CHECKING:
    from archctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  archctl query list
  archctl query show arr-cloud
  archctl query catalog
  archctl --json query catalog arr-legacy"""


@click.group(cls=ArchGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Inspect arrangements and the service catalog."""


@query.command(
    "list",
    examples="""\
  archctl query list
  archctl -v query list
  archctl -q query list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List arrangements; the active one is marked with *."""
    app.emit(QueryService(app.workspace).list_arrangements())


@query.command(
    examples="""\
  archctl query show
  archctl query show arr-cloud""",
)
@click.argument("arrangement_id", required=False)
@click.pass_obj
def show(app: AppContext, arrangement_id: str | None) -> None:
    """Show one arrangement (default: active) with its rule verdicts."""
    app.emit(QueryService(app.workspace).get_arrangement(arrangement_id))


@query.command(
    examples="""\
  archctl query catalog
  archctl query catalog arr-legacy""",
)
@click.argument("arrangement_id", required=False)
@click.pass_obj
def catalog(app: AppContext, arrangement_id: str | None) -> None:
    """List catalog services and whether an arrangement includes them."""
    app.emit(QueryService(app.workspace).catalog(arrangement_id))
