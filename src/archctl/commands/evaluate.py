"""Standalone commands: rules, compare."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.commands._base import ArchCommand
from archctl.services.evaluation import EvaluationService

if TYPE_CHECKING:
    from archctl.commands._context import AppContext


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl rules
  archctl rules arr-cloud
  archctl -q rules arr-legacy""",
)
@click.argument("arrangement_id", required=False)
@click.pass_obj
def rules(app: AppContext, arrangement_id: str | None) -> None:
    """Evaluate an arrangement's rules (default: active)."""
    app.emit(EvaluationService(app.workspace).rules(arrangement_id))


@click.command(
    cls=ArchCommand,
    examples="""\
  archctl compare arr-legacy arr-cloud
  archctl compare arr-legacy
  archctl --json compare arr-cloud arr-0001""",
)
@click.argument("a_id")
@click.argument("b_id", required=False)
@click.pass_obj
def compare(app: AppContext, a_id: str, b_id: str | None) -> None:
    """Compare arrangement A against B. Without B, list candidates."""
    app.emit(EvaluationService(app.workspace).compare(a_id, b_id))
