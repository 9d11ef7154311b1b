"""Subcommand modules for archctl.

Provides register_commands(), which uses deferred imports to keep
``archctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group.

    3 groups (have subcommands) + 3 standalone commands.
    """
    # --- Groups ---
    from archctl.commands.lineage import lineage
    from archctl.commands.query import query
    from archctl.commands.version import version

    cli.add_command(query)
    cli.add_command(version)
    cli.add_command(lineage)

    # --- Standalone commands ---
    from archctl.commands.evaluate import compare, rules
    from archctl.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
    cli.add_command(rules)
    cli.add_command(compare)
