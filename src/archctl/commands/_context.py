"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Loads the workspace lazily, routes output, and
writes the workspace file back after a mutation changed it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from archctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from archctl.config.settings import ArchSettings
    from archctl.infrastructure.workspace import Workspace
    from archctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is loaded on first use so ``--help`` and ``--version``
    never touch the workspace file.
    """

    def __init__(self, settings: ArchSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from archctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from archctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def workspace(self) -> Workspace:
        """The workspace (loaded lazily on first access).

        Raises:
            click.ClickException: If the workspace file is malformed.
        """
        if self._workspace is None:
            from archctl.infrastructure.feeds import FeedError
            from archctl.infrastructure.workspace import Workspace

            try:
                self._workspace = Workspace.from_settings(self.settings)
            except FeedError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._workspace

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout. Warnings go to stderr so they don't pollute
          piped output.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def emit_and_save(self, result: ServiceResult) -> None:
        """Persist the workspace if the mutation changed it, then emit.

        Raises:
            click.ClickException: If the workspace file cannot be written.
        """
        if result.ok and self._workspace is not None and self._workspace.dirty:
            from archctl.infrastructure.feeds import FeedError

            try:
                self._workspace.save()
            except FeedError as exc:
                raise click.ClickException(str(exc)) from exc
        self.emit(result)
