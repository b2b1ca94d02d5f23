"""AppContext — shared Click context for all commands.

Created once by the root group and handed to subcommands via
``@click.pass_obj``. Opens the board store lazily and routes every
ServiceResult to stdout or stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from boardctl.config.settings import BoardSettings
    from boardctl.infrastructure.store import BoardStore
    from boardctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through the command hierarchy.

    The store is created on first use so ``--help``, ``--examples`` and
    ``init`` never open a database.
    """

    def __init__(self, settings: BoardSettings) -> None:
        self.settings = settings
        self._store: BoardStore | None = None

        from boardctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from boardctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> BoardStore:
        """The board store (created lazily on first access)."""
        if self._store is None:
            from boardctl.infrastructure.store import BoardStore

            self._store = BoardStore(self.settings)
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; on failure print to stderr and exit 1.

        Warnings go to stderr in human mode so piped output stays clean.
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
