"""Subcommand modules for boardctl.

register_commands() uses deferred imports to keep ``boardctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root group."""
    # --- Groups ---
    from boardctl.commands.create import create
    from boardctl.commands.delete import delete
    from boardctl.commands.reorder import reorder

    cli.add_command(create)
    cli.add_command(reorder)
    cli.add_command(delete)

    # --- Standalone commands ---
    from boardctl.commands.check import check
    from boardctl.commands.init_cmd import init_cmd
    from boardctl.commands.show import show

    cli.add_command(init_cmd)
    cli.add_command(show)
    cli.add_command(check)
