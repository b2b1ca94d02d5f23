"""Click classes for boardctl commands.

Every boardctl command and group takes an ``examples`` string. When one is
given, the command gains an eager ``--examples`` flag that prints the
sample invocations and exits before any store is opened.
"""

from __future__ import annotations

from typing import Any

import click


def examples_option(examples: str) -> click.Option:
    """Eager ``--examples`` flag printing *examples* for the invoked command."""

    def _show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}' (see --help for options):\n")
        click.echo(examples)
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show,
        help="Show sample invocations and exit.",
    )


class BoardCommand(click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(examples_option(examples))


class BoardGroup(click.Group):
    """Group whose subcommands and nested groups also take ``examples``."""

    command_class = BoardCommand
    group_class = type

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if examples:
            self.params.append(examples_option(examples))

