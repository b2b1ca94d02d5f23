"""boardctl entry point: global output flags, settings, and subcommands."""

from __future__ import annotations

import click

from boardctl import __version__
from boardctl.commands import register_commands
from boardctl.commands._base import BoardGroup
from boardctl.commands._context import AppContext
from boardctl.config.settings import BoardSettings

_ROOT_EXAMPLES = """\
  boardctl init
  boardctl create workspace "Team"
  boardctl create board ws_1a2b3c4d5e6f "Sprint 12"
  boardctl create list brd_1a2b3c4d5e6f "Doing"
  boardctl create card lst_1a2b3c4d5e6f "Write release notes"
  boardctl reorder card crd_1a2b3c4d5e6f --position 0
  boardctl show brd_1a2b3c4d5e6f
  boardctl check --fix"""


@click.group(cls=BoardGroup, examples=_ROOT_EXAMPLES, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="boardctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only ids, or nothing.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and per-call timing.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Use this boardctl.toml (its directory is the root).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """boardctl keeps card and list order dense across moves, inserts and deletes."""
    app = AppContext(
        BoardSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
