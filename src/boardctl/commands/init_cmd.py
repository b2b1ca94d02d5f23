"""Command: board store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardCommand

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  boardctl init
  boardctl init ./team-board --name team
  boardctl --json init /tmp/board"""


@click.command("init", cls=BoardCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--name", default=None, help="Board name (default: directory name).")
@click.pass_obj
def init_cmd(app: AppContext, path: str, name: str | None) -> None:
    """Create boardctl.toml and the board database."""
    from boardctl.services.init import InitService

    app.emit(InitService.init_store(Path(path), name=name))
