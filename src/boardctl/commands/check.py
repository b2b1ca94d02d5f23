"""Command: ordering integrity checking and repair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardCommand

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext


@click.command(
    cls=BoardCommand,
    examples="""\
  boardctl check
  boardctl check --board brd_1a2b3c4d5e6f
  boardctl check --fix""",
)
@click.option("--board", "board_id", default=None, help="Only check this board.")
@click.option("--fix", is_flag=True, help="Renumber damaged containers.")
@click.pass_obj
def check(app: AppContext, board_id: str | None, fix: bool) -> None:
    """Check that every list and board has dense positions."""
    from boardctl.services.check import CheckService

    svc = CheckService(app.store)
    if fix:
        app.emit(svc.fix(board_id=board_id))
    else:
        app.emit(svc.check(board_id=board_id))
