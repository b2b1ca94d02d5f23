"""Command: print a board as a tree of lists and cards."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardCommand

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext


@click.command(
    cls=BoardCommand,
    examples="""\
  boardctl show brd_1a2b3c4d5e6f
  boardctl --json show brd_1a2b3c4d5e6f
  boardctl show""",
)
@click.argument("board_id", required=False, default=None)
@click.pass_obj
def show(app: AppContext, board_id: str | None) -> None:
    """Show BOARD_ID's lists and cards in order (all boards when omitted)."""
    from boardctl.services.query import QueryService

    svc = QueryService(app.store)
    if board_id is None:
        app.emit(svc.list_boards())
    else:
        app.emit(svc.get_board(board_id))
