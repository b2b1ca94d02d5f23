"""Command group: move cards and lists to new positions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardGroup
from boardctl.services.reorder import ReorderService

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext

_REORDER_EXAMPLES = """\
  boardctl reorder card crd_1a2b3c4d5e6f --position 0
  boardctl reorder card crd_1a2b3c4d5e6f --position 2 --to-list lst_1a2b3c4d5e6f
  boardctl reorder list lst_1a2b3c4d5e6f --position 1 --expected-version 3"""


@click.group(cls=BoardGroup, examples=_REORDER_EXAMPLES)
def reorder() -> None:
    """Move cards within or across lists, and lists within a board."""


@reorder.command(
    examples="""\
  boardctl reorder card crd_1a2b3c4d5e6f --position 0
  boardctl reorder card crd_1a2b3c4d5e6f --position 0 --to-list lst_1a2b3c4d5e6f
  boardctl --json reorder card crd_1a2b3c4d5e6f --position 3 --expected-version 2"""
)
@click.argument("card_id")
@click.option("--position", type=int, required=True, help="Zero-based target position.")
@click.option("--to-list", "list_id", default=None, help="Move into this list.")
@click.option(
    "--expected-version",
    type=int,
    default=None,
    help="Fail with STALE_VERSION unless the card is at this version.",
)
@click.pass_obj
def card(
    app: AppContext,
    card_id: str,
    position: int,
    list_id: str | None,
    expected_version: int | None,
) -> None:
    """Move CARD_ID to --position (in --to-list when given)."""
    app.emit(
        ReorderService(app.store).reorder_card(
            card_id, position, list_id=list_id, expected_version=expected_version
        )
    )


@reorder.command(
    "list",
    examples="""\
  boardctl reorder list lst_1a2b3c4d5e6f --position 0
  boardctl reorder list lst_1a2b3c4d5e6f --position 2 --expected-version 1""",
)
@click.argument("list_id")
@click.option("--position", type=int, required=True, help="Zero-based target position.")
@click.option(
    "--expected-version",
    type=int,
    default=None,
    help="Fail with STALE_VERSION unless the list is at this version.",
)
@click.pass_obj
def list_(app: AppContext, list_id: str, position: int, expected_version: int | None) -> None:
    """Move LIST_ID to --position within its board."""
    app.emit(
        ReorderService(app.store).reorder_list(
            list_id, position, expected_version=expected_version
        )
    )
