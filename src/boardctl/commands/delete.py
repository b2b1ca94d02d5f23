"""Command group: delete cards and lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardGroup
from boardctl.services.delete import DeleteService

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext


@click.group(
    cls=BoardGroup,
    examples="""\
  boardctl delete card crd_1a2b3c4d5e6f
  boardctl delete list lst_1a2b3c4d5e6f""",
)
def delete() -> None:
    """Delete cards and lists (later siblings move up)."""


@delete.command(examples="  boardctl delete card crd_1a2b3c4d5e6f")
@click.argument("card_id")
@click.pass_obj
def card(app: AppContext, card_id: str) -> None:
    """Delete CARD_ID."""
    app.emit(DeleteService(app.store).delete_card(card_id))


@delete.command("list", examples="  boardctl delete list lst_1a2b3c4d5e6f")
@click.argument("list_id")
@click.pass_obj
def list_(app: AppContext, list_id: str) -> None:
    """Delete LIST_ID and all of its cards."""
    app.emit(DeleteService(app.store).delete_list(list_id))
