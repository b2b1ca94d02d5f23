"""Command group: create workspaces, boards, lists, and cards."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from boardctl.commands._base import BoardGroup
from boardctl.services.create import CreateService

if TYPE_CHECKING:
    from boardctl.commands._context import AppContext

_CREATE_EXAMPLES = """\
  boardctl create workspace "Platform"
  boardctl create board ws_1a2b3c4d5e6f "Sprint 12"
  boardctl create list brd_1a2b3c4d5e6f "In Progress"
  boardctl create card lst_1a2b3c4d5e6f "Fix login bug" --position 0"""


@click.group(cls=BoardGroup, examples=_CREATE_EXAMPLES)
def create() -> None:
    """Create workspaces, boards, lists, and cards."""


@create.command(examples='  boardctl create workspace "Platform"')
@click.argument("name")
@click.pass_obj
def workspace(app: AppContext, name: str) -> None:
    """Create a workspace."""
    app.emit(CreateService(app.store).create_workspace(name))


@create.command(examples='  boardctl create board ws_1a2b3c4d5e6f "Sprint 12"')
@click.argument("workspace_id")
@click.argument("name")
@click.pass_obj
def board(app: AppContext, workspace_id: str, name: str) -> None:
    """Create a board in WORKSPACE_ID."""
    app.emit(CreateService(app.store).create_board(workspace_id, name))


@create.command(
    "list",
    examples="""\
  boardctl create list brd_1a2b3c4d5e6f "Backlog"
  boardctl create list brd_1a2b3c4d5e6f "Doing" --description "Work in progress"
  boardctl create list brd_1a2b3c4d5e6f "Urgent" --position 0""",
)
@click.argument("board_id")
@click.argument("name")
@click.option("--description", default=None, help="List description.")
@click.option(
    "--position",
    type=click.IntRange(min=0),
    default=None,
    help="Explicit position (default: after the last list).",
)
@click.pass_obj
def list_(
    app: AppContext,
    board_id: str,
    name: str,
    description: str | None,
    position: int | None,
) -> None:
    """Create a list on BOARD_ID."""
    app.emit(
        CreateService(app.store).create_list(
            board_id, name, description=description, position=position
        )
    )


@create.command(
    examples="""\
  boardctl create card lst_1a2b3c4d5e6f "Write tests"
  boardctl create card lst_1a2b3c4d5e6f "Hotfix" --position 0 --description urgent"""
)
@click.argument("list_id")
@click.argument("title")
@click.option("--description", default=None, help="Card description.")
@click.option(
    "--position",
    type=click.IntRange(min=0),
    default=None,
    help="Explicit position (default: after the last card).",
)
@click.pass_obj
def card(
    app: AppContext,
    list_id: str,
    title: str,
    description: str | None,
    position: int | None,
) -> None:
    """Create a card in LIST_ID."""
    app.emit(
        CreateService(app.store).create_card(
            list_id, title, description=description, position=position
        )
    )
