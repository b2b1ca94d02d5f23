"""In-memory board trees and a scripted BoardApi for client tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from boardctl.client.api import ReorderRequest
from boardctl.client.models import CardView, ListView


def build_tree(layout: dict[str, list[str]], *, board_id: str = "B1") -> tuple[ListView, ...]:
    """Tree whose list ids are the layout keys and card ids the titles."""
    return tuple(
        ListView(
            id=list_id,
            board_id=board_id,
            name=list_id,
            position=lpos,
            cards=tuple(
                CardView(id=card_id, list_id=list_id, title=card_id, position=cpos)
                for cpos, card_id in enumerate(card_ids)
            ),
        )
        for lpos, (list_id, card_ids) in enumerate(layout.items())
    )


def card_ids(tree: tuple[ListView, ...], list_id: str) -> list[str]:
    lst = next(item for item in tree if item.id == list_id)
    return [card.id for card in lst.cards]


class FakeApi:
    """BoardApi double: records reorder calls, serves ``server_tree`` on fetch.

    Set ``error`` to make every reorder call raise it. ``on_call`` runs at
    the start of every reorder call.
    """

    def __init__(self, server_tree: tuple[ListView, ...] = ()) -> None:
        self.server_tree = server_tree
        self.calls: list[tuple[str, str, ReorderRequest]] = []
        self.fetches = 0
        self.error: Exception | None = None
        self.fetch_error: Exception | None = None
        self.on_call: Callable[[], Any] | None = None

    async def fetch_board(self, board_id: str) -> tuple[ListView, ...]:
        self.fetches += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.server_tree

    async def reorder_card(self, card_id: str, request: ReorderRequest) -> CardView:
        self._record("card", card_id, request)
        return CardView(
            id=card_id,
            list_id=request.container_id or "",
            title=card_id,
            position=request.position,
        )

    async def reorder_list(self, list_id: str, request: ReorderRequest) -> ListView:
        self._record("list", list_id, request)
        return ListView(id=list_id, board_id="B1", name=list_id, position=request.position)

    def _record(self, kind: str, entity_id: str, request: ReorderRequest) -> None:
        if self.on_call is not None:
            self.on_call()
        self.calls.append((kind, entity_id, request))
        if self.error is not None:
            raise self.error
