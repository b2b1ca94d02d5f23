"""BoardDataStore — the client's list-and-card tree.

All changes go through :func:`reduce` with one of three typed actions:

- ``MoveCard``: splice a card out of its list and into a list at an index.
- ``MoveList``: move a list to an index among its siblings.
- ``ReplaceTree``: swap in a tree fetched from the server.

The reducer mirrors the server's bookkeeping: after a move every sibling
is renumbered ``0..n-1`` and each card or list whose position (or list)
changed gets ``version + 1``, which is exactly what the server's range
shift does to a dense container. The local tree therefore keeps valid
versions for the next drag without a round trip.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from boardctl.client.positions import index_of, reorder_array

if TYPE_CHECKING:
    from collections.abc import Iterable

    from boardctl.client.api import BoardApi
    from boardctl.client.models import CardView, ListView

logger = logging.getLogger(__name__)

Tree = tuple["ListView", ...]


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MoveCard:
    """Move *card_id* into *to_list_id* at *index* (index after removal)."""

    card_id: str
    to_list_id: str
    index: int


@dataclass(frozen=True)
class MoveList:
    list_id: str
    index: int


@dataclass(frozen=True)
class ReplaceTree:
    lists: Tree


Action = MoveCard | MoveList | ReplaceTree


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def _renumber_cards(list_id: str, cards: Iterable[CardView]) -> tuple[CardView, ...]:
    result = []
    for index, card in enumerate(cards):
        if card.position != index or card.list_id != list_id:
            card = card.model_copy(
                update={"position": index, "list_id": list_id, "version": card.version + 1}
            )
        result.append(card)
    return tuple(result)


def _move_card(lists: Tree, action: MoveCard) -> Tree:
    source_index = next(
        (i for i, lst in enumerate(lists) if index_of(lst.cards, action.card_id) != -1), -1
    )
    dest_index = index_of(lists, action.to_list_id)
    if source_index == -1 or dest_index == -1:
        return lists

    source = lists[source_index]
    old = index_of(source.cards, action.card_id)
    if source_index == dest_index:
        cards = reorder_array(source.cards, old, action.index)
        updated = {source_index: _renumber_cards(source.id, cards)}
    else:
        card = source.cards[old]
        remaining = source.cards[:old] + source.cards[old + 1 :]
        dest = list(lists[dest_index].cards)
        dest.insert(max(0, min(action.index, len(dest))), card)
        updated = {
            source_index: _renumber_cards(source.id, remaining),
            dest_index: _renumber_cards(action.to_list_id, dest),
        }

    return tuple(
        lst.model_copy(update={"cards": updated[i]}) if i in updated else lst
        for i, lst in enumerate(lists)
    )


def _move_list(lists: Tree, action: MoveList) -> Tree:
    old = index_of(lists, action.list_id)
    if old == -1:
        return lists
    result = []
    for index, lst in enumerate(reorder_array(lists, old, action.index)):
        if lst.position != index:
            lst = lst.model_copy(update={"position": index, "version": lst.version + 1})
        result.append(lst)
    return tuple(result)


def reduce(lists: Tree, action: Action) -> Tree:
    """Apply *action* to *lists* and return the new tree. Never mutates."""
    if isinstance(action, ReplaceTree):
        return tuple(action.lists)
    if isinstance(action, MoveCard):
        return _move_card(lists, action)
    if isinstance(action, MoveList):
        return _move_list(lists, action)
    msg = f"Unknown action: {action!r}"
    raise TypeError(msg)


# ---------------------------------------------------------------------------
# BoardDataStore
# ---------------------------------------------------------------------------


class BoardDataStore:
    """Holds one board's tree and resyncs it from a :class:`BoardApi`."""

    def __init__(self, api: BoardApi, board_id: str, lists: Iterable[ListView] = ()) -> None:
        self._api = api
        self.board_id = board_id
        self._lists: Tree = tuple(lists)

    @property
    def api(self) -> BoardApi:
        return self._api

    @property
    def lists(self) -> Tree:
        return self._lists

    def dispatch(self, action: Action) -> Tree:
        self._lists = reduce(self._lists, action)
        return self._lists

    def set_lists(self, lists: Iterable[ListView]) -> None:
        """Replace the whole tree."""
        self.dispatch(ReplaceTree(tuple(lists)))

    async def refetch(self) -> Tree:
        """Discard local state and reload the board from the server.

        Errors from the fetch propagate; the local tree is left as it was.
        """
        lists = await self._api.fetch_board(self.board_id)
        self.set_lists(lists)
        logger.debug("Board %s refetched: %d lists", self.board_id, len(lists))
        return self._lists
