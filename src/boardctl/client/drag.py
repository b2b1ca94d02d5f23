"""DragSession — the optimistic drag-and-drop state machine.

States: ``IDLE -> DRAGGING(kind, active) -> IDLE``.

A drop classifies its target, applies the move to the local tree at
once, then asks the server to do the same. Any failure from the server
(or the transport) is logged and answered with a full refetch; the local
tree is never patched back by hand.

Droppable identifiers:

- a bare card id: drop onto that card (take its slot);
- a bare list id: drop onto that list (append to it);
- ``"list-" + list_id``: drop into that list's empty area (append, which
  is index 0 for an empty list).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from boardctl.client.api import ReorderRequest
from boardctl.client.positions import (
    extract_container_id,
    find_container_of,
    index_of,
    is_container_target,
)
from boardctl.client.store import MoveCard, MoveList

if TYPE_CHECKING:
    from boardctl.client.models import CardView, ListView
    from boardctl.client.store import BoardDataStore, Tree

logger = logging.getLogger(__name__)


class DragState(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragKind(StrEnum):
    CARD = "card"
    LIST = "list"


class TargetKind(StrEnum):
    """What a droppable id names: a card, a list, or a list's empty-area marker."""

    CARD = "card"
    LIST = "list"
    CONTAINER = "container"


class DropOutcome(StrEnum):
    """What a drop did: nothing, an accepted move, or a resync from the server."""

    NOOP = "noop"
    APPLIED = "applied"
    RESYNCED = "resynced"


@dataclass(frozen=True)
class DragTarget:
    """A classified drop target."""

    kind: TargetKind
    id: str


def classify_target(lists: Tree, droppable_id: str | None) -> DragTarget | None:
    """Resolve a droppable id against the tree; None when it names nothing known."""
    if not droppable_id:
        return None
    if is_container_target(droppable_id):
        container_id = extract_container_id(droppable_id)
        if index_of(lists, container_id) == -1:
            return None
        return DragTarget(kind=TargetKind.CONTAINER, id=container_id)
    if index_of(lists, droppable_id) != -1:
        return DragTarget(kind=TargetKind.LIST, id=droppable_id)
    if find_container_of(lists, droppable_id) is not None:
        return DragTarget(kind=TargetKind.CARD, id=droppable_id)
    return None


class DragSession:
    """One drag at a time over a :class:`BoardDataStore`.

    Usage::

        session = DragSession(store)
        session.start(card_id)
        outcome = await session.drop(other_card_id)
    """

    def __init__(self, store: BoardDataStore) -> None:
        self._store = store
        self._reset()

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.kind: DragKind | None = None
        self.active_id: str | None = None
        self.preview: CardView | None = None
        self._version: int | None = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, active_id: str) -> bool:
        """Begin dragging *active_id*. Ignored (returns False) while a drag is active."""
        if self.state is DragState.DRAGGING:
            logger.debug("Drag start ignored, %s already active", self.active_id)
            return False

        lists = self._store.lists
        self.state = DragState.DRAGGING
        self.active_id = active_id

        list_index = index_of(lists, active_id)
        if list_index != -1:
            self.kind = DragKind.LIST
            self.preview = None
            self._version = lists[list_index].version
            return True

        self.kind = DragKind.CARD
        container = find_container_of(lists, active_id)
        if container is not None:
            self.preview = container.cards[index_of(container.cards, active_id)]
            self._version = self.preview.version
        else:
            self.preview = None
            self._version = None
        return True

    def cancel(self) -> None:
        """Abandon the drag: no local change, no server call."""
        self._reset()

    async def drop(self, over_id: str | None) -> DropOutcome:
        """Finish the drag over *over_id*.

        The session is back in ``IDLE`` before anything is awaited, so a new
        drag may start while this drop's server call is in flight.
        """
        if self.state is not DragState.DRAGGING or self.active_id is None:
            return DropOutcome.NOOP
        kind, active_id, version = self.kind, self.active_id, self._version
        self._reset()

        if over_id is None or over_id == active_id:
            return DropOutcome.NOOP
        if kind is DragKind.LIST:
            return await self._drop_list(active_id, over_id, version)
        return await self._drop_card(active_id, over_id, version)

    # ------------------------------------------------------------------
    # Drop handling
    # ------------------------------------------------------------------

    async def _drop_list(self, list_id: str, over_id: str, version: int | None) -> DropOutcome:
        lists = self._store.lists
        target = classify_target(lists, over_id)
        if target is None:
            return DropOutcome.NOOP

        owner = target.id
        if target.kind is TargetKind.CARD:
            owner = find_container_of(lists, target.id).id

        old_index = index_of(lists, list_id)
        new_index = index_of(lists, owner)
        if old_index == -1 or old_index == new_index:
            return DropOutcome.NOOP

        self._store.dispatch(MoveList(list_id=list_id, index=new_index))
        request = ReorderRequest(position=new_index, expected_version=version)
        try:
            await self._store.api.reorder_list(list_id, request)
        except Exception:
            logger.warning("List reorder rejected: %s", list_id, exc_info=True)
            await self._store.refetch()
            return DropOutcome.RESYNCED
        return DropOutcome.APPLIED

    async def _drop_card(self, card_id: str, over_id: str, version: int | None) -> DropOutcome:
        lists = self._store.lists
        source: ListView | None = find_container_of(lists, card_id)
        if source is None:
            logger.info("Dragged card %s not in local tree, resyncing", card_id)
            await self._store.refetch()
            return DropOutcome.RESYNCED

        resolved = self._card_destination(lists, source, card_id, over_id)
        if resolved is None:
            logger.info("Drop target %s not in local tree, resyncing", over_id)
            await self._store.refetch()
            return DropOutcome.RESYNCED
        dest, index = resolved

        same_list = dest.id == source.id
        if same_list and index == index_of(source.cards, card_id):
            return DropOutcome.NOOP

        self._store.dispatch(MoveCard(card_id=card_id, to_list_id=dest.id, index=index))
        request = ReorderRequest(
            position=index,
            container_id=None if same_list else dest.id,
            expected_version=version,
        )
        try:
            await self._store.api.reorder_card(card_id, request)
        except Exception:
            logger.warning("Card reorder rejected: %s", card_id, exc_info=True)
            await self._store.refetch()
            return DropOutcome.RESYNCED
        return DropOutcome.APPLIED

    @staticmethod
    def _card_destination(
        lists: Tree, source: ListView, card_id: str, over_id: str
    ) -> tuple[ListView, int] | None:
        """Destination list and index for a card dropped on *over_id*."""
        target = classify_target(lists, over_id)
        if target is None:
            return None
        if target.kind is TargetKind.CARD:
            dest = find_container_of(lists, target.id)
            return dest, index_of(dest.cards, target.id)

        # A list or an empty-area marker: append after the last card.
        dest = lists[index_of(lists, target.id)]
        size = len(dest.cards)
        if dest.id == source.id:
            size -= 1
        return dest, size
