"""Pure position helpers for the drag controller.

None of these functions mutate their inputs or raise on odd input: a
drag that lands somewhere unexpected degrades to "no change" and the
caller decides whether to resync.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

# Droppable id of a container with nothing to drop onto: "list-<id>".
EMPTY_CONTAINER_PREFIX = "list-"

_T = TypeVar("_T")


def reorder_array(  # noqa: UP047
    sequence: Sequence[_T], old_index: int, new_index: int
) -> list[_T]:
    """Return a new list with the item at *old_index* moved to *new_index*.

    Equal indices, or either index outside ``[0, len)``, give an unchanged copy.
    """
    items = list(sequence)
    size = len(items)
    if old_index == new_index:
        return items
    if not (0 <= old_index < size and 0 <= new_index < size):
        return items
    items.insert(new_index, items.pop(old_index))
    return items


def find_container_of(containers: Iterable[Any] | None, entity_id: str | None) -> Any | None:
    """The container whose ``cards`` include *entity_id*, else None.

    Containers without a ``cards`` collection are skipped.
    """
    if not containers or not entity_id:
        return None
    for container in containers:
        members = getattr(container, "cards", None) or ()
        if any(getattr(member, "id", None) == entity_id for member in members):
            return container
    return None


def extract_container_id(droppable_id: str | None) -> str:
    """Strip one leading ``"list-"`` marker; ``""`` for empty input."""
    if not droppable_id:
        return ""
    text = str(droppable_id)
    if text.startswith(EMPTY_CONTAINER_PREFIX):
        return text[len(EMPTY_CONTAINER_PREFIX) :]
    return text


def empty_container_target(container_id: str) -> str:
    """Droppable id for dropping into *container_id* with no sibling under the pointer."""
    return f"{EMPTY_CONTAINER_PREFIX}{container_id}"


def is_container_target(droppable_id: str | None) -> bool:
    return bool(droppable_id) and str(droppable_id).startswith(EMPTY_CONTAINER_PREFIX)


def index_of(items: Iterable[Any], entity_id: str | None) -> int:
    """Index of the item whose ``id`` is *entity_id*, or -1."""
    for index, item in enumerate(items):
        if getattr(item, "id", None) == entity_id:
            return index
    return -1
