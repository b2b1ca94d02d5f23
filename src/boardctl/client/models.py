"""View models for the client-side board tree.

Frozen pydantic models: every tree change produces new objects, so a
snapshot held by a drag session never changes under it. Unknown keys
(``created``, ``workspace_id``, ...) in server payloads are ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CardView(BaseModel):
    """A card as the client sees it."""

    model_config = {"frozen": True}

    id: str
    list_id: str
    title: str
    position: int
    version: int = 1


class ListView(BaseModel):
    """A list and its cards, in display order."""

    model_config = {"frozen": True}

    id: str
    board_id: str
    name: str
    position: int
    version: int = 1
    cards: tuple[CardView, ...] = ()


def tree_from_payload(data: dict[str, Any]) -> tuple[ListView, ...]:
    """Build the list tree from a ``get_board`` payload (``{"lists": [...]}``)."""
    return tuple(ListView.model_validate(item) for item in data.get("lists", []))
