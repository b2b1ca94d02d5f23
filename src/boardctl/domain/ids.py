"""ID patterns, validation, and generation.

Every entity id is a kind prefix followed by 12 lowercase hex characters
drawn from a random UUID. IDs are permanent: moving a card between lists
never changes its id.
"""

from __future__ import annotations

import re
import uuid

ID_PREFIXES: dict[str, str] = {
    "workspace": "ws_",
    "board": "brd_",
    "list": "lst_",
    "card": "crd_",
}

ID_PATTERNS: dict[str, re.Pattern[str]] = {
    kind: re.compile(rf"^{prefix}[0-9a-f]{{12}}$") for kind, prefix in ID_PREFIXES.items()
}


def generate_id(kind: str) -> str:
    """Return a fresh id for *kind*.

    Raises:
        KeyError: If *kind* is not a known entity kind.
    """
    return f"{ID_PREFIXES[kind]}{uuid.uuid4().hex[:12]}"


def validate_id(entity_id: object, kind: str) -> bool:
    """Check whether *entity_id* is a well-formed id for *kind*."""
    pattern = ID_PATTERNS.get(kind)
    if pattern is None or not isinstance(entity_id, str):
        return False
    return pattern.match(entity_id) is not None
