"""SQLite database engine, schema, and ordered collections via SQLAlchemy Core."""

from boardctl.infrastructure.database.engine import create_db_engine, init_database
from boardctl.infrastructure.database.ordering import (
    CARD_ORDER,
    LIST_ORDER,
    OrderedCollection,
    OrderSpec,
)
from boardctl.infrastructure.database.schema import boards, cards, lists, metadata, workspaces

__all__ = [
    "CARD_ORDER",
    "LIST_ORDER",
    "OrderSpec",
    "OrderedCollection",
    "boards",
    "cards",
    "create_db_engine",
    "init_database",
    "lists",
    "metadata",
    "workspaces",
]
