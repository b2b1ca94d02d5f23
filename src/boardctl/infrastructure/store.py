"""BoardStore — repository with atomic transaction boundaries.

The BoardStore is the single dependency injected into every service. It
owns the SQLAlchemy engine; :meth:`BoardStore.transaction` hands out a
:class:`StoreTransaction` whose writes commit together on success and roll
back together on any exception. A reorder's range shifts and its final
entity write therefore never land separately.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from boardctl.infrastructure.database.engine import WRITE_OPTIONS, init_database
from boardctl.infrastructure.database.ordering import (
    CARD_ORDER,
    LIST_ORDER,
    OrderedCollection,
    OrderSpec,
)
from boardctl.infrastructure.database.schema import boards, cards, lists, workspaces

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection, Row
    from sqlalchemy.engine import Engine

    from boardctl.config.settings import BoardSettings

logger = logging.getLogger(__name__)


def utc_now() -> str:
    """Current UTC time as ISO 8601."""
    return datetime.now(UTC).isoformat()


# ---------------------------------------------------------------------------
# StoreTransaction: yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Active transaction: one connection plus lookups and ordered collections.

    ``now`` is fixed for the whole transaction so every row written by one
    operation carries the same ``modified`` stamp.
    """

    conn: Connection
    now: str

    def ordered(self, spec: OrderSpec, container_id: str) -> OrderedCollection:
        return OrderedCollection(self.conn, spec, container_id, now=self.now)

    def card_order(self, list_id: str) -> OrderedCollection:
        """Cards of *list_id* as an ordered collection."""
        return self.ordered(CARD_ORDER, list_id)

    def list_order(self, board_id: str) -> OrderedCollection:
        """Lists of *board_id* as an ordered collection."""
        return self.ordered(LIST_ORDER, board_id)

    def get_workspace(self, workspace_id: str) -> Row | None:
        return self.conn.execute(select(workspaces).where(workspaces.c.id == workspace_id)).first()

    def get_board(self, board_id: str) -> Row | None:
        return self.conn.execute(select(boards).where(boards.c.id == board_id)).first()

    def get_list(self, list_id: str) -> Row | None:
        return self.conn.execute(select(lists).where(lists.c.id == list_id)).first()

    def get_card(self, card_id: str) -> Row | None:
        return self.conn.execute(select(cards).where(cards.c.id == card_id)).first()


# ---------------------------------------------------------------------------
# BoardStore: the repository
# ---------------------------------------------------------------------------


class BoardStore:
    """Repository encapsulating database access.

    Constructed once per CLI invocation from :class:`BoardSettings`.
    Services receive it via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: BoardSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.db_path, busy_timeout=settings.database.busy_timeout
        )

    @property
    def root(self) -> Path:
        """Directory holding ``.boardctl/``."""
        return self._settings.root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct reads in tests and checks)."""
        return self._engine

    @property
    def settings(self) -> BoardSettings:
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Atomic unit of work.

        Begins with ``BEGIN IMMEDIATE``. Commits when the block exits
        normally; rolls back every write when it raises. A service that
        returns a failed ServiceResult from inside the block must do so
        before its first write.

        Usage::

            with store.transaction() as txn:
                txn.card_order(list_id).close_gap(3)
                txn.conn.execute(delete(cards).where(...))
        """
        with self._engine.connect() as conn:
            conn.execution_options(**WRITE_OPTIONS)
            with conn.begin():
                try:
                    yield StoreTransaction(conn=conn, now=utc_now())
                except BaseException:
                    logger.debug("Transaction rolled back", exc_info=True)
                    raise

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
