"""SQL-backed ordered collection of siblings under one container.

One implementation serves both cards (container = list) and lists
(container = board). Every method runs on the caller's connection, so the
shifts and the final entity write join the caller's transaction and
commit or roll back together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select, update

from boardctl.domain.ordering import (
    RangeShift,
    shift_for_insertion,
    shift_for_move,
    shift_for_removal,
)
from boardctl.infrastructure.database.schema import cards, lists

if TYPE_CHECKING:
    from sqlalchemy import Connection, Table


@dataclass(frozen=True)
class OrderSpec:
    """Which table holds the siblings and which column names their container."""

    table: Table
    container_column: str

    @property
    def container(self) -> Any:
        return self.table.c[self.container_column]


CARD_ORDER = OrderSpec(table=cards, container_column="list_id")
LIST_ORDER = OrderSpec(table=lists, container_column="board_id")


class OrderedCollection:
    """Siblings of one container, kept dense by range shifts.

    Every row whose position changes also gets ``version + 1`` and a fresh
    ``modified`` stamp, so a client holding an older view of any shifted
    sibling is detected as stale.

    Usage::

        with store.transaction() as txn:
            coll = OrderedCollection(txn.conn, CARD_ORDER, list_id, now=now)
            coll.move_to(card_id, current=0, requested=2)
    """

    def __init__(
        self,
        conn: Connection,
        spec: OrderSpec,
        container_id: str,
        *,
        now: str,
    ) -> None:
        self._conn = conn
        self._spec = spec
        self._now = now
        self.container_id = container_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def positions(self) -> list[int]:
        t = self._spec.table
        rows = self._conn.execute(
            select(t.c.position).where(self._spec.container == self.container_id)
        ).fetchall()
        return [r.position for r in rows]

    def size(self) -> int:
        t = self._spec.table
        return int(
            self._conn.execute(
                select(func.count(t.c.id)).where(self._spec.container == self.container_id)
            ).scalar_one()
        )

    def append_position(self) -> int:
        """``max(position) + 1``, or 0 for an empty container."""
        t = self._spec.table
        last = self._conn.execute(
            select(func.max(t.c.position)).where(self._spec.container == self.container_id)
        ).scalar()
        return 0 if last is None else int(last) + 1

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def shift(self, plan: RangeShift, *, exclude: str | None = None) -> int:
        """Apply *plan* to the siblings it covers. Returns the row count touched."""
        t = self._spec.table
        stmt = (
            update(t)
            .where(self._spec.container == self.container_id)
            .where(t.c.position >= plan.low)
            .values(
                position=t.c.position + plan.delta,
                version=t.c.version + 1,
                modified=self._now,
            )
        )
        if plan.high is not None:
            stmt = stmt.where(t.c.position <= plan.high)
        if exclude is not None:
            stmt = stmt.where(t.c.id != exclude)
        return self._conn.execute(stmt).rowcount

    def open_slot(self, position: int) -> int:
        """Make room at *position* by incrementing everything at or after it."""
        return self.shift(shift_for_insertion(position))

    def close_gap(self, position: int, *, exclude: str | None = None) -> int:
        """Restore density after *position* was vacated."""
        return self.shift(shift_for_removal(position), exclude=exclude)

    def place(self, entity_id: str, position: int, **extra: Any) -> None:
        """Put *entity_id* at *position* in this container.

        Also rewrites the container column, so placing an entity that lives
        elsewhere moves it here. *extra* columns are written alongside.
        """
        t = self._spec.table
        self._conn.execute(
            update(t)
            .where(t.c.id == entity_id)
            .values(
                {
                    self._spec.container_column: self.container_id,
                    "position": position,
                    "version": t.c.version + 1,
                    "modified": self._now,
                    **extra,
                }
            )
        )

    def move_to(self, entity_id: str, current: int, requested: int) -> int:
        """Move a member of this container from *current* to *requested*.

        Returns the number of siblings shifted; 0 and no writes for a no-op.
        """
        plan = shift_for_move(current, requested)
        if plan is None:
            return 0
        touched = self.shift(plan, exclude=entity_id)
        self.place(entity_id, requested)
        return touched

    def renumber(self) -> int:
        """Rewrite positions as ``0..n-1`` in current order. Returns rows changed."""
        t = self._spec.table
        changed = 0
        for index, row in enumerate(
            self._conn.execute(
                select(t.c.id, t.c.position)
                .where(self._spec.container == self.container_id)
                .order_by(t.c.position, t.c.created, t.c.id)
            ).fetchall()
        ):
            if row.position != index:
                self.place(row.id, index)
                changed += 1
        return changed
