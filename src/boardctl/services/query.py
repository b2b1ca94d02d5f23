"""QueryService — read-only views of boards, lists, and cards.

``get_board`` returns the full list-and-card tree a client replaces its
local state with on refetch. Rows are ordered by ``(position, created,
id)`` so a board with duplicate positions still renders deterministically.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from boardctl.domain.ids import validate_id
from boardctl.infrastructure.database.schema import boards, cards, lists
from boardctl.services.base import BaseService, row_data
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import trace_span, traced


class QueryService(BaseService):
    """Read-only access to the board tree."""

    @traced
    def get_board(self, board_id: str) -> ServiceResult:
        """Board metadata plus its lists, each carrying its cards, all in order."""
        op = "get_board"
        if not validate_id(board_id, "board"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid board ID format")

        with self._store.engine.connect() as conn:
            board = conn.execute(select(boards).where(boards.c.id == board_id)).first()
            if board is None:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"Board not found: {board_id}"
                )

            with trace_span("load_tree"):
                list_rows = conn.execute(
                    select(lists)
                    .where(lists.c.board_id == board_id)
                    .order_by(lists.c.position, lists.c.created, lists.c.id)
                ).fetchall()
                card_rows = conn.execute(
                    select(cards)
                    .where(cards.c.board_id == board_id)
                    .order_by(cards.c.position, cards.c.created, cards.c.id)
                ).fetchall()

        by_list: dict[str, list[dict[str, Any]]] = {r.id: [] for r in list_rows}
        for card in card_rows:
            # A card whose board_id drifted from its list's is reported by check.
            if card.list_id in by_list:
                by_list[card.list_id].append(row_data(card))

        tree = [{**row_data(r), "cards": by_list[r.id]} for r in list_rows]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "board": row_data(board),
                "lists": tree,
                "count": {"lists": len(tree), "cards": sum(len(v) for v in by_list.values())},
            },
        )

    @traced
    def list_boards(self, workspace_id: str | None = None) -> ServiceResult:
        """All boards, optionally restricted to one workspace."""
        op = "list_boards"
        if workspace_id is not None and not validate_id(workspace_id, "workspace"):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Invalid workspace ID format"
            )

        stmt = select(boards).order_by(boards.c.created, boards.c.id)
        if workspace_id is not None:
            stmt = stmt.where(boards.c.workspace_id == workspace_id)
        with self._store.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()

        items = [row_data(r) for r in rows]
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    @traced
    def get_list(self, list_id: str) -> ServiceResult:
        op = "get_list"
        if not validate_id(list_id, "list"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid list ID format")

        with self._store.engine.connect() as conn:
            row = conn.execute(select(lists).where(lists.c.id == list_id)).first()
            if row is None:
                return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"List not found: {list_id}")
            card_rows = conn.execute(
                select(cards)
                .where(cards.c.list_id == list_id)
                .order_by(cards.c.position, cards.c.created, cards.c.id)
            ).fetchall()

        return ServiceResult(
            ok=True,
            op=op,
            data={**row_data(row), "cards": [row_data(c) for c in card_rows]},
        )

    @traced
    def get_card(self, card_id: str) -> ServiceResult:
        op = "get_card"
        if not validate_id(card_id, "card"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid card ID format")

        with self._store.engine.connect() as conn:
            row = conn.execute(select(cards).where(cards.c.id == card_id)).first()
        if row is None:
            return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"Card not found: {card_id}")
        return ServiceResult(ok=True, op=op, data=row_data(row))
