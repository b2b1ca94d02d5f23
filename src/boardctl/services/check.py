"""CheckService — ordering integrity and repair.

Two categories: position density (every container's positions form
``0..n-1``) and denormalized scope (a card's ``board_id`` and
``workspace_id`` agree with its list). ``fix`` renumbers damaged
containers in their current order and copies scope columns from the
owning list, all in one transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select, update

from boardctl.domain.ids import validate_id
from boardctl.domain.ordering import density_issues
from boardctl.infrastructure.database.ordering import CARD_ORDER, LIST_ORDER, OrderSpec
from boardctl.infrastructure.database.schema import boards, cards, lists
from boardctl.services.base import BaseService
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from sqlalchemy import Connection

logger = logging.getLogger(__name__)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CAT_DENSITY = "position_density"
CAT_SCOPE = "scope_consistency"


class CheckService(BaseService):
    """Detects and repairs ordering damage."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def check(self, *, board_id: str | None = None) -> ServiceResult:
        """Report integrity issues without modifying anything."""
        op = "check"
        invalid = self._validate_board(op, board_id)
        if invalid is not None:
            return invalid

        with self._store.engine.connect() as conn:
            board_ids = self._board_ids(conn, board_id)
            if board_id is not None and not board_ids:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"Board not found: {board_id}"
                )
            issues = self._collect(conn, board_ids)

        return ServiceResult(
            ok=True,
            op=op,
            data={"issues": issues, "count": len(issues), "boards": len(board_ids)},
        )

    @traced
    def fix(self, *, board_id: str | None = None) -> ServiceResult:
        """Repair every issue ``check`` would report."""
        op = "fix"
        invalid = self._validate_board(op, board_id)
        if invalid is not None:
            return invalid

        fixes: list[str] = []
        with self._store.transaction() as txn:
            board_ids = self._board_ids(txn.conn, board_id)
            if board_id is not None and not board_ids:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"Board not found: {board_id}"
                )

            renumbered: set[str] = set()
            for issue in self._collect(txn.conn, board_ids):
                if issue["category"] == CAT_SCOPE:
                    txn.conn.execute(
                        update(cards)
                        .where(cards.c.id == issue["entity_id"])
                        .values(
                            board_id=issue["expected"]["board_id"],
                            workspace_id=issue["expected"]["workspace_id"],
                        )
                    )
                    fixes.append(f"Realigned card {issue['entity_id']} with its list")
                    continue
                if issue["container_id"] in renumbered:
                    continue
                renumbered.add(issue["container_id"])
                spec = CARD_ORDER if issue["kind"] == "card" else LIST_ORDER
                changed = txn.ordered(spec, issue["container_id"]).renumber()
                fixes.append(
                    f"Renumbered {changed} {issue['kind']}(s) in {issue['container_id']}"
                )

        if fixes:
            logger.info("Check fixed %d issue(s)", len(fixes))
        return ServiceResult(ok=True, op=op, data={"fixes": fixes, "count": len(fixes)})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_board(op: str, board_id: str | None) -> ServiceResult | None:
        if board_id is not None and not validate_id(board_id, "board"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid board ID format")
        return None

    @staticmethod
    def _board_ids(conn: Connection, board_id: str | None) -> list[str]:
        stmt = select(boards.c.id).order_by(boards.c.id)
        if board_id is not None:
            stmt = stmt.where(boards.c.id == board_id)
        return [r.id for r in conn.execute(stmt)]

    def _collect(self, conn: Connection, board_ids: list[str]) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for bid in board_ids:
            with trace_span("scope_consistency"):
                issues.extend(self._check_scope(conn, bid))
            with trace_span("position_density"):
                issues.extend(self._check_density(conn, LIST_ORDER, "list", bid))
                list_ids = conn.execute(
                    select(lists.c.id).where(lists.c.board_id == bid).order_by(lists.c.id)
                ).fetchall()
                for row in list_ids:
                    issues.extend(self._check_density(conn, CARD_ORDER, "card", row.id))
        return issues

    @staticmethod
    def _check_density(
        conn: Connection, spec: OrderSpec, kind: str, container_id: str
    ) -> list[dict[str, Any]]:
        positions = [
            r.position
            for r in conn.execute(
                select(spec.table.c.position).where(spec.container == container_id)
            )
        ]
        return [
            {
                "category": CAT_DENSITY,
                "severity": SEVERITY_ERROR if "duplicate" in problem else SEVERITY_WARNING,
                "kind": kind,
                "container_id": container_id,
                "message": f"{kind.capitalize()}s in {container_id}: {problem}",
                "fix_action": "renumber",
            }
            for problem in density_issues(positions)
        ]

    @staticmethod
    def _check_scope(conn: Connection, board_id: str) -> list[dict[str, Any]]:
        rows = conn.execute(
            select(
                cards.c.id,
                cards.c.board_id,
                cards.c.workspace_id,
                lists.c.board_id.label("list_board_id"),
                lists.c.workspace_id.label("list_workspace_id"),
            )
            .select_from(cards.join(lists, cards.c.list_id == lists.c.id))
            .where(lists.c.board_id == board_id)
            .where(
                (cards.c.board_id != lists.c.board_id)
                | (cards.c.workspace_id != lists.c.workspace_id)
            )
        ).fetchall()
        return [
            {
                "category": CAT_SCOPE,
                "severity": SEVERITY_ERROR,
                "entity_id": r.id,
                "message": f"Card {r.id} records board {r.board_id} but its list is on "
                f"{r.list_board_id}",
                "expected": {"board_id": r.list_board_id, "workspace_id": r.list_workspace_id},
                "fix_action": "realign_scope",
            }
            for r in rows
        ]
