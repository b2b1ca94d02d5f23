"""ReorderService — the authoritative position-renumbering transaction.

Pipeline: VALIDATE → LOAD → GUARD → SHIFT → RESPOND

Cards and lists share one algorithm (``OrderedCollection``); a list
reorder is the same-container special case. Every check that can fail
runs before the first write, and all writes of one reorder commit in a
single transaction, so a failure never leaves a partially shifted
container behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from boardctl.domain.ids import validate_id
from boardctl.domain.ordering import clamp_position, is_valid_position
from boardctl.infrastructure.database.ordering import CARD_ORDER, LIST_ORDER, OrderSpec
from boardctl.services.base import BaseService, row_data
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from sqlalchemy import Row

    from boardctl.infrastructure.store import StoreTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Kind:
    name: str
    container: str
    spec: OrderSpec


_CARD = _Kind(name="card", container="list", spec=CARD_ORDER)
_LIST = _Kind(name="list", container="board", spec=LIST_ORDER)


class ReorderService(BaseService):
    """Moves cards within and across lists, and lists within a board."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def reorder_card(
        self,
        card_id: str,
        position: int,
        *,
        list_id: str | None = None,
        expected_version: int | None = None,
    ) -> ServiceResult:
        """Move a card to *position*, in *list_id* when given (cross-list move).

        A *list_id* equal to the card's current list is a same-list reorder.
        """
        return self._reorder(
            "reorder_card",
            _CARD,
            card_id,
            position,
            target_container_id=list_id,
            expected_version=expected_version,
        )

    @traced
    def reorder_list(
        self,
        list_id: str,
        position: int,
        *,
        expected_version: int | None = None,
    ) -> ServiceResult:
        """Move a list to *position* within its board."""
        return self._reorder(
            "reorder_list",
            _LIST,
            list_id,
            position,
            target_container_id=None,
            expected_version=expected_version,
        )

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _reorder(
        self,
        op: str,
        kind: _Kind,
        entity_id: str,
        position: Any,
        *,
        target_container_id: str | None,
        expected_version: Any,
    ) -> ServiceResult:
        # ── VALIDATE ─────────────────────────────────────────────
        invalid = self._validate(
            op, kind, entity_id, position, target_container_id, expected_version
        )
        if invalid is not None:
            return invalid

        warnings: list[str] = []
        table = kind.spec.table

        with self._store.transaction() as txn:
            # ── LOAD ─────────────────────────────────────────────
            row = txn.conn.execute(select(table).where(table.c.id == entity_id)).first()
            if row is None:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"{kind.name.capitalize()} not found: {entity_id}"
                )

            # ── GUARD ────────────────────────────────────────────
            if expected_version is not None and expected_version != row.version:
                return ServiceResult.failure(
                    op,
                    ErrorCode.STALE_VERSION,
                    f"{kind.name.capitalize()} {entity_id} has changed since it was read "
                    f"(expected version {expected_version}, current {row.version})",
                    current_version=row.version,
                )

            source_id = getattr(row, kind.spec.container_column)
            crossing = target_container_id is not None and target_container_id != source_id

            if crossing:
                target = txn.get_list(target_container_id)
                if target is None:
                    return ServiceResult.failure(
                        op, ErrorCode.NOT_FOUND, f"Target list not found: {target_container_id}"
                    )
                denied = self._check_scope(op, row, target)
                if denied is not None:
                    return denied

            # ── SHIFT ────────────────────────────────────────────
            with trace_span("range_shift") as span:
                if crossing:
                    requested = self._clamped(
                        position, txn.card_order(target_container_id).size(), warnings
                    )
                    shifted = self._move_across(txn, row, target, requested)
                else:
                    order = txn.ordered(kind.spec, source_id)
                    requested = self._clamped(position, order.size() - 1, warnings)
                    shifted = order.move_to(entity_id, row.position, requested)
                if span is not None:
                    span.annotate("shifted", shifted)

            updated = txn.conn.execute(select(table).where(table.c.id == entity_id)).one()

        # ── RESPOND ──────────────────────────────────────────────
        if crossing:
            logger.info(
                "%s moved: %s from %s to %s at position %d",
                kind.name.capitalize(),
                entity_id,
                source_id,
                target_container_id,
                requested,
            )
        elif shifted or requested != row.position:
            logger.info(
                "%s reordered: %s to position %d", kind.name.capitalize(), entity_id, requested
            )
        else:
            logger.debug("%s reorder no-op: %s", kind.name.capitalize(), entity_id)

        return ServiceResult(ok=True, op=op, data=row_data(updated), warnings=warnings)

    def _validate(
        self,
        op: str,
        kind: _Kind,
        entity_id: str,
        position: Any,
        target_container_id: str | None,
        expected_version: Any,
    ) -> ServiceResult | None:
        if not validate_id(entity_id, kind.name):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, f"Invalid {kind.name} ID format"
            )
        if not is_valid_position(position):
            return ServiceResult.failure(
                op,
                ErrorCode.VALIDATION_FAILED,
                "position must be a non-negative integer",
                position=repr(position),
            )
        if target_container_id is not None and not validate_id(target_container_id, "list"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid list ID format")
        if expected_version is None:
            if self._settings.ordering.require_version:
                return ServiceResult.failure(
                    op, ErrorCode.VALIDATION_FAILED, "expected_version is required"
                )
        elif isinstance(expected_version, bool) or not isinstance(expected_version, int):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "expected_version must be an integer"
            )
        return None

    def _check_scope(self, op: str, card: Row[Any], target: Row[Any]) -> ServiceResult | None:
        """A card may only move to a list in its own workspace (and board, if configured)."""
        if target.workspace_id != card.workspace_id:
            return ServiceResult.failure(
                op,
                ErrorCode.SCOPE_VIOLATION,
                "Cannot move card to a list in a different workspace",
                target_list_id=target.id,
            )
        if not self._settings.ordering.allow_cross_board and target.board_id != card.board_id:
            return ServiceResult.failure(
                op,
                ErrorCode.SCOPE_VIOLATION,
                "Cannot move card to a list on a different board",
                target_list_id=target.id,
            )
        return None

    def _clamped(self, requested: int, last_slot: int, warnings: list[str]) -> int:
        """Apply ``ordering.clamp_out_of_range``; otherwise return *requested* as-is."""
        if not self._settings.ordering.clamp_out_of_range:
            return requested
        clamped = clamp_position(requested, max(last_slot, 0))
        if clamped != requested:
            warnings.append(f"Position {requested} clamped to {clamped}")
        return clamped

    @staticmethod
    def _move_across(
        txn: StoreTransaction, card: Row[Any], target: Row[Any], requested: int
    ) -> int:
        """Close the gap in the source list, open a slot in the target, place the card."""
        source = txn.card_order(card.list_id)
        dest = txn.card_order(target.id)
        shifted = source.close_gap(card.position, exclude=card.id)
        shifted += dest.open_slot(requested)
        dest.place(card.id, requested, board_id=target.board_id)
        return shifted
