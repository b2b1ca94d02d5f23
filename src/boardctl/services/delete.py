"""DeleteService — remove cards and lists, closing the gap they leave."""

from __future__ import annotations

import logging

from sqlalchemy import delete

from boardctl.domain.ids import validate_id
from boardctl.infrastructure.database.schema import cards, lists
from boardctl.services.base import BaseService
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class DeleteService(BaseService):
    """Deletes entities and shifts their later siblings down by one."""

    @traced
    def delete_card(self, card_id: str) -> ServiceResult:
        op = "delete_card"
        if not validate_id(card_id, "card"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid card ID format")

        with self._store.transaction() as txn:
            card = txn.get_card(card_id)
            if card is None:
                return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"Card not found: {card_id}")
            txn.conn.execute(delete(cards).where(cards.c.id == card_id))
            shifted = txn.card_order(card.list_id).close_gap(card.position)

        logger.info("Card deleted: %s (%d siblings shifted)", card_id, shifted)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": card_id, "list_id": card.list_id, "shifted": shifted},
        )

    @traced
    def delete_list(self, list_id: str) -> ServiceResult:
        """Delete a list together with every card in it."""
        op = "delete_list"
        if not validate_id(list_id, "list"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid list ID format")

        with self._store.transaction() as txn:
            row = txn.get_list(list_id)
            if row is None:
                return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"List not found: {list_id}")
            removed_cards = txn.conn.execute(
                delete(cards).where(cards.c.list_id == list_id)
            ).rowcount
            txn.conn.execute(delete(lists).where(lists.c.id == list_id))
            shifted = txn.list_order(row.board_id).close_gap(row.position)

        logger.info("List deleted: %s with %d cards", list_id, removed_cards)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": list_id,
                "board_id": row.board_id,
                "cards_deleted": removed_cards,
                "shifted": shifted,
            },
        )
