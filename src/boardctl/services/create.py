"""CreateService — workspaces, boards, lists, and cards.

Lists and cards are appended at ``max(position) + 1`` unless the caller
supplies a position. An explicit position is stored as-is; siblings are
not shifted to make room for it.
"""

from __future__ import annotations

import logging

from sqlalchemy import insert

from boardctl.domain.ids import generate_id, validate_id
from boardctl.domain.ordering import is_valid_position
from boardctl.infrastructure.database.schema import boards, cards, lists, workspaces
from boardctl.services.base import BaseService, row_data
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import traced

logger = logging.getLogger(__name__)

WORKSPACE_NAME_MAX = 100
BOARD_NAME_MAX = 100
LIST_NAME_MAX = 100
LIST_DESCRIPTION_MAX = 500
CARD_TITLE_MAX = 200
CARD_DESCRIPTION_MAX = 2000


def _clean(value: str | None, label: str, max_len: int, *, required: bool) -> tuple[str, str]:
    """Trim *value* and check it. Returns ``(text, error)``; error is "" when valid."""
    text = (value or "").strip()
    if required and not text:
        return text, f"Please provide {label}"
    if len(text) > max_len:
        return text, f"{label.capitalize()} cannot exceed {max_len} characters"
    return text, ""


class CreateService(BaseService):
    """Creates entities and assigns initial positions."""

    @traced
    def create_workspace(self, name: str) -> ServiceResult:
        op = "create_workspace"
        clean_name, err = _clean(name, "workspace name", WORKSPACE_NAME_MAX, required=True)
        if err:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, err)

        workspace_id = generate_id("workspace")
        with self._store.transaction() as txn:
            txn.conn.execute(
                insert(workspaces).values(id=workspace_id, name=clean_name, created=txn.now)
            )

        logger.info("Workspace created: %s", workspace_id)
        return ServiceResult(ok=True, op=op, data={"id": workspace_id, "name": clean_name})

    @traced
    def create_board(self, workspace_id: str, name: str) -> ServiceResult:
        op = "create_board"
        if not validate_id(workspace_id, "workspace"):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Invalid workspace ID format"
            )
        clean_name, err = _clean(name, "board name", BOARD_NAME_MAX, required=True)
        if err:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, err)

        board_id = generate_id("board")
        with self._store.transaction() as txn:
            if txn.get_workspace(workspace_id) is None:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"Workspace not found: {workspace_id}"
                )
            txn.conn.execute(
                insert(boards).values(
                    id=board_id,
                    workspace_id=workspace_id,
                    name=clean_name,
                    created=txn.now,
                )
            )

        logger.info("Board created: %s in %s", board_id, workspace_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": board_id, "workspace_id": workspace_id, "name": clean_name},
        )

    @traced
    def create_list(
        self,
        board_id: str,
        name: str,
        *,
        description: str | None = None,
        position: int | None = None,
    ) -> ServiceResult:
        op = "create_list"
        if not validate_id(board_id, "board"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid board ID format")
        clean_name, err = _clean(name, "list name", LIST_NAME_MAX, required=True)
        if not err:
            clean_desc, err = _clean(
                description, "description", LIST_DESCRIPTION_MAX, required=False
            )
        if err:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, err)
        if position is not None and not is_valid_position(position):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Position must be a non-negative integer"
            )

        list_id = generate_id("list")
        with self._store.transaction() as txn:
            board_row = txn.get_board(board_id)
            if board_row is None:
                return ServiceResult.failure(
                    op, ErrorCode.NOT_FOUND, f"Board not found: {board_id}"
                )

            if position is None:
                position = txn.list_order(board_id).append_position()

            txn.conn.execute(
                insert(lists).values(
                    id=list_id,
                    board_id=board_id,
                    workspace_id=board_row.workspace_id,
                    name=clean_name,
                    description=clean_desc or None,
                    position=position,
                    version=1,
                    created=txn.now,
                    modified=txn.now,
                )
            )
            row = txn.get_list(list_id)

        logger.info("List created: %s at position %d", list_id, position)
        return ServiceResult(ok=True, op=op, data=row_data(row))

    @traced
    def create_card(
        self,
        list_id: str,
        title: str,
        *,
        description: str | None = None,
        position: int | None = None,
    ) -> ServiceResult:
        op = "create_card"
        if not validate_id(list_id, "list"):
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Invalid list ID format")
        clean_title, err = _clean(title, "card title", CARD_TITLE_MAX, required=True)
        if not err:
            clean_desc, err = _clean(
                description, "description", CARD_DESCRIPTION_MAX, required=False
            )
        if err:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, err)
        if position is not None and not is_valid_position(position):
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, "Position must be a non-negative integer"
            )

        card_id = generate_id("card")
        with self._store.transaction() as txn:
            list_row = txn.get_list(list_id)
            if list_row is None:
                return ServiceResult.failure(op, ErrorCode.NOT_FOUND, f"List not found: {list_id}")

            if position is None:
                position = txn.card_order(list_id).append_position()

            txn.conn.execute(
                insert(cards).values(
                    id=card_id,
                    list_id=list_id,
                    board_id=list_row.board_id,
                    workspace_id=list_row.workspace_id,
                    title=clean_title,
                    description=clean_desc or None,
                    position=position,
                    version=1,
                    created=txn.now,
                    modified=txn.now,
                )
            )
            row = txn.get_card(card_id)

        logger.info("Card created: %s at position %d", card_id, position)
        return ServiceResult(ok=True, op=op, data=row_data(row))
