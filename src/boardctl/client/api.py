"""BoardApi — the client's view of the server.

``BoardApi`` is a Protocol so the drag session can run against any
transport. :class:`ServiceBoardApi` is the in-process implementation
backed by the service layer; it turns a failed ServiceResult into
:class:`ReorderRejected`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from pydantic import BaseModel

from boardctl.client.models import CardView, ListView, tree_from_payload

if TYPE_CHECKING:
    from boardctl.infrastructure.store import BoardStore
    from boardctl.services.result import ServiceResult


class ReorderRequest(BaseModel):
    """Body of a reorder call. ``container_id`` is set only for cross-list moves."""

    model_config = {"frozen": True}

    position: int
    container_id: str | None = None
    expected_version: int | None = None


class ReorderRejected(Exception):
    """The server refused an operation (validation, scope, not found, stale)."""

    def __init__(self, code: str, message: str, *, status: int = 500, detail: Any = None) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status = status
        self.detail = detail or {}

    @classmethod
    def from_result(cls, result: ServiceResult) -> ReorderRejected:
        error = result.error
        if error is None:
            return cls("UNKNOWN", f"{result.op} failed")
        return cls(error.code, error.message, status=error.status, detail=error.detail)


class BoardApi(Protocol):
    async def fetch_board(self, board_id: str) -> tuple[ListView, ...]: ...

    async def reorder_card(self, card_id: str, request: ReorderRequest) -> CardView: ...

    async def reorder_list(self, list_id: str, request: ReorderRequest) -> ListView: ...


class ServiceBoardApi:
    """``BoardApi`` over a local :class:`BoardStore`.

    Service calls are short SQLite transactions and run inline on the
    event loop.
    """

    def __init__(self, store: BoardStore) -> None:
        self._store = store

    async def fetch_board(self, board_id: str) -> tuple[ListView, ...]:
        from boardctl.services.query import QueryService

        return tree_from_payload(self._unwrap(QueryService(self._store).get_board(board_id)))

    async def reorder_card(self, card_id: str, request: ReorderRequest) -> CardView:
        from boardctl.services.reorder import ReorderService

        result = ReorderService(self._store).reorder_card(
            card_id,
            request.position,
            list_id=request.container_id,
            expected_version=request.expected_version,
        )
        return CardView.model_validate(self._unwrap(result))

    async def reorder_list(self, list_id: str, request: ReorderRequest) -> ListView:
        from boardctl.services.reorder import ReorderService

        if request.container_id is not None:
            raise ReorderRejected(
                "VALIDATION_FAILED", "Lists cannot change board", status=400
            )
        result = ReorderService(self._store).reorder_list(
            list_id, request.position, expected_version=request.expected_version
        )
        return ListView.model_validate(self._unwrap(result))

    @staticmethod
    def _unwrap(result: ServiceResult) -> dict[str, Any]:
        if not result.ok:
            raise ReorderRejected.from_result(result)
        return result.data
