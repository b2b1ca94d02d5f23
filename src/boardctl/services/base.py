"""BaseService — foundation for all boardctl services.

Every service receives a :class:`BoardStore` at construction time and owns
its transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy import Row

    from boardctl.config.settings import BoardSettings
    from boardctl.infrastructure.store import BoardStore


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ReorderService(BaseService):
            def reorder_card(self, card_id: str, position: int) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: BoardStore) -> None:
        self._store = store

    @property
    def _settings(self) -> BoardSettings:
        return self._store.settings


def row_data(row: Row[Any]) -> dict[str, Any]:
    """A result row as a plain dict for ``ServiceResult.data``."""
    return dict(row._mapping)
