"""Drag sessions against the real service layer.

Each test drives a DragSession over ServiceBoardApi, then refetches and
checks that the optimistic local tree matches what the server stored,
versions included.
"""

from __future__ import annotations

import asyncio

from boardctl.client.api import ServiceBoardApi
from boardctl.client.drag import DragSession, DropOutcome
from boardctl.client.store import BoardDataStore
from boardctl.infrastructure.store import BoardStore
from tests.conftest import card_order, list_positions, seed_board


def _open(store: BoardStore, board_id: str) -> BoardDataStore:
    data = BoardDataStore(ServiceBoardApi(store), board_id)
    asyncio.run(data.refetch())
    return data


def _drag(data: BoardDataStore, active: str, over: str) -> DropOutcome:
    session = DragSession(data)
    assert session.start(active)
    return asyncio.run(session.drop(over))


def _matches_server(data: BoardDataStore) -> bool:
    local = data.lists
    return asyncio.run(data.api.fetch_board(data.board_id)) == local


class TestDragRoundtrip:
    def test_same_list_card(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"Todo": ["c1", "c2", "c3"]})
        data = _open(store, seeded.board_id)
        assert _drag(data, seeded.cards["c1"], seeded.cards["c3"]) is DropOutcome.APPLIED
        assert card_order(store, seeded.lists["Todo"]) == ["c2", "c3", "c1"]
        assert _matches_server(data)

    def test_cross_list_into_empty(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"Todo": ["c1", "c2"], "Done": []})
        data = _open(store, seeded.board_id)
        outcome = _drag(data, seeded.cards["c1"], f"list-{seeded.lists['Done']}")
        assert outcome is DropOutcome.APPLIED
        assert card_order(store, seeded.lists["Done"]) == ["c1"]
        assert card_order(store, seeded.lists["Todo"]) == ["c2"]
        assert _matches_server(data)

    def test_cross_list_onto_card(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"Todo": ["c1", "c2"], "Done": ["d1", "d2"]})
        data = _open(store, seeded.board_id)
        assert _drag(data, seeded.cards["c2"], seeded.cards["d2"]) is DropOutcome.APPLIED
        assert card_order(store, seeded.lists["Done"]) == ["d1", "c2", "d2"]
        assert _matches_server(data)

    def test_list_move(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"A": ["a"], "B": [], "C": []})
        data = _open(store, seeded.board_id)
        assert _drag(data, seeded.lists["C"], seeded.lists["A"]) is DropOutcome.APPLIED
        assert list_positions(store, seeded.board_id) == {"C": 0, "A": 1, "B": 2}
        assert _matches_server(data)

    def test_consecutive_drags_keep_versions_in_step(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"Todo": ["c1", "c2", "c3"], "Done": []})
        data = _open(store, seeded.board_id)
        assert _drag(data, seeded.cards["c1"], seeded.cards["c3"]) is DropOutcome.APPLIED
        assert _drag(data, seeded.cards["c3"], seeded.cards["c2"]) is DropOutcome.APPLIED
        done = f"list-{seeded.lists['Done']}"
        assert _drag(data, seeded.cards["c2"], done) is DropOutcome.APPLIED
        assert _matches_server(data)

    def test_stale_client_resyncs(self, store: BoardStore) -> None:
        seeded = seed_board(store, {"Todo": ["c1", "c2", "c3"]})
        first = _open(store, seeded.board_id)
        second = _open(store, seeded.board_id)

        assert _drag(first, seeded.cards["c1"], seeded.cards["c3"]) is DropOutcome.APPLIED
        outcome = _drag(second, seeded.cards["c1"], seeded.cards["c2"])

        assert outcome is DropOutcome.RESYNCED
        assert card_order(store, seeded.lists["Todo"]) == ["c2", "c3", "c1"]
        assert second.lists == first.lists
        assert _matches_server(second)

    def test_card_deleted_elsewhere_resyncs(self, store: BoardStore) -> None:
        from boardctl.services.delete import DeleteService

        seeded = seed_board(store, {"Todo": ["c1", "c2"], "Done": []})
        data = _open(store, seeded.board_id)
        assert DeleteService(store).delete_card(seeded.cards["c1"]).ok

        outcome = _drag(data, seeded.cards["c1"], f"list-{seeded.lists['Done']}")
        assert outcome is DropOutcome.RESYNCED
        assert [c.title for c in data.lists[0].cards] == ["c2"]
