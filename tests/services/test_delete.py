"""Tests for DeleteService — gap closing after removal."""

from __future__ import annotations

import pytest

from boardctl.infrastructure.store import BoardStore
from boardctl.services.delete import DeleteService
from tests.conftest import card_positions, card_row, list_positions, seed_board


@pytest.fixture
def svc(store: BoardStore) -> DeleteService:
    return DeleteService(store)


class TestDeleteCard:
    def test_closes_gap(self, store: BoardStore, svc: DeleteService) -> None:
        seeded = seed_board(store, {"L1": ["a", "b", "c"]})
        result = svc.delete_card(seeded.cards["a"])
        assert result.ok
        assert result.data == {"id": seeded.cards["a"], "list_id": seeded.lists["L1"], "shifted": 2}
        assert card_positions(store, seeded.lists["L1"]) == {"b": 0, "c": 1}
        assert card_row(store, seeded.cards["b"]).version == 2

    def test_last_card_shifts_nothing(self, store: BoardStore, svc: DeleteService) -> None:
        seeded = seed_board(store, {"L1": ["a", "b"]})
        result = svc.delete_card(seeded.cards["b"])
        assert result.data["shifted"] == 0
        assert card_positions(store, seeded.lists["L1"]) == {"a": 0}

    def test_unknown(self, svc: DeleteService) -> None:
        assert svc.delete_card("crd_000000000000").error.code == "NOT_FOUND"

    def test_bad_id(self, svc: DeleteService) -> None:
        assert svc.delete_card("a").error.code == "VALIDATION_FAILED"


class TestDeleteList:
    def test_removes_cards_and_closes_gap(self, store: BoardStore, svc: DeleteService) -> None:
        seeded = seed_board(store, {"A": ["a1", "a2"], "B": ["b1"], "C": []})
        result = svc.delete_list(seeded.lists["A"])
        assert result.ok
        assert result.data["cards_deleted"] == 2
        assert result.data["shifted"] == 2
        assert result.data["board_id"] == seeded.board_id
        assert list_positions(store, seeded.board_id) == {"B": 0, "C": 1}
        assert card_positions(store, seeded.lists["A"]) == {}
        assert card_positions(store, seeded.lists["B"]) == {"b1": 0}

    def test_unknown(self, svc: DeleteService) -> None:
        assert svc.delete_list("lst_000000000000").error.code == "NOT_FOUND"
