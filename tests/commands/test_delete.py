"""Tests for delete CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from boardctl.cli import cli
from tests.conftest import cli_board, invoke_json


@pytest.mark.usefixtures("_isolated_store")
class TestDeleteCommands:
    def test_delete_card(self, cli_runner: CliRunner) -> None:
        seeded = cli_board(cli_runner, {"Todo": ["a", "b", "c"]})
        result = cli_runner.invoke(cli, ["delete", "card", seeded.cards["a"]])
        assert result.exit_code == 0
        assert "shifted: 2" in result.output
        tree = invoke_json(cli_runner, "show", seeded.board_id)
        cards = tree["data"]["lists"][0]["cards"]
        assert [(c["title"], c["position"]) for c in cards] == [("b", 0), ("c", 1)]

    def test_delete_list(self, cli_runner: CliRunner) -> None:
        seeded = cli_board(cli_runner, {"A": ["a"], "B": []})
        data = invoke_json(cli_runner, "delete", "list", seeded.lists["A"])
        assert data["data"]["cards_deleted"] == 1
        tree = invoke_json(cli_runner, "show", seeded.board_id)
        assert [(lst["name"], lst["position"]) for lst in tree["data"]["lists"]] == [("B", 0)]

    def test_delete_missing(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["delete", "card", "crd_000000000000"])
        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output
