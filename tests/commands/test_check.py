"""Tests for the check command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import update

from boardctl.cli import cli
from boardctl.config.settings import BoardSettings
from boardctl.infrastructure.database.schema import cards
from boardctl.infrastructure.store import BoardStore
from tests.conftest import cli_board, invoke_json


def _damage(root: Path, card_id: str, position: int) -> None:
    store = BoardStore(BoardSettings.from_cli(root=root))
    try:
        with store.transaction() as txn:
            txn.conn.execute(update(cards).where(cards.c.id == card_id).values(position=position))
    finally:
        store.close()


@pytest.mark.usefixtures("_isolated_store")
class TestCheckCommand:
    def test_clean(self, cli_runner: CliRunner) -> None:
        cli_board(cli_runner, {"Todo": ["a", "b"]})
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "No issues found" in result.output

    def test_reports_and_fixes(self, cli_runner: CliRunner, store_root: Path) -> None:
        seeded = cli_board(cli_runner, {"Todo": ["a", "b", "c"]})
        _damage(store_root, seeded.cards["b"], 0)

        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "position_density" in result.output
        assert "1 errors" in result.output

        fixed = invoke_json(cli_runner, "check", "--fix")
        assert fixed["data"]["count"] == 1
        assert invoke_json(cli_runner, "check")["data"]["count"] == 0

    def test_board_filter(self, cli_runner: CliRunner) -> None:
        seeded = cli_board(cli_runner, {"Todo": []})
        data = invoke_json(cli_runner, "check", "--board", seeded.board_id)
        assert data["data"]["boards"] == 1

    def test_unknown_board(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "--board", "brd_000000000000"])
        assert result.exit_code == 1
