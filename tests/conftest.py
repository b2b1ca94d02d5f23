"""Shared pytest fixtures and test helpers for boardctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import select
from sqlalchemy.engine import Engine

from boardctl.config.models import OrderingConfig
from boardctl.config.settings import BoardSettings
from boardctl.infrastructure.database.engine import init_database
from boardctl.infrastructure.database.schema import cards, lists
from boardctl.infrastructure.store import BoardStore


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's BOARDCTL_* environment out of the tests."""
    monkeypatch.delenv("BOARDCTL_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo what a CLI invocation leaves behind: log handlers, levels, telemetry."""
    from boardctl.services.telemetry import disable_telemetry

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    board = logging.getLogger("boardctl")
    board_level = board.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    board.setLevel(board_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Temporary directory that holds ``.boardctl/``."""
    return tmp_path


@pytest.fixture
def store(store_root: Path) -> BoardStore:
    """BoardStore on a fresh database with default settings."""
    s = BoardStore(BoardSettings.from_cli(root=store_root))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_store(store_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp root so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(store_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_store(root: Path, **ordering: Any) -> BoardStore:
    """BoardStore with ``[ordering]`` overrides. Caller closes it."""
    return BoardStore(BoardSettings(root=root, ordering=OrderingConfig(**ordering)))


@dataclass
class SeededBoard:
    """Ids of a board built by :func:`seed_board`, keyed by name/title."""

    workspace_id: str
    board_id: str
    lists: dict[str, str] = field(default_factory=dict)
    cards: dict[str, str] = field(default_factory=dict)


def seed_board(
    store: BoardStore,
    layout: dict[str, list[str]],
    *,
    workspace_id: str | None = None,
    board_name: str = "Board",
) -> SeededBoard:
    """Create a board whose lists and cards follow *layout*, in order.

    ``{"L1": ["c1", "c2"], "L2": []}`` gives two lists, the first with two
    cards. Card titles must be unique across the whole layout.
    """
    from boardctl.services.create import CreateService

    svc = CreateService(store)
    if workspace_id is None:
        ws = svc.create_workspace("Workspace")
        assert ws.ok, ws.error
        workspace_id = ws.data["id"]
    board = svc.create_board(workspace_id, board_name)
    assert board.ok, board.error

    seeded = SeededBoard(workspace_id=workspace_id, board_id=board.data["id"])
    for list_name, titles in layout.items():
        lst = svc.create_list(seeded.board_id, list_name)
        assert lst.ok, lst.error
        seeded.lists[list_name] = lst.data["id"]
        for title in titles:
            card = svc.create_card(lst.data["id"], title)
            assert card.ok, card.error
            seeded.cards[title] = card.data["id"]
    return seeded


def card_positions(store: BoardStore, list_id: str) -> dict[str, int]:
    """``{title: position}`` for every card in *list_id*."""
    with store.engine.connect() as conn:
        rows = conn.execute(
            select(cards.c.title, cards.c.position).where(cards.c.list_id == list_id)
        ).fetchall()
    return {r.title: r.position for r in rows}


def card_order(store: BoardStore, list_id: str) -> list[str]:
    """Card titles of *list_id* sorted by position."""
    positions = card_positions(store, list_id)
    return sorted(positions, key=positions.__getitem__)


def list_positions(store: BoardStore, board_id: str) -> dict[str, int]:
    """``{name: position}`` for every list on *board_id*."""
    with store.engine.connect() as conn:
        rows = conn.execute(
            select(lists.c.name, lists.c.position).where(lists.c.board_id == board_id)
        ).fetchall()
    return {r.name: r.position for r in rows}


def card_row(store: BoardStore, card_id: str) -> Any:
    with store.engine.connect() as conn:
        return conn.execute(select(cards).where(cards.c.id == card_id)).one()


def invoke_json(runner: CliRunner, *args: str) -> dict[str, Any]:
    """Run ``boardctl --json ARGS`` and return the parsed result."""
    import json

    from boardctl.cli import cli

    result = runner.invoke(cli, ["--json", *args])
    return json.loads(result.output)


def cli_board(runner: CliRunner, layout: dict[str, list[str]]) -> SeededBoard:
    """Build a board through the CLI in the current directory."""
    ws = invoke_json(runner, "create", "workspace", "Workspace")
    board = invoke_json(runner, "create", "board", ws["data"]["id"], "Board")
    seeded = SeededBoard(workspace_id=ws["data"]["id"], board_id=board["data"]["id"])
    for list_name, titles in layout.items():
        lst = invoke_json(runner, "create", "list", seeded.board_id, list_name)
        seeded.lists[list_name] = lst["data"]["id"]
        for title in titles:
            card = invoke_json(runner, "create", "card", lst["data"]["id"], title)
            seeded.cards[title] = card["data"]["id"]
    return seeded
