"""Tests for config section models."""

import pytest

from boardctl.config.models import BoardConfig, DatabaseConfig, OrderingConfig


class TestDefaults:
    def test_board(self) -> None:
        assert BoardConfig().name == "my-board"

    def test_database(self) -> None:
        cfg = DatabaseConfig()
        assert cfg.filename == "boardctl.db"
        assert cfg.busy_timeout == 5.0

    def test_ordering(self) -> None:
        cfg = OrderingConfig()
        assert cfg.clamp_out_of_range is False
        assert cfg.require_version is False
        assert cfg.allow_cross_board is True


class TestFrozen:
    def test_cannot_assign(self) -> None:
        cfg = OrderingConfig()
        with pytest.raises(Exception):
            cfg.clamp_out_of_range = True  # type: ignore[misc]
