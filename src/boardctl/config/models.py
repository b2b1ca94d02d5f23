"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults live here, boardctl.toml only carries
overrides. An empty file is a valid config.
"""

from __future__ import annotations

from pydantic import BaseModel


class BoardConfig(BaseModel):
    """[board] section."""

    model_config = {"frozen": True}

    name: str = "my-board"


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    filename: str = "boardctl.db"
    busy_timeout: float = 5.0


class OrderingConfig(BaseModel):
    """[ordering] section.

    ``clamp_out_of_range`` is off by default: a requested position past the
    end of a container is stored as-is and leaves a trailing gap.
    """

    model_config = {"frozen": True}

    clamp_out_of_range: bool = False
    require_version: bool = False
    allow_cross_board: bool = True
