"""InitService — create a new board store on disk.

Writes ``boardctl.toml`` (sparse: only the board name plus commented
defaults) and creates ``.boardctl/<database.filename>`` with every table.
Runs before any :class:`BoardStore` exists, so it is static.
"""

from __future__ import annotations

import logging
from pathlib import Path

from boardctl.config.discovery import CONFIG_FILENAME
from boardctl.config.models import DatabaseConfig
from boardctl.infrastructure.database.engine import init_database
from boardctl.services.result import ErrorCode, ServiceResult
from boardctl.services.telemetry import traced

logger = logging.getLogger(__name__)

_CONFIG_TEMPLATE = """\
[board]
name = "{name}"

# [database]
# filename = "{filename}"
# busy_timeout = {busy_timeout}

# [ordering]
# clamp_out_of_range = false
# require_version = false
# allow_cross_board = true
"""


class InitService:
    """Initializes the config file and database for a new board store."""

    @staticmethod
    @traced
    def init_store(path: Path, *, name: str | None = None) -> ServiceResult:
        op = "init"
        root = path.resolve()
        config_path = root / CONFIG_FILENAME
        if config_path.exists():
            return ServiceResult.failure(
                op,
                ErrorCode.VALIDATION_FAILED,
                f"Already initialized: {config_path}",
                path=str(config_path),
            )

        board_name = (name or root.name or "my-board").strip()
        if not board_name or '"' in board_name or "\\" in board_name:
            return ServiceResult.failure(
                op, ErrorCode.VALIDATION_FAILED, f"Invalid board name: {board_name!r}"
            )

        defaults = DatabaseConfig()
        root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            _CONFIG_TEMPLATE.format(
                name=board_name,
                filename=defaults.filename,
                busy_timeout=defaults.busy_timeout,
            ),
            encoding="utf-8",
        )
        db_path = root / ".boardctl" / defaults.filename
        init_database(db_path, busy_timeout=defaults.busy_timeout).dispose()

        logger.info("Initialized board store at %s", root)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(root),
                "name": board_name,
                "config": str(config_path),
                "database": str(db_path),
            },
        )
