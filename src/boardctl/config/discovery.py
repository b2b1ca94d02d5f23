"""Config file discovery.

Walk-up finder locates boardctl.toml, the same way git finds .git/.
Supports the BOARDCTL_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "boardctl.toml"
CONFIG_ENV_VAR = "BOARDCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for boardctl.toml.

    BOARDCTL_CONFIG wins when set; a missing file there yields None rather
    than falling back to discovery.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent
