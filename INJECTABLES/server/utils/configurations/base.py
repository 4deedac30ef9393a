from __future__ import annotations

import json
import os
from typing import Any

from INJECTABLES.server.utils.logger import logger


# -----------------------------------------------------------------------------
def ensure_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


# -----------------------------------------------------------------------------
def load_configuration_data(path: str) -> dict[str, Any]:
    """Read a JSON settings file. A missing file means "use defaults"."""
    if not os.path.isfile(path):
        logger.debug("Configuration file not found, using defaults: %s", path)
        return {}
    try:
        with open(path, encoding="utf-8") as handle:
            content = handle.read()
        return ensure_mapping(json.loads(content))
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"Invalid configuration file {path}: {exc}") from exc
