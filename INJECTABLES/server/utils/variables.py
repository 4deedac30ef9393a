from __future__ import annotations

import os

from dotenv import load_dotenv

from INJECTABLES.server.utils.constants import ENV_FILENAME, SETUP_DIR
from INJECTABLES.server.utils.logger import logger


###############################################################################
class EnvironmentVariables:
    def __init__(self, env_path: str | None = None) -> None:
        self.env_path = env_path or os.path.join(SETUP_DIR, ENV_FILENAME)
        if os.path.exists(self.env_path):
            load_dotenv(dotenv_path=self.env_path, override=True)
        else:
            logger.debug(".env file not found at: %s", self.env_path)

    # -------------------------------------------------------------------------
    def get(self, name: str, default: str | None = None) -> str | None:
        value = os.environ.get(name)
        if value is None or not value.strip():
            return default
        return value.strip()
