from __future__ import annotations

from INJECTABLES.server.utils.configurations.base import (
    ensure_mapping,
    load_configuration_data,
)

from INJECTABLES.server.utils.configurations.server import (
    DatabaseSettings,
    ExtractionSettings,
    ServerSettings,
    server_settings,
    get_server_settings,
)

__all__ = [
    "ensure_mapping",
    "load_configuration_data",
    "DatabaseSettings",
    "ExtractionSettings",
    "ServerSettings",
    "server_settings",
    "get_server_settings",
]
