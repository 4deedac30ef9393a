from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from INJECTABLES.server.utils.configurations.base import (
    ensure_mapping,
    load_configuration_data,
)
from INJECTABLES.server.utils.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_LOGGED_ERRORS,
    DEFAULT_NAME_MAX_LENGTH,
    DEFAULT_NAME_MIN_LENGTH,
    DEFAULT_POSTGRES_PORT,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_SELECT_PAGE_SIZE,
    DEFAULT_SNOMED_FILES,
    DEFAULT_TEMPLATE_MAX_LENGTH,
    SERVER_CONFIGURATION_FILE,
    SOURCES_PATH,
)
from INJECTABLES.server.utils.types import (
    coerce_bool,
    coerce_int,
    coerce_positive_int,
    coerce_str_or_none,
    coerce_string_tuple,
)
from INJECTABLES.server.utils.variables import EnvironmentVariables


# [SERVER SETTINGS]
###############################################################################
@dataclass(frozen=True)
class DatabaseSettings:
    select_page_size: int = DEFAULT_SELECT_PAGE_SIZE
    embedded_database: bool = True
    engine: str | None = None
    host: str | None = None
    port: int | None = None
    database_name: str | None = None
    username: str | None = None
    password: str | None = None
    ssl: bool = False
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT

# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ExtractionSettings:
    source_files: tuple[str, ...]
    batch_size: int
    max_logged_errors: int
    progress_interval: int
    name_max_length: int
    template_max_length: int
    name_min_length: int

# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ServerSettings:
    database: DatabaseSettings
    extraction: ExtractionSettings


# [BUILDER FUNCTIONS]
###############################################################################
def build_database_settings(
    payload: dict[str, Any] | Any,
    environment: EnvironmentVariables | None = None,
) -> DatabaseSettings:
    payload = ensure_mapping(payload)
    page_size = coerce_positive_int(
        payload.get("select_page_size"), DEFAULT_SELECT_PAGE_SIZE
    )
    embedded = coerce_bool(payload.get("embedded_database"), True)
    if embedded:
        # embedded SQLite never reads the external connection fields
        return DatabaseSettings(select_page_size=page_size)

    # Credentials from the .env file take over from the JSON payload
    env = environment or EnvironmentVariables()
    engine_value = coerce_str_or_none(payload.get("engine")) or "postgres"
    return DatabaseSettings(
        embedded_database=False,
        engine=engine_value.lower(),
        host=env.get("INJECTABLES_DB_HOST") or coerce_str_or_none(payload.get("host")),
        port=coerce_int(
            payload.get("port"), DEFAULT_POSTGRES_PORT, minimum=1, maximum=65535
        ),
        database_name=env.get("INJECTABLES_DB_NAME")
        or coerce_str_or_none(payload.get("database_name")),
        username=env.get("INJECTABLES_DB_USER")
        or coerce_str_or_none(payload.get("username")),
        password=env.get("INJECTABLES_DB_PASSWORD")
        or coerce_str_or_none(payload.get("password")),
        ssl=coerce_bool(payload.get("ssl"), False),
        connect_timeout=coerce_int(
            payload.get("connect_timeout"), DEFAULT_CONNECT_TIMEOUT, minimum=1
        ),
        select_page_size=page_size,
    )

# -----------------------------------------------------------------------------
def resolve_source_files(value: Any) -> tuple[str, ...]:
    candidates = coerce_string_tuple(value) or tuple(DEFAULT_SNOMED_FILES)
    resolved: list[str] = []
    for candidate in candidates:
        if os.path.isabs(candidate):
            resolved.append(candidate)
        else:
            resolved.append(os.path.join(SOURCES_PATH, candidate))
    return tuple(resolved)

# -----------------------------------------------------------------------------
def build_extraction_settings(data: dict[str, Any] | Any) -> ExtractionSettings:
    payload = ensure_mapping(data)
    min_length = coerce_positive_int(
        payload.get("name_min_length"), DEFAULT_NAME_MIN_LENGTH
    )
    name_max_length = coerce_positive_int(
        payload.get("name_max_length"), DEFAULT_NAME_MAX_LENGTH
    )
    template_max_length = coerce_positive_int(
        payload.get("template_max_length"), DEFAULT_TEMPLATE_MAX_LENGTH
    )
    if template_max_length < name_max_length:
        template_max_length = name_max_length
    return ExtractionSettings(
        source_files=resolve_source_files(payload.get("source_files")),
        batch_size=coerce_positive_int(payload.get("batch_size"), DEFAULT_BATCH_SIZE),
        max_logged_errors=coerce_int(
            payload.get("max_logged_errors"), DEFAULT_MAX_LOGGED_ERRORS, minimum=0
        ),
        progress_interval=coerce_positive_int(
            payload.get("progress_interval"), DEFAULT_PROGRESS_INTERVAL
        ),
        name_max_length=name_max_length,
        template_max_length=template_max_length,
        name_min_length=min_length,
    )

# -----------------------------------------------------------------------------
def build_server_settings(data: dict[str, Any] | Any) -> ServerSettings:
    payload = ensure_mapping(data)
    return ServerSettings(
        database=build_database_settings(payload.get("database")),
        extraction=build_extraction_settings(payload.get("extraction")),
    )


# [SERVER CONFIGURATION LOADER]
###############################################################################
def get_server_settings(config_path: str | None = None) -> ServerSettings:
    path = config_path or SERVER_CONFIGURATION_FILE
    payload = load_configuration_data(path)
    return build_server_settings(payload)


server_settings = get_server_settings()
