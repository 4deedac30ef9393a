from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Protocol

import pandas as pd

from INJECTABLES.server.database.postgres import PostgresRepository
from INJECTABLES.server.database.sqlite import SQLiteRepository
from INJECTABLES.server.utils.configurations import DatabaseSettings, server_settings
from INJECTABLES.server.utils.logger import logger


###############################################################################
class DatabaseBackend(Protocol):
    db_path: str | None

    # -------------------------------------------------------------------------
    def initialize_database(self) -> None:
        ...

    # -------------------------------------------------------------------------
    def verify_connection(self) -> None:
        ...

    # -------------------------------------------------------------------------
    def count_rows(self, table_name: str) -> int:
        ...

    # -------------------------------------------------------------------------
    def count_active_templates(self) -> int:
        ...

    # -------------------------------------------------------------------------
    def stream_rows(self, table_name: str, page_size: int) -> Iterator[pd.DataFrame]:
        ...

    # -------------------------------------------------------------------------
    def template_exists(self, template_name: str) -> bool:
        ...

    # -------------------------------------------------------------------------
    def insert_template(self, row: dict[str, Any]) -> None:
        ...


BackendFactory = Callable[[DatabaseSettings], DatabaseBackend]


# -----------------------------------------------------------------------------
def build_sqlite_backend(settings: DatabaseSettings) -> DatabaseBackend:
    return SQLiteRepository(settings)


# -----------------------------------------------------------------------------
def build_postgres_backend(settings: DatabaseSettings) -> DatabaseBackend:
    return PostgresRepository(settings)


BACKEND_FACTORIES: dict[str, BackendFactory] = {
    "sqlite": build_sqlite_backend,
    "postgres": build_postgres_backend,
}


# [DATABASE]
###############################################################################
class InjectablesDatabase:
    def __init__(self, settings: DatabaseSettings | None = None) -> None:
        self.settings = settings or server_settings.database
        self.backend = self.select_backend()

    # -------------------------------------------------------------------------
    def select_backend(self) -> DatabaseBackend:
        if self.settings.embedded_database:
            engine_name = "sqlite"
        else:
            engine_name = (self.settings.engine or "postgres").lower()
        factory = BACKEND_FACTORIES.get(engine_name)
        if factory is None:
            raise ValueError(f"Unsupported catalog engine: {engine_name}")
        logger.info("Using %s backend for the injection catalog", engine_name)
        return factory(self.settings)

    # -------------------------------------------------------------------------
    @property
    def db_path(self) -> str | None:
        return getattr(self.backend, "db_path", None)

    # -------------------------------------------------------------------------
    def initialize_database(self) -> None:
        self.backend.initialize_database()

    # -------------------------------------------------------------------------
    def verify_connection(self) -> None:
        self.backend.verify_connection()

    # -------------------------------------------------------------------------
    def count_rows(self, table_name: str) -> int:
        return self.backend.count_rows(table_name)

    # -------------------------------------------------------------------------
    def count_active_templates(self) -> int:
        return self.backend.count_active_templates()

    # -------------------------------------------------------------------------
    def stream_rows(
        self, table_name: str, page_size: int | None = None
    ) -> Iterator[pd.DataFrame]:
        chunk_size = page_size or self.settings.select_page_size
        return self.backend.stream_rows(table_name, chunk_size)

    # -------------------------------------------------------------------------
    def template_exists(self, template_name: str) -> bool:
        return self.backend.template_exists(template_name)

    # -------------------------------------------------------------------------
    def insert_template(self, row: dict[str, Any]) -> None:
        self.backend.insert_template(row)


database = InjectablesDatabase()
