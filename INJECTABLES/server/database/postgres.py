from __future__ import annotations

import sqlalchemy
from sqlalchemy.engine import URL

from INJECTABLES.server.database.base import SQLRepository
from INJECTABLES.server.utils.configurations import DatabaseSettings


# [POSTGRES DATABASE]
###############################################################################
class PostgresRepository(SQLRepository):
    DRIVER = "postgresql+psycopg"

    def __init__(self, settings: DatabaseSettings) -> None:
        if not settings.host or not settings.database_name:
            raise ValueError("Postgres backend requires both host and database_name")
        url = URL.create(
            self.DRIVER,
            username=settings.username,
            password=settings.password,
            host=settings.host,
            port=settings.port,
            database=settings.database_name,
        )
        connect_args: dict[str, object] = {"connect_timeout": settings.connect_timeout}
        if settings.ssl:
            connect_args["sslmode"] = "require"
        engine = sqlalchemy.create_engine(
            url,
            echo=False,
            future=True,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        super().__init__(engine, settings.select_page_size)
