from __future__ import annotations

from typing import Any, Iterator

import pandas as pd
import sqlalchemy
from sqlalchemy import func, insert, inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from INJECTABLES.server.database.schema import Base, InjectionTemplate
from INJECTABLES.server.database.utils import (
    MISSING_TABLE_MESSAGE,
    CatalogConnectionError,
)
from INJECTABLES.server.utils.logger import logger


# [SQL REPOSITORY]
###############################################################################
class SQLRepository:
    """Engine-agnostic catalog operations shared by the concrete backends."""

    db_path: str | None = None

    def __init__(self, engine: Engine, select_page_size: int) -> None:
        self.engine = engine
        self.select_page_size = select_page_size
        self.table = InjectionTemplate.__table__

    # -------------------------------------------------------------------------
    def initialize_database(self) -> None:
        Base.metadata.create_all(self.engine)

    # -------------------------------------------------------------------------
    def verify_connection(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError as exc:
            raise CatalogConnectionError(
                f"Unable to connect to the injection catalog: {exc}"
            ) from exc

    # -------------------------------------------------------------------------
    def has_table(self, table_name: str) -> bool:
        with self.engine.connect() as conn:
            return inspect(conn).has_table(table_name)

    # -------------------------------------------------------------------------
    def count_rows(self, table_name: str) -> int:
        if not self.has_table(table_name):
            logger.warning(MISSING_TABLE_MESSAGE, table_name)
            return 0
        with self.engine.connect() as conn:
            result = conn.execute(
                sqlalchemy.text(f'SELECT COUNT(*) FROM "{table_name}"')
            )
            value = result.scalar() or 0
        return int(value)

    # -------------------------------------------------------------------------
    def count_active_templates(self) -> int:
        query = (
            select(func.count())
            .select_from(self.table)
            .where(self.table.c.is_active == True)  # noqa: E712
        )
        with self.engine.connect() as conn:
            value = conn.execute(query).scalar() or 0
        return int(value)

    # -------------------------------------------------------------------------
    def stream_rows(self, table_name: str, page_size: int) -> Iterator[pd.DataFrame]:
        chunk_size = page_size if page_size > 0 else self.select_page_size
        with self.engine.connect() as conn:
            inspector = inspect(conn)
            if not inspector.has_table(table_name):
                logger.warning(MISSING_TABLE_MESSAGE, table_name)
                return
            query = text(f'SELECT * FROM "{table_name}"')
            for chunk in pd.read_sql_query(query, conn, chunksize=chunk_size):
                yield chunk

    # -------------------------------------------------------------------------
    def template_exists(self, template_name: str) -> bool:
        query = (
            select(self.table.c.id)
            .where(self.table.c.template_name == template_name)
            .limit(1)
        )
        with self.engine.connect() as conn:
            return conn.execute(query).first() is not None

    # -------------------------------------------------------------------------
    def insert_template(self, row: dict[str, Any]) -> None:
        values = {key: value for key, value in row.items() if key in self.table.c}
        values.setdefault("is_active", True)
        with self.engine.begin() as conn:
            conn.execute(insert(self.table).values(**values))
