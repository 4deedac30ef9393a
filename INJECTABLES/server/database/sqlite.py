from __future__ import annotations

import os

import sqlalchemy

from INJECTABLES.server.database.base import SQLRepository
from INJECTABLES.server.utils.configurations import DatabaseSettings
from INJECTABLES.server.utils.constants import DATA_PATH, DATABASE_FILENAME


# [SQLITE DATABASE]
###############################################################################
class SQLiteRepository(SQLRepository):
    def __init__(self, settings: DatabaseSettings, db_path: str | None = None) -> None:
        self.db_path: str | None = db_path or os.path.join(DATA_PATH, DATABASE_FILENAME)
        os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
        is_new_database = not os.path.exists(self.db_path)
        engine = sqlalchemy.create_engine(
            f"sqlite:///{self.db_path}", echo=False, future=True
        )
        super().__init__(engine, settings.select_page_size)
        if is_new_database:
            self.initialize_database()
