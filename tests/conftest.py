from __future__ import annotations

import os
from collections.abc import Callable

import pytest

from INJECTABLES.server.database.sqlite import SQLiteRepository
from INJECTABLES.server.utils.configurations.server import (
    build_database_settings,
    build_extraction_settings,
)
from tests.helpers import RF2_HEADER


# -----------------------------------------------------------------------------
@pytest.fixture
def write_release(tmp_path) -> Callable[..., str]:
    def writer(name: str, lines: list[str], *, header: str = RF2_HEADER) -> str:
        path = os.path.join(tmp_path, name)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(header + "\n")
            for line in lines:
                handle.write(line + "\n")
        return path

    return writer


# -----------------------------------------------------------------------------
@pytest.fixture
def sqlite_store(tmp_path) -> SQLiteRepository:
    settings = build_database_settings({"embedded_database": True})
    return SQLiteRepository(settings, db_path=os.path.join(tmp_path, "catalog.db"))


# -----------------------------------------------------------------------------
@pytest.fixture
def extraction_settings_factory() -> Callable[..., object]:
    def factory(source_files: list[str], **overrides: object):
        payload = {"source_files": source_files, **overrides}
        return build_extraction_settings(payload)

    return factory
