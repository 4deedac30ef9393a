from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError

from INJECTABLES.server.utils.constants import DEFAULT_BATCH_SIZE
from INJECTABLES.server.utils.services.parser import InjectionTemplateRecord


###############################################################################
class TemplateStore(Protocol):
    # -------------------------------------------------------------------------
    def template_exists(self, template_name: str) -> bool:
        ...

    # -------------------------------------------------------------------------
    def insert_template(self, row: dict[str, Any]) -> None:
        ...


###############################################################################
class InsertOutcome(str, Enum):
    INSERTED = "inserted"
    SKIPPED = "skipped"
    FAILED = "failed"


###############################################################################
@dataclass(slots=True, frozen=True)
class LoadResult:
    record: InjectionTemplateRecord
    outcome: InsertOutcome
    error: str | None = None


###############################################################################
class BatchLoader:
    """Buffers parsed templates and writes them with insert-if-absent semantics.

    The existence check matches `template_name` exactly and runs right before
    each insert, so rows written by earlier runs (or earlier batches of this
    run) are never duplicated. A failing insert is reported as a `FAILED`
    result and the rest of the batch is still written.

    """

    def __init__(self, store: TemplateStore, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        self.store = store
        self.batch_size = batch_size
        self.buffer: list[InjectionTemplateRecord] = []

    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.buffer)

    # -------------------------------------------------------------------------
    def add(self, record: InjectionTemplateRecord) -> list[LoadResult]:
        self.buffer.append(record)
        if len(self.buffer) >= self.batch_size:
            return self.flush()
        return []

    # -------------------------------------------------------------------------
    def flush(self) -> list[LoadResult]:
        if not self.buffer:
            return []
        pending, self.buffer = self.buffer, []
        return [self.load_record(record) for record in pending]

    # -------------------------------------------------------------------------
    def load_record(self, record: InjectionTemplateRecord) -> LoadResult:
        try:
            if self.store.template_exists(record.template_name):
                return LoadResult(record, InsertOutcome.SKIPPED)
            self.store.insert_template(record.to_row())
        except SQLAlchemyError as exc:
            return LoadResult(record, InsertOutcome.FAILED, str(exc))
        return LoadResult(record, InsertOutcome.INSERTED)
