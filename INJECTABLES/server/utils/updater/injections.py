from __future__ import annotations

import os
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Protocol

from INJECTABLES.server.utils.configurations import ExtractionSettings, server_settings
from INJECTABLES.server.utils.constants import (
    DEFAULT_MAX_LOGGED_ERRORS,
    DEFAULT_SELECT_PAGE_SIZE,
    INJECTION_TEMPLATES_TABLE,
)
from INJECTABLES.server.utils.logger import logger
from INJECTABLES.server.utils.services.classifier import is_injectable_drug_product
from INJECTABLES.server.utils.services.deduplication import DedupRegistry
from INJECTABLES.server.utils.services.loader import (
    BatchLoader,
    InsertOutcome,
    LoadResult,
    TemplateStore,
)
from INJECTABLES.server.utils.services.parser import parse_injection_term
from INJECTABLES.server.utils.updater.snomed import (
    DescriptionRecord,
    SnomedDescriptionReader,
)

__all__ = [
    "ExtractionContext",
    "ExtractionSummary",
    "RunStatistics",
    "SnomedInjectionsUpdater",
]


###############################################################################
class CatalogStore(TemplateStore, Protocol):
    # -------------------------------------------------------------------------
    def verify_connection(self) -> None:
        ...

    # -------------------------------------------------------------------------
    def count_active_templates(self) -> int:
        ...

    # -------------------------------------------------------------------------
    def stream_rows(self, table_name: str, page_size: int) -> Any:
        ...


###############################################################################
@dataclass(slots=True)
class RunStatistics:
    found: int = 0
    inserted: int = 0
    skipped: int = 0
    errors: int = 0
    duplicates: int = 0
    lines_read: int = 0
    files_processed: int = 0
    files_missing: int = 0


###############################################################################
@dataclass(slots=True)
class FileSummary:
    file_path: str
    missing: bool = False
    lines_read: int = 0
    malformed_lines: int = 0
    accepted_terms: int = 0


###############################################################################
@dataclass(slots=True)
class ExtractionContext:
    registry: DedupRegistry
    statistics: RunStatistics = field(default_factory=RunStatistics)
    max_logged_errors: int = DEFAULT_MAX_LOGGED_ERRORS

    # -------------------------------------------------------------------------
    def record_results(self, results: list[LoadResult]) -> None:
        for result in results:
            if result.outcome is InsertOutcome.INSERTED:
                self.statistics.inserted += 1
            elif result.outcome is InsertOutcome.SKIPPED:
                self.statistics.skipped += 1
            else:
                self.statistics.errors += 1
                if self.statistics.errors <= self.max_logged_errors:
                    logger.error(
                        "Error inserting '%s': %s",
                        result.record.template_name,
                        result.error,
                    )


###############################################################################
@dataclass(slots=True)
class ExtractionSummary:
    statistics: RunStatistics
    initial_count: int
    final_count: int
    files: list[FileSummary]
    elapsed_seconds: float

    # -------------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


###############################################################################
class SnomedInjectionsUpdater:
    """Extract injectable drug templates from SNOMED CT description files.

    Files are scanned one at a time in the given order and every record goes
    through classify, parse, dedup and load before the next line is read.
    Keys already present in the catalog are loaded before the first file, so
    repeated runs over the same release insert nothing new.

    """

    def __init__(
        self,
        store: CatalogStore,
        source_files: list[str] | tuple[str, ...] | None = None,
        *,
        settings: ExtractionSettings | None = None,
        page_size: int = DEFAULT_SELECT_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.settings = settings or server_settings.extraction
        self.source_files = list(
            self.settings.source_files if source_files is None else source_files
        )
        self.page_size = page_size

    # -------------------------------------------------------------------------
    def create_context(self) -> ExtractionContext:
        registry = DedupRegistry(name_min_length=self.settings.name_min_length)
        return ExtractionContext(
            registry=registry,
            max_logged_errors=self.settings.max_logged_errors,
        )

    # -------------------------------------------------------------------------
    def preload_existing_keys(self, context: ExtractionContext) -> int:
        logger.info("Loading existing injection templates")
        frames = self.store.stream_rows(INJECTION_TEMPLATES_TABLE, self.page_size)
        added = context.registry.seed_from_frames(frames)
        logger.info("Loaded %d existing template keys", added)
        return added

    # -------------------------------------------------------------------------
    def process_record(
        self,
        record: DescriptionRecord,
        context: ExtractionContext,
        loader: BatchLoader,
    ) -> bool:
        if not is_injectable_drug_product(record.term, record.active):
            return False
        parsed = parse_injection_term(
            record.term,
            record.concept_id,
            name_max_length=self.settings.name_max_length,
            template_max_length=self.settings.template_max_length,
        )
        if not context.registry.is_eligible(parsed):
            return True
        if not context.registry.register(parsed):
            context.statistics.duplicates += 1
            context.statistics.skipped += 1
            return True
        context.statistics.found += 1
        context.record_results(loader.add(parsed))
        return True

    # -------------------------------------------------------------------------
    def process_file(self, file_path: str, context: ExtractionContext) -> FileSummary:
        logger.info("Processing: %s", os.path.basename(file_path))
        summary = FileSummary(file_path=file_path)
        reader = SnomedDescriptionReader(
            file_path, progress_interval=self.settings.progress_interval
        )
        if not reader.exists():
            logger.warning("File not found: %s", file_path)
            summary.missing = True
            context.statistics.files_missing += 1
            return summary

        loader = BatchLoader(self.store, batch_size=self.settings.batch_size)
        for record in reader.iter_records():
            if self.process_record(record, context, loader):
                summary.accepted_terms += 1
        context.record_results(loader.flush())

        summary.lines_read = reader.lines_read
        summary.malformed_lines = reader.skipped_lines
        context.statistics.lines_read += reader.lines_read
        context.statistics.files_processed += 1
        logger.info("Lines processed: %d", reader.lines_read)
        return summary

    # -------------------------------------------------------------------------
    def update_injection_templates(self) -> ExtractionSummary:
        start = time.perf_counter()
        self.store.verify_connection()

        initial_count = self.store.count_active_templates()
        logger.info("Current injections in database: %d", initial_count)

        context = self.create_context()
        self.preload_existing_keys(context)

        files: list[FileSummary] = []
        for file_path in self.source_files:
            files.append(self.process_file(file_path, context))

        final_count = self.store.count_active_templates()
        stats = context.statistics
        logger.info("Injectable terms found: %d", stats.found)
        logger.info("New injections inserted: %d", stats.inserted)
        logger.info("Duplicates skipped: %d", stats.skipped)
        logger.info("Errors: %d", stats.errors)
        logger.info("Total injections in database: %d", final_count)

        return ExtractionSummary(
            statistics=stats,
            initial_count=initial_count,
            final_count=final_count,
            files=files,
            elapsed_seconds=time.perf_counter() - start,
        )
