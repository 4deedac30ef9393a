from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass

from tqdm import tqdm

from INJECTABLES.server.utils.constants import (
    DEFAULT_PROGRESS_INTERVAL,
    DESCRIPTION_MIN_FIELDS,
)
from INJECTABLES.server.utils.services.text.normalization import strip_line_terminators


###############################################################################
@dataclass(slots=True, frozen=True)
class DescriptionRecord:
    id: str
    effective_time: str
    active: str
    module_id: str
    concept_id: str
    language_code: str
    type_id: str
    term: str


###############################################################################
class SnomedDescriptionReader:
    """Single-pass reader for RF2 description snapshot files.

    Records are yielded lazily one line at a time. The first line is always
    dropped as the header, and lines carrying fewer than eight tab-separated
    fields are skipped without raising. Undecodable bytes are replaced with
    U+FFFD instead of aborting the read. Iterating again reopens the file.

    """

    def __init__(
        self,
        file_path: str,
        *,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        encoding: str = "utf-8",
    ) -> None:
        self.file_path = file_path
        self.file_name = os.path.basename(file_path)
        self.progress_interval = progress_interval
        self.encoding = encoding
        self.lines_read = 0
        self.skipped_lines = 0

    # -------------------------------------------------------------------------
    def exists(self) -> bool:
        return os.path.isfile(self.file_path)

    # -------------------------------------------------------------------------
    def parse_line(self, line: str) -> DescriptionRecord | None:
        fields = strip_line_terminators(line).split("\t")
        if len(fields) < DESCRIPTION_MIN_FIELDS:
            return None
        return DescriptionRecord(*fields[:DESCRIPTION_MIN_FIELDS])

    # -------------------------------------------------------------------------
    def iter_records(self) -> Iterator[DescriptionRecord]:
        self.lines_read = 0
        self.skipped_lines = 0
        with open(
            self.file_path, "r", encoding=self.encoding, errors="replace", newline=""
        ) as handle:
            next(handle, None)
            with tqdm(
                handle,
                desc=self.file_name,
                unit=" lines",
                miniters=self.progress_interval,
                ncols=80,
            ) as progress:
                for line in progress:
                    self.lines_read += 1
                    record = self.parse_line(line)
                    if record is None:
                        self.skipped_lines += 1
                        continue
                    yield record

    # -------------------------------------------------------------------------
    def __iter__(self) -> Iterator[DescriptionRecord]:
        return self.iter_records()
