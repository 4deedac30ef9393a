from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from INJECTABLES.server.utils.constants import DEFAULT_NAME_MIN_LENGTH
from INJECTABLES.server.utils.services.parser import (
    InjectionTemplateRecord,
    build_dedup_key,
)
from INJECTABLES.server.utils.services.text.normalization import coerce_text


###############################################################################
class DedupRegistry:
    """Composite name+dose keys already claimed by the catalog or this run."""

    def __init__(self, name_min_length: int = DEFAULT_NAME_MIN_LENGTH) -> None:
        self.keys: set[str] = set()
        self.name_min_length = name_min_length

    # -------------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.keys)

    # -------------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return key in self.keys

    # -------------------------------------------------------------------------
    def seed(self, pairs: Iterable[tuple[Any, Any]]) -> int:
        added = 0
        for injection_name, dose in pairs:
            key = build_dedup_key(coerce_text(injection_name), coerce_text(dose))
            if key not in self.keys:
                self.keys.add(key)
                added += 1
        return added

    # -------------------------------------------------------------------------
    def seed_from_frames(self, frames: Iterable[pd.DataFrame]) -> int:
        added = 0
        for chunk in frames:
            if chunk.empty:
                continue
            frame = chunk.reindex(columns=["injection_name", "dose"])
            added += self.seed(frame.itertuples(index=False, name=None))
        return added

    # -------------------------------------------------------------------------
    def is_eligible(self, record: InjectionTemplateRecord) -> bool:
        return len(record.injection_name) >= self.name_min_length

    # -------------------------------------------------------------------------
    def register(self, record: InjectionTemplateRecord) -> bool:
        key = record.dedup_key
        if key in self.keys:
            return False
        self.keys.add(key)
        return True
