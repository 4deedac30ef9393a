from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from INJECTABLES.server.utils.patterns import (
    DOSAGE_SIGNAL_RE,
    INJECTABLE_EXCLUSION_TERMS,
    INJECTABLE_INCLUSION_TERMS,
    PROCEDURE_PREFIX,
    PRODUCT_KEYWORDS,
    PRODUCT_NAME_RE,
)
from INJECTABLES.server.utils.types import is_active_flag

ACCEPTED = "accepted"
INACTIVE = "inactive"
NO_INCLUSION = "no_inclusion"
NO_PRODUCT_SIGNAL = "no_product_signal"
PROCEDURE_PREFIXED = "procedure_prefix"


###############################################################################
@dataclass(slots=True, frozen=True)
class ClassifierVerdict:
    accepted: bool
    reason: str
    matched: str | None = None


# -----------------------------------------------------------------------------
def first_contained(text: str, phrases: tuple[str, ...]) -> str | None:
    for phrase in phrases:
        if phrase in text:
            return phrase
    return None


# -----------------------------------------------------------------------------
def has_product_signal(term: str, lowered: str) -> bool:
    if DOSAGE_SIGNAL_RE.search(term):
        return True
    if first_contained(lowered, PRODUCT_KEYWORDS) is not None:
        return True
    return PRODUCT_NAME_RE.match(term) is not None


# -----------------------------------------------------------------------------
def classify_term(term: str, active: Any) -> ClassifierVerdict:
    """Decide whether a description term names an injectable drug product.

    Rules run in a fixed order and the first one that fires decides. The
    returned verdict names that rule, so callers can audit why a term was
    kept or dropped.

    """
    if not is_active_flag(active):
        return ClassifierVerdict(False, INACTIVE)
    if not term:
        return ClassifierVerdict(False, NO_INCLUSION)

    lowered = term.lower()
    inclusion = first_contained(lowered, INJECTABLE_INCLUSION_TERMS)
    if inclusion is None:
        return ClassifierVerdict(False, NO_INCLUSION)

    # exclusion always wins over inclusion
    exclusion = first_contained(lowered, INJECTABLE_EXCLUSION_TERMS)
    if exclusion is not None:
        return ClassifierVerdict(False, f"excluded:{exclusion}", exclusion)

    if not has_product_signal(term, lowered):
        return ClassifierVerdict(False, NO_PRODUCT_SIGNAL, inclusion)

    if lowered.startswith(PROCEDURE_PREFIX):
        return ClassifierVerdict(False, PROCEDURE_PREFIXED, PROCEDURE_PREFIX)

    return ClassifierVerdict(True, ACCEPTED, inclusion)


# -----------------------------------------------------------------------------
def is_injectable_drug_product(term: str, active: Any) -> bool:
    return classify_term(term, active).accepted


__all__ = [
    "ClassifierVerdict",
    "classify_term",
    "is_injectable_drug_product",
]
