from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from INJECTABLES.server.utils.constants import (
    DEFAULT_DURATION,
    DEFAULT_FREQUENCY,
    DEFAULT_NAME_MAX_LENGTH,
    DEFAULT_ROUTE,
    DEFAULT_TEMPLATE_MAX_LENGTH,
)
from INJECTABLES.server.utils.patterns import (
    DOSE_PATTERNS,
    NAME_SUFFIX_PATTERNS,
    PARENTHETICAL_RE,
    ROUTE_RULES,
    WHITESPACE_RE,
)
from INJECTABLES.server.utils.services.text.normalization import normalize_whitespace


###############################################################################
@dataclass(slots=True, frozen=True)
class InjectionTemplateRecord:
    template_name: str
    injection_name: str
    generic_name: str | None
    dose: str | None
    route: str = DEFAULT_ROUTE
    frequency: str = DEFAULT_FREQUENCY
    duration: str = DEFAULT_DURATION
    source_code: str | None = None

    # -------------------------------------------------------------------------
    @property
    def dedup_key(self) -> str:
        return build_dedup_key(self.injection_name, self.dose)

    # -------------------------------------------------------------------------
    def to_row(self) -> dict[str, Any]:
        row = asdict(self)
        row["is_active"] = True
        return row


# -----------------------------------------------------------------------------
def build_dedup_key(injection_name: str | None, dose: str | None) -> str:
    return f"{(injection_name or '').lower()}-{(dose or '').lower()}"


# -----------------------------------------------------------------------------
def extract_dose(term: str) -> str | None:
    for pattern in DOSE_PATTERNS:
        match = pattern.search(term)
        if match:
            return WHITESPACE_RE.sub("", match.group(0))
    return None


# -----------------------------------------------------------------------------
def extract_route(term: str) -> str:
    lowered = term.lower()
    for keywords, route in ROUTE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return route
    return DEFAULT_ROUTE


# -----------------------------------------------------------------------------
def normalize_injection_name(
    term: str, max_length: int = DEFAULT_NAME_MAX_LENGTH
) -> str:
    name = PARENTHETICAL_RE.sub(" ", term)
    for pattern in NAME_SUFFIX_PATTERNS:
        name = pattern.sub("", name, count=1)
    name = normalize_whitespace(name)
    if len(name) > max_length:
        name = name[:max_length].rstrip()
    return name


# -----------------------------------------------------------------------------
def parse_injection_term(
    term: str,
    concept_id: str | None,
    *,
    name_max_length: int = DEFAULT_NAME_MAX_LENGTH,
    template_max_length: int = DEFAULT_TEMPLATE_MAX_LENGTH,
) -> InjectionTemplateRecord:
    """Turn a free-text description into a best-effort injection template.

    Never raises: when name cleanup strips everything, the raw term (cut to
    `name_max_length`) stands in as the injection name.

    """
    clean_term = (term or "").strip()
    dose = extract_dose(clean_term)
    route = extract_route(clean_term)
    name = normalize_injection_name(clean_term, name_max_length)
    name = name or clean_term[:name_max_length]

    if dose:
        template_name = f"{name} {dose}"[:template_max_length]
    else:
        template_name = name[:template_max_length]

    return InjectionTemplateRecord(
        template_name=template_name,
        injection_name=name,
        generic_name=name or None,
        dose=dose,
        route=route,
        source_code=concept_id,
    )


__all__ = [
    "InjectionTemplateRecord",
    "build_dedup_key",
    "extract_dose",
    "extract_route",
    "normalize_injection_name",
    "parse_injection_term",
]
