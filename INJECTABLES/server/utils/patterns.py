from __future__ import annotations

import re

# -----------------------------------------------------------------------------
# Classifier rule tables (evaluated in order)
# -----------------------------------------------------------------------------
INJECTABLE_INCLUSION_TERMS: tuple[str, ...] = (
    "injection",
    "injectable",
    "infusion",
    "for injection",
    "inj ",
    " inj",
    "parenteral",
    "iv solution",
    "im solution",
    "sc solution",
)

# Procedures, complications, findings and other non-product concepts
INJECTABLE_EXCLUSION_TERMS: tuple[str, ...] = (
    "injection of",
    "injection into",
    "injection site",
    "injection procedure",
    "following injection",
    "complication of",
    "adverse reaction",
    "insertion of",
    "removal of",
    "revision of",
    "infection following",
    "phlebitis following",
    "thrombophlebitis",
    "thromboembolism",
    "sepsis following",
    "septicemia",
    "reaction due to",
    "decompression",
    "arthrography",
    "transluminal",
    "transcatheter",
    "angioplasty",
    "thrombolysis",
    "contrast media",
    "percutaneous",
    "catheter",
    "needle",
    "syringe",
    "device",
    "finding",
    "disorder",
    "disease",
    "syndrome",
    "history of",
    "allergy to",
    "reaction to",
    "poisoning",
    "overdose",
    "accident",
    "injury",
    "procedure",
    "observation",
    "assessment",
    "evaluation",
)

PRODUCT_KEYWORDS: tuple[str, ...] = ("product", "medicinal", "pharmaceutical")
PROCEDURE_PREFIX = "injection "

DOSAGE_SIGNAL_RE = re.compile(r"[0-9]+\s*(mg|g|mcg|iu|units?|ml|%)", re.IGNORECASE)
# Case-sensitive: "Heparin ..." passes, "HEPARIN ..." does not
PRODUCT_NAME_RE = re.compile(r"^[A-Z][a-z]")

# -----------------------------------------------------------------------------
# Term parser patterns
# -----------------------------------------------------------------------------
DOSE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"([0-9]+(?:\.[0-9]+)?)\s*(mg|g|mcg|iu|units?|ml)"
        r"(?:\s*/\s*([0-9]+(?:\.[0-9]+)?)?\s*(ml))?",
        re.IGNORECASE,
    ),
    re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*(million\s*units?|mu)", re.IGNORECASE),
    re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*%"),
)

# Most specific route first; the first row with a matching keyword wins
ROUTE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("intra-articular", "intraarticular"), "Intra-articular"),
    (("intramuscular", " im ", "/im"), "IM"),
    (("intravenous", " iv ", "/iv"), "IV"),
    (("subcutaneous", " sc ", "/sc", "subcut"), "SC"),
    (("epidural",), "Epidural"),
    (("intrathecal",), "Intrathecal"),
    (("infusion",), "IV Infusion"),
    (("intradermal", " id "), "Intradermal"),
    (("intravitreal",), "Intravitreal"),
    (("intraocular",), "Intraocular"),
    (("intracardiac",), "Intracardiac"),
    (("intraosseous",), "Intraosseous"),
    (("intraperitoneal",), "Intraperitoneal"),
)

PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)\s*")
NAME_SUFFIX_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\s+injection.*$", re.IGNORECASE),
    re.compile(r"\s+injectable.*$", re.IGNORECASE),
    re.compile(r"\s+infusion.*$", re.IGNORECASE),
    re.compile(r"\s+solution.*$", re.IGNORECASE),
    re.compile(r"\s+concentrate.*$", re.IGNORECASE),
    re.compile(r"\s+powder.*$", re.IGNORECASE),
    re.compile(r"\s+for\s+injection.*$", re.IGNORECASE),
    re.compile(r"\s+pdr\s+for.*$", re.IGNORECASE),
    re.compile(
        r"\s*[0-9]+(?:\.[0-9]+)?\s*(mg|g|mcg|iu|units?|ml|%|million\s*units?|mu)"
        r"(?:\s*/\s*(?:[0-9]+(?:\.[0-9]+)?)?\s*(ml))?.*$",
        re.IGNORECASE,
    ),
)
WHITESPACE_RE = re.compile(r"\s+")
