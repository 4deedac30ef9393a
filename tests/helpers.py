from __future__ import annotations

RF2_HEADER = (
    "id\teffectiveTime\tactive\tmoduleId\tconceptId\tlanguageCode\ttypeId\tterm"
    "\tcaseSignificanceId"
)


# -----------------------------------------------------------------------------
def description_line(
    term: str,
    *,
    active: str = "1",
    concept_id: str = "372687004",
    description_id: str = "1000001",
) -> str:
    fields = [
        description_id,
        "20251219",
        active,
        "1000189",
        concept_id,
        "en",
        "900000000000013009",
        term,
        "900000000000448009",
    ]
    return "\t".join(fields)
