from __future__ import annotations

MISSING_TABLE_MESSAGE = "Table %s does not exist"


###############################################################################
class CatalogConnectionError(RuntimeError):
    """Raised when the destination catalog cannot be reached at startup."""
