from __future__ import annotations

import json
import sys

from INJECTABLES.server.database.database import database
from INJECTABLES.server.database.utils import CatalogConnectionError
from INJECTABLES.server.utils.configurations import server_settings
from INJECTABLES.server.utils.logger import logger
from INJECTABLES.server.utils.updater.injections import SnomedInjectionsUpdater


# -----------------------------------------------------------------------------
def run() -> int:
    logger.info("=" * 60)
    logger.info("SNOMED CT Injectable Medications Extractor")
    logger.info("=" * 60)
    try:
        database.verify_connection()
        database.initialize_database()
    except CatalogConnectionError as exc:
        logger.error("Fatal error: %s", exc)
        return 1

    updater = SnomedInjectionsUpdater(
        database,
        server_settings.extraction.source_files,
        page_size=server_settings.database.select_page_size,
    )
    summary = updater.update_injection_templates()
    logger.info("Extraction summary: %s", json.dumps(summary.to_dict(), default=str))
    return 0


###############################################################################
if __name__ == "__main__":
    sys.exit(run())
