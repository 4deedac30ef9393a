from __future__ import annotations

import time

from INJECTABLES.server.database.database import database
from INJECTABLES.server.utils.constants import INJECTION_TEMPLATES_TABLE
from INJECTABLES.server.utils.logger import logger


###############################################################################
if __name__ == "__main__":
    start = time.perf_counter()
    logger.info("Starting database initialization")
    database.verify_connection()
    database.initialize_database()
    rows = database.count_rows(INJECTION_TEMPLATES_TABLE)
    elapsed = time.perf_counter() - start
    logger.info("%s table ready with %d rows", INJECTION_TEMPLATES_TABLE, rows)
    logger.info("Database initialization completed in %.2f seconds", elapsed)
