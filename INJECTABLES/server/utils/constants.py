from __future__ import annotations

from os.path import abspath, join

# [PATHS]
###############################################################################
ROOT_DIR = abspath(join(__file__, "../../../.."))
PROJECT_DIR = join(ROOT_DIR, "INJECTABLES")
SETUP_DIR = join(PROJECT_DIR, "setup")
SETTINGS_DIR = join(SETUP_DIR, "settings")
RSC_PATH = join(PROJECT_DIR, "resources")
DATA_PATH = join(RSC_PATH, "database")
SOURCES_PATH = join(DATA_PATH, "sources")
LOGS_PATH = join(RSC_PATH, "logs")

SERVER_CONFIGURATION_FILE = join(SETTINGS_DIR, "server_configurations.json")
DATABASE_FILENAME = "database.db"
ENV_FILENAME = ".env"

# [DATABASE]
###############################################################################
INJECTION_TEMPLATES_TABLE = "INJECTION_TEMPLATES"
DEFAULT_SELECT_PAGE_SIZE = 5_000
DEFAULT_POSTGRES_PORT = 5432
DEFAULT_CONNECT_TIMEOUT = 10

# [SNOMED CT RELEASE]
###############################################################################
# India Drug Extension first, International release as fallback
DEFAULT_SNOMED_FILES = [
    join(
        "SnomedCT_IndiaDrugExtensionRF2_PRODUCTION_IN1000189_20251219T120000Z",
        "Snapshot",
        "Terminology",
        "sct2_Description_Snapshot-en_IN1000189_20251219T120000Z.txt",
    ),
    join(
        "SnomedCT_InternationalRF2_PRODUCTION_20260101T120000Z",
        "Snapshot",
        "Terminology",
        "sct2_Description_Snapshot-en_INT_20260101.txt",
    ),
]
DESCRIPTION_FIELDS = [
    "id",
    "effective_time",
    "active",
    "module_id",
    "concept_id",
    "language_code",
    "type_id",
    "term",
]
DESCRIPTION_MIN_FIELDS = len(DESCRIPTION_FIELDS)

# [EXTRACTION DEFAULTS]
###############################################################################
DEFAULT_BATCH_SIZE = 100
DEFAULT_MAX_LOGGED_ERRORS = 5
DEFAULT_PROGRESS_INTERVAL = 100_000
DEFAULT_NAME_MAX_LENGTH = 200
DEFAULT_TEMPLATE_MAX_LENGTH = 250
DEFAULT_NAME_MIN_LENGTH = 3
DEFAULT_ROUTE = "IV/IM"
DEFAULT_FREQUENCY = "As directed"
DEFAULT_DURATION = "As directed"
