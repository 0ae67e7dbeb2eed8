import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# --- Source Configuration ---
# The sheet is published as a CSV export; INPUT_FILE takes precedence when set.
SHEET_ID = os.getenv("SHEET_ID", "")
SHEET_GID = os.getenv("SHEET_GID", "0")
SHEET_CSV_URL = os.getenv(
    "SHEET_CSV_URL",
    f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/export?format=csv&gid={SHEET_GID}"
    if SHEET_ID
    else "",
)
INPUT_FILE = os.getenv("INPUT_FILE")
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "15"))

# Substitute generated demo data when the sheet can't be read.
FALLBACK_TO_MOCK = _env_flag("FALLBACK_TO_MOCK", "true")

# --- Path Configuration ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "reorder_report")
SAVE_JSON_OUTPUT = _env_flag("SAVE_JSON_OUTPUT", "false")

# --- Recommendation Webhook ---
RECOMMENDATION_WEBHOOK_URL = os.getenv("RECOMMENDATION_WEBHOOK_URL")

# Ids already marked as ordered, comma separated.
ORDERED_ITEM_IDS = [
    item_id.strip()
    for item_id in os.getenv("ORDERED_ITEM_IDS", "").split(",")
    if item_id.strip()
]

# --- Dashboard Sizes ---
TOP_SELLERS_LIMIT = int(os.getenv("TOP_SELLERS_LIMIT", "20"))
URGENT_REORDER_LIMIT = int(os.getenv("URGENT_REORDER_LIMIT", "20"))
RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "10"))
GROWTH_ALERT_THRESHOLD = float(os.getenv("GROWTH_ALERT_THRESHOLD", "30"))

# --- Sheet Layout ---
# Fixed column positions of the exported sheet. Whoever edits the sheet must
# keep these positions stable.
COLUMNS = {
    "category": 1,
    "brand": 2,
    "sku": 3,
    "barcode": 4,
    "safety_stock": 6,
    "reorder_point": 7,
    "unit_cost": 10,
    "product_name": 12,
    "last_week_sales": 21,
    "current_week_sales": 22,
    "current_stock": 33,  # column AH: stock incl. reorders in transit
    "in_production_stock": 34,  # column AI
}

# Rows shorter than this can't reach the current stock column.
MIN_FIELD_COUNT = COLUMNS["current_stock"] + 1

# --- Shared Business Logic ---
DEFAULT_SAFETY_STOCK = 5
DEFAULT_REORDER_POINT = 10
DEFAULT_CATEGORY = "Other"
DEFAULT_BRAND = "Unknown Brand"
DEFAULT_BARCODE = "N/A"

DAYS_PER_WEEK = 7
NO_DEMAND_HORIZON_DAYS = 365
STABLE_HORIZON_DAYS = 360
CRITICAL_HORIZON_DAYS = 10
WARNING_HORIZON_DAYS = 20
CRITICAL_STOCK_RATIO = 0.5

STABLE_LABEL = "Stable"
NOT_APPLICABLE_LABEL = "N/A"

# --- Logging ---
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "app.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
