import json
import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd
import requests

from . import settings
from . import utils
from .schemas import InventoryRecord

logger = logging.getLogger(__name__)

# Record attribute -> report header, in report column order.
REPORT_COLUMNS = {
    "product_name": "Product Name",
    "barcode": "Barcode",
    "sku": "SKU",
    "current_stock": "Current Stock",
    "in_production_stock": "In Production",
    "current_week_sales": "Weekly Sales",
    "sales_growth": "Growth",
    "expected_stock_out_date": "Expected Stock-Out",
}


def fetch_sheet_bytes(url: str, timeout: int = settings.REQUEST_TIMEOUT) -> bytes:
    """Downloads the published sheet export. HTTP errors raise requests exceptions."""
    if not url:
        raise requests.exceptions.InvalidURL("No sheet URL configured (set SHEET_ID or SHEET_CSV_URL).")

    logger.info(f"Fetching sheet export from {url}")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content


def build_report_frame(records: Iterable[InventoryRecord]) -> pd.DataFrame:
    """Flattens records into the columns of the reorder report."""
    df = pd.DataFrame(
        [record.model_dump(include=set(REPORT_COLUMNS)) for record in records],
        columns=list(REPORT_COLUMNS),
    )
    df["sales_growth"] = df["sales_growth"].map(lambda growth: f"{growth:.1f}%")
    return df.rename(columns=REPORT_COLUMNS)


def export_report_csv(records: Iterable[InventoryRecord]) -> str:
    return build_report_frame(records).to_csv(index=False)


def save_outputs(records: list[InventoryRecord], report_name: str = settings.REPORT_FILENAME_BASE) -> Path:
    """Saves the report to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
    # BOM so spreadsheet apps pick up UTF-8 product names
    build_report_frame(records).to_csv(csv_path, index=False, encoding="utf-8-sig")
    logger.info(f"✅ Reorder report saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [record.model_dump(mode="json", by_alias=True) for record in records]
            json.dump(json_data, f, indent=2, ensure_ascii=False)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return csv_path


def post_to_webhook(payload: dict[str, Any], url: str, timeout: int = settings.REQUEST_TIMEOUT) -> Any:
    """
    Posts a JSON payload and returns the decoded JSON reply. A plain-text
    reply comes back as the raw text, an empty body as None.
    Request failures propagate; callers decide whether they're fatal.
    """
    logger.info(f"🚀 Posting payload to webhook: {url}")
    response = requests.post(url, json=payload, timeout=timeout)
    response.raise_for_status()
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
