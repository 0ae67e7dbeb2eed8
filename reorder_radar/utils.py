import logging
import re
from datetime import date, datetime
from pathlib import Path

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^[+-]?(\d+)")
# Longer digit runs are corrupt cells, not counts, and would overflow float math.
MAX_INT_DIGITS = 15


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def format_local_date(value: date) -> str:
    """
    Formats a date the way the sheet's users read it, e.g. '2026. 3. 5.'.
    Written by hand because strftime has no portable non-padded month/day.
    """
    return f"{value.year}. {value.month}. {value.day}."


def parse_int(raw: str | None, default: int = 0) -> int:
    """
    Reads the leading integer out of a spreadsheet cell.

    '1,234' -> 1234, '12.9' -> 12, ' 7 pcs' -> 7. Blank or non-numeric
    cells return `default` instead of raising, as do digit runs longer than
    MAX_INT_DIGITS.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw.strip().replace(",", ""))
    if not match or len(match.group(1)) > MAX_INT_DIGITS:
        return default
    return int(match.group())


def decode_payload(payload: bytes, source_name: str = "payload") -> str:
    """
    Decodes raw sheet bytes with a two-stage encoding fallback:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which never fails but might misinterpret characters.
    """
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.info(f"UTF-8 decoding failed for {source_name}. Retrying with 'latin-1'.")
        return payload.decode("latin-1")


def read_source_file(file_path: Path) -> bytes:
    """Reads a locally exported sheet. Missing files raise FileNotFoundError."""
    logger.info(f"Reading sheet export from {file_path}")
    return Path(file_path).read_bytes()
