"""
Decodes the metadata packed into the 15-character product code.

Position 3 holds the season code, positions 5-6 the sub-category code. The
lookup tables below are the only place these codes are interpreted; add a new
sub-category here and every consumer picks it up.
"""

from datetime import date

from .schemas import SkuMetadata

SEASON_CODE_POS = 3
SUBCATEGORY_SLICE = slice(5, 7)
MIN_DECODABLE_LENGTH = 7

SEASON_CODES = {
    "S": "Spring",
    "U": "Summer",
    "F": "Fall",
    "W": "Winter",
    "A": "AllSeason",
    "C": "Carryover",
    "O": "Collab",
}

# Season codes that fit whatever the calendar says.
ALWAYS_IN_SEASON = frozenset({"A", "C", "O"})

# Month -> the season code that is currently selling.
MONTH_SEASON_CODES = {
    1: "W",
    2: "S",
    3: "S",
    4: "S",
    5: "U",
    6: "U",
    7: "U",
    8: "F",
    9: "F",
    10: "F",
    11: "W",
    12: "W",
}

# Sub-category code -> (item type, lead time in days)
SUBCATEGORY_ITEM_TYPES = {
    "DW": ("padding", 50),
    "DV": ("padding", 50),
    "CT": ("outer", 35),
    "JP": ("outer", 35),
    "JK": ("outer", 35),
    "WB": ("outer", 35),
    "TJ": ("outer", 35),
    "VT": ("outer", 35),
    "AR": ("outer", 35),
    "CD": ("outer", 35),
}
DEFAULT_ITEM_TYPE = ("general", 21)

# Codes too short to decode are treated as always-available basics.
UNDECODABLE_METADATA = SkuMetadata(item_type="general", lead_time_days=14, is_seasonal_fit=True)


def current_season_codes(today: date) -> frozenset[str]:
    return ALWAYS_IN_SEASON | {MONTH_SEASON_CODES[today.month]}


def season_code(sku: str) -> str:
    return sku[SEASON_CODE_POS].upper()


def lookup_item_type(subcategory_code: str) -> tuple[str, int]:
    return SUBCATEGORY_ITEM_TYPES.get(subcategory_code.upper(), DEFAULT_ITEM_TYPE)


def decode_sku(sku: str | None, today: date | None = None) -> SkuMetadata:
    """
    Returns item type, lead time and seasonal fit for a product code.

    Seasonal fit depends on the calendar, so pass `today` explicitly when the
    result must be reproducible; it defaults to the system date.
    """
    if not sku or len(sku) < MIN_DECODABLE_LENGTH:
        return UNDECODABLE_METADATA

    today = today or date.today()
    item_type, lead_time = lookup_item_type(sku[SUBCATEGORY_SLICE])

    return SkuMetadata(
        item_type=item_type,
        lead_time_days=lead_time,
        is_seasonal_fit=season_code(sku) in current_season_codes(today),
    )
