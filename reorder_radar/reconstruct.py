"""
Turns parsed sheet rows into InventoryRecords.

The sheet is maintained by hand and uses merged cells for category, brand and
product name: only the first row of a merged block carries the value. Rows
are therefore folded top to bottom with a ForwardFillState that remembers the
last non-blank value of each of those columns.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from . import settings
from .schemas import InventoryRecord, ReorderStatus
from .sku import decode_sku
from .utils import format_local_date, parse_int

logger = logging.getLogger(__name__)

COLUMNS = settings.COLUMNS


@dataclass
class ForwardFillState:
    """Last non-blank hierarchical values seen during one reconstruction pass."""

    product_name: str = ""
    brand: str = ""
    category: str = ""

    def absorb(self, row: Sequence[str]) -> None:
        for attr in ("product_name", "brand", "category"):
            value = _cell(row, attr)
            if value:
                setattr(self, attr, value)


def _cell(row: Sequence[str], column: str) -> str:
    index = COLUMNS[column]
    return row[index] if index < len(row) else ""


def _count(row: Sequence[str], column: str, default: int = 0) -> int:
    return max(0, parse_int(_cell(row, column), default))


def compute_sales_growth(current_week_sales: int, last_week_sales: int) -> float:
    """Week-over-week growth in percent. A revived item (0 -> n) counts as +100%."""
    if last_week_sales == 0:
        return 100.0 if current_week_sales > 0 else 0.0
    return (current_week_sales - last_week_sales) / last_week_sales * 100


def compute_days_to_stock_out(current_stock: int, daily_sales_avg: float) -> int:
    if daily_sales_avg > 0:
        return math.floor(current_stock / daily_sales_avg)
    return settings.NO_DEMAND_HORIZON_DAYS


def classify_status(current_stock: int, reorder_point: int, days_to_stock_out: int) -> ReorderStatus:
    # Order matters: a Critical match is never downgraded to Warning.
    if (
        current_stock <= reorder_point * settings.CRITICAL_STOCK_RATIO
        or days_to_stock_out <= settings.CRITICAL_HORIZON_DAYS
    ):
        return ReorderStatus.CRITICAL
    if current_stock <= reorder_point or days_to_stock_out <= settings.WARNING_HORIZON_DAYS:
        return ReorderStatus.WARNING
    return ReorderStatus.SAFE


def forecast_dates(days_to_stock_out: int, lead_time_days: int, today: date) -> tuple[str, str]:
    """Returns (expected stock-out date, suggested order date) as display strings."""
    if days_to_stock_out > settings.STABLE_HORIZON_DAYS:
        return settings.STABLE_LABEL, settings.NOT_APPLICABLE_LABEL

    stock_out = today + timedelta(days=days_to_stock_out)
    order_by = stock_out - timedelta(days=lead_time_days)
    return format_local_date(stock_out), format_local_date(order_by)


def build_record(
    *,
    record_id: str,
    product_name: str,
    sku: str,
    current_stock: int,
    current_week_sales: int,
    last_week_sales: int,
    today: date,
    category: str = settings.DEFAULT_CATEGORY,
    brand: str = settings.DEFAULT_BRAND,
    barcode: str = settings.DEFAULT_BARCODE,
    in_production_stock: int = 0,
    safety_stock: int = settings.DEFAULT_SAFETY_STOCK,
    reorder_point: int = settings.DEFAULT_REORDER_POINT,
    unit_cost: int = 0,
) -> InventoryRecord:
    """Derives every computed field from raw counts. Shared with the mock generator."""
    metadata = decode_sku(sku, today)

    daily_sales_avg = current_week_sales / settings.DAYS_PER_WEEK
    days_to_stock_out = compute_days_to_stock_out(current_stock, daily_sales_avg)
    expected, suggested = forecast_dates(days_to_stock_out, metadata.lead_time_days, today)

    return InventoryRecord(
        id=record_id,
        category=category,
        brand=brand,
        product_name=product_name,
        barcode=barcode,
        sku=sku,
        current_stock=current_stock,
        in_production_stock=in_production_stock,
        safety_stock=safety_stock,
        reorder_point=reorder_point,
        current_week_sales=current_week_sales,
        last_week_sales=last_week_sales,
        daily_sales_avg=daily_sales_avg,
        sales_growth=compute_sales_growth(current_week_sales, last_week_sales),
        days_to_stock_out=days_to_stock_out,
        lead_time_days=metadata.lead_time_days,
        unit_cost=unit_cost,
        status=classify_status(current_stock, reorder_point, days_to_stock_out),
        expected_stock_out_date=expected,
        suggested_order_date=suggested,
        item_type=metadata.item_type,
        is_seasonal_fit=metadata.is_seasonal_fit,
    )


def reconstruct_records(
    rows: Iterable[Sequence[str]],
    today: date | None = None,
    has_header: bool = True,
) -> list[InventoryRecord]:
    """
    Folds parsed rows into records, in sheet order.

    Ids are `row-<n>` where n counts only rows long enough to hold data, so
    the same sheet layout yields the same ids on every refresh.
    """
    today = today or date.today()
    rows = list(rows)
    if has_header:
        rows = rows[1:]

    state = ForwardFillState()
    records: list[InventoryRecord] = []
    short_rows = unnamed_rows = 0
    position = 0

    for row in rows:
        if len(row) < settings.MIN_FIELD_COUNT:
            short_rows += 1
            continue

        record_id = f"row-{position}"
        position += 1

        state.absorb(row)
        if not state.product_name:
            unnamed_rows += 1
            continue

        records.append(
            build_record(
                record_id=record_id,
                category=state.category or settings.DEFAULT_CATEGORY,
                brand=state.brand or settings.DEFAULT_BRAND,
                product_name=state.product_name,
                barcode=_cell(row, "barcode") or settings.DEFAULT_BARCODE,
                sku=_cell(row, "sku"),
                current_stock=_count(row, "current_stock"),
                in_production_stock=_count(row, "in_production_stock"),
                safety_stock=_count(row, "safety_stock", settings.DEFAULT_SAFETY_STOCK),
                reorder_point=_count(row, "reorder_point", settings.DEFAULT_REORDER_POINT),
                current_week_sales=_count(row, "current_week_sales"),
                last_week_sales=_count(row, "last_week_sales"),
                unit_cost=_count(row, "unit_cost"),
                today=today,
            )
        )

    logger.debug(
        f"Reconstructed {len(records)} records "
        f"(skipped {short_rows} short rows, {unnamed_rows} rows without a product name)"
    )
    return records
