"""
Derived dashboard views over a record set.

Everything here is a pure function of its inputs: the records are never
modified and the ordered-ids set is only read. `sorted` is stable, so ties
keep sheet order and re-running a view gives the same result.
"""

from typing import Iterable

from . import settings
from .schemas import DashboardStats, DashboardView, InventoryRecord, ReorderStatus

SEASONAL_BOOST = 1.5
VELOCITY_EXPONENT = 1.5
# Keeps the score finite for items that are already out of stock.
ZERO_STOCK_OFFSET = 0.5
# Status filter value meaning "no filter".
ALL_STATUSES = "All"


def urgency_score(record: InventoryRecord) -> float:
    """High weekly sales against little remaining stock, boosted while in season."""
    score = record.current_week_sales ** VELOCITY_EXPONENT / (record.current_stock + ZERO_STOCK_OFFSET)
    return score * (SEASONAL_BOOST if record.is_seasonal_fit else 1)


def top_sellers(
    records: Iterable[InventoryRecord], limit: int = settings.TOP_SELLERS_LIMIT
) -> list[InventoryRecord]:
    return sorted(records, key=lambda r: r.current_week_sales, reverse=True)[:limit]


def urgent_reorders(
    records: Iterable[InventoryRecord],
    ordered_ids: Iterable[str] = (),
    limit: int = settings.URGENT_REORDER_LIMIT,
) -> list[InventoryRecord]:
    """
    In-season items that are selling and haven't been ordered yet, most
    urgent first.
    """
    ordered = frozenset(ordered_ids)
    candidates = [
        r
        for r in records
        if r.current_week_sales > 0 and r.is_seasonal_fit and r.id not in ordered
    ]
    return sorted(candidates, key=urgency_score, reverse=True)[:limit]


def partition_by_status(
    records: Iterable[InventoryRecord],
) -> dict[ReorderStatus, list[InventoryRecord]]:
    partition: dict[ReorderStatus, list[InventoryRecord]] = {status: [] for status in ReorderStatus}
    for record in records:
        partition[record.status].append(record)
    return partition


def compute_stats(
    records: Iterable[InventoryRecord], ordered_ids: Iterable[str] = ()
) -> DashboardStats:
    records = list(records)
    ordered = frozenset(ordered_ids)
    partition = partition_by_status(records)

    return DashboardStats(
        total_items=len(records),
        critical_count=len(partition[ReorderStatus.CRITICAL]),
        warning_count=len(partition[ReorderStatus.WARNING]),
        safe_count=len(partition[ReorderStatus.SAFE]),
        pending_critical_count=sum(
            1 for r in partition[ReorderStatus.CRITICAL] if r.id not in ordered
        ),
        total_weekly_sales=sum(r.current_week_sales for r in records),
        ordered_count=len(ordered),
    )


def search_records(
    records: Iterable[InventoryRecord],
    term: str = "",
    status: ReorderStatus | str | None = None,
) -> list[InventoryRecord]:
    """Case-insensitive match on product name, sku, barcode or brand, plus an optional status filter."""
    term = term.lower()
    wanted = ReorderStatus(status) if status and status != ALL_STATUSES else None

    def matches(record: InventoryRecord) -> bool:
        haystacks = (record.product_name, record.sku, record.barcode, record.brand)
        if not any(term in value.lower() for value in haystacks):
            return False
        return wanted is None or record.status == wanted

    return [r for r in records if matches(r)]


def build_dashboard(
    records: Iterable[InventoryRecord], ordered_ids: Iterable[str] = ()
) -> DashboardView:
    records = list(records)
    ordered = frozenset(ordered_ids)
    return DashboardView(
        top_sellers=top_sellers(records),
        urgent_reorders=urgent_reorders(records, ordered),
        stats=compute_stats(records, ordered),
    )
