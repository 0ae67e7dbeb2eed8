"""Synthetic records used when the sheet can't be read, so the dashboard still has something to show."""

import random
from datetime import date

from .reconstruct import build_record
from .schemas import InventoryRecord

MOCK_BRAND = "FILLUMINATE"
MOCK_UNIT_COST = 45000
MOCK_SAFETY_STOCK = 10
MOCK_REORDER_POINT = 40
# Every Nth generated item is a down jacket, the rest are basic tees.
PADDING_EVERY = 8


def generate_mock_records(
    count: int = 50, today: date | None = None, seed: int | None = None
) -> list[InventoryRecord]:
    """
    Builds `count` plausible records through the same derivation as real rows,
    so SKU decoding, forecasts and status behave exactly as they would live.
    Pass `seed` for a reproducible set.
    """
    rng = random.Random(seed)
    today = today or date.today()
    records = []

    for i in range(count):
        is_padding = i % PADDING_EVERY == 0
        current_week_sales = rng.randint(20, 219)

        records.append(
            build_record(
                record_id=f"mock-{i}",
                category="Outerwear" if is_padding else "Tops",
                brand=MOCK_BRAND,
                product_name=(
                    f"Filluminate Premium Duck Down Padding {i}"
                    if is_padding
                    else f"Filluminate Basic T-Shirt {i}"
                ),
                barcode=f"880912345{i}",
                sku=f"FBEWODW00{i}BK00M" if is_padding else f"FBESUTS00{i}WH00L",
                current_stock=rng.randint(0, 99),
                in_production_stock=rng.randint(0, 39),
                safety_stock=MOCK_SAFETY_STOCK,
                reorder_point=MOCK_REORDER_POINT,
                current_week_sales=current_week_sales,
                last_week_sales=int(current_week_sales * rng.uniform(0.6, 1.4)),
                unit_cost=MOCK_UNIT_COST,
                today=today,
            )
        )

    return records
