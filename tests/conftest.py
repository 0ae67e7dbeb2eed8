from datetime import date

import pytest

from reorder_radar import settings
from reorder_radar.reconstruct import build_record

ROW_WIDTH = max(settings.COLUMNS.values()) + 1


@pytest.fixture
def today():
    # March: spring items ('S' season code) are in season.
    return date(2026, 3, 1)


@pytest.fixture
def make_row():
    """Builds a full-width sheet row with the given columns filled in."""

    def _make_row(width=ROW_WIDTH, **cells):
        row = [""] * width
        for column, value in cells.items():
            row[settings.COLUMNS[column]] = str(value)
        return row

    return _make_row


@pytest.fixture
def make_record(today):
    """Builds a record straight from raw values, bypassing the parser."""
    counter = iter(range(10_000))

    def _make_record(**overrides):
        n = next(counter)
        values = {
            "record_id": f"row-{n}",
            "product_name": f"Product {n}",
            "sku": "BASIC",  # too short to decode: always in season, general
            "current_stock": 100,
            "current_week_sales": 10,
            "last_week_sales": 10,
            "today": today,
        }
        values.update(overrides)
        return build_record(**values)

    return _make_record


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
    monkeypatch.setattr(settings, "RECOMMENDATION_WEBHOOK_URL", None)
    return tmp_path / "output"
