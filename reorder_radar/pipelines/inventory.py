import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from reorder_radar import data_handler, parsers, settings, utils
from reorder_radar.mock_data import generate_mock_records
from reorder_radar.pipeline import DataPipeline, IngestionResult
from reorder_radar.reconstruct import reconstruct_records
from reorder_radar.schemas import InventoryRecord

logger = logging.getLogger(__name__)


class InventoryPipeline(DataPipeline):
    """Reads the reorder sheet (published URL or local export) and derives the dashboard."""

    def __init__(
        self,
        source_url: str | None = None,
        input_file: Path | str | None = None,
        ordered_ids: Iterable[str] = (),
        today: date | None = None,
        allow_fallback: bool | None = None,
        test_mode: bool = False,
    ):
        super().__init__(
            "inventory",
            ordered_ids=ordered_ids,
            allow_fallback=allow_fallback,
            test_mode=test_mode,
        )
        self.source_url = source_url if source_url is not None else settings.SHEET_CSV_URL
        input_file = input_file if input_file is not None else settings.INPUT_FILE
        self.input_file = Path(input_file) if input_file else None
        # Fixed for the whole pass so every record is forecast from the same day.
        self.system_date = today or date.today()

    def extract(self) -> str:
        logger.info("--- Starting Reorder Sheet Ingestion ---")

        if self.input_file:
            payload = utils.read_source_file(self.input_file)
            source_name = self.input_file.name
        else:
            payload = data_handler.fetch_sheet_bytes(self.source_url)
            source_name = "sheet export"

        logger.info(f"  > Read {len(payload)} bytes from {source_name}")
        return utils.decode_payload(payload, source_name)

    def transform(self, raw_text: str) -> list[InventoryRecord]:
        logger.info("\n--- Reconstructing Records (Forward-Filling) ---")
        rows = parsers.parse_delimited_text(raw_text)
        records = reconstruct_records(rows, today=self.system_date)
        logger.info(f"✅ {len(records)} products reconstructed from {len(rows)} rows.")
        return records

    def fallback_records(self) -> list[InventoryRecord]:
        return generate_mock_records(today=self.system_date)

    def load(self, result: IngestionResult):
        dashboard = result.dashboard()
        stats = dashboard.stats

        logger.info("\n--- Dashboard Summary ---")
        logger.info(f"Source: {result.source.value}")
        logger.info(f"Total SKU: {stats.total_items}")
        logger.info(
            f"Critical: {stats.critical_count} "
            f"(pending {stats.pending_critical_count}), "
            f"Warning: {stats.warning_count}, Safe: {stats.safe_count}"
        )
        logger.info(f"Weekly Sales: {stats.total_weekly_sales}")
        logger.info(f"Action Completed: {stats.ordered_count}")

        if dashboard.urgent_reorders:
            logger.info("\n--- Urgent Reorders ---")
            for record in dashboard.urgent_reorders:
                logger.info(
                    f"{record.id}: {record.product_name} ({record.sku}) "
                    f"stock {record.current_stock}, sold {record.current_week_sales}/wk, "
                    f"order by {record.suggested_order_date}"
                )

        super().load(result)
