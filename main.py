import logging

from reorder_radar import settings
from reorder_radar.logger import setup_logger
from reorder_radar.pipelines.inventory import InventoryPipeline

logger = logging.getLogger(__name__)


def main():
    setup_logger()

    result = InventoryPipeline(ordered_ids=settings.ORDERED_ITEM_IDS).run()
    if result.used_fallback:
        logger.warning(f"⚠️ Dashboard is showing demo data: {result.error}")


if __name__ == "__main__":
    main()
