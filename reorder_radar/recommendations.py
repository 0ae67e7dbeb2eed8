"""
Prepares the context handed to the external reorder-recommendation service.

The service itself (an LLM behind a webhook, in practice) is opaque: it gets
a JSON list of the riskiest items and answers with free-form suggestions.
Only the shape of the context is guaranteed here.
"""

import json
import logging
from typing import Any, Callable, Iterable

from pydantic import ValidationError

from . import settings
from .data_handler import post_to_webhook
from .schemas import InventoryRecord, RecommendationContextItem, RecommendationReport, ReorderStatus

logger = logging.getLogger(__name__)

Analyzer = Callable[[str], Any]


def select_analysis_targets(
    records: Iterable[InventoryRecord],
    limit: int = settings.RECOMMENDATION_LIMIT,
    growth_threshold: float = settings.GROWTH_ALERT_THRESHOLD,
) -> list[InventoryRecord]:
    """Critical items plus fast growers, in sheet order, capped at `limit`."""
    targets = [
        r
        for r in records
        if r.status == ReorderStatus.CRITICAL or r.sales_growth > growth_threshold
    ]
    return targets[:limit]


def build_recommendation_context(records: Iterable[InventoryRecord]) -> list[dict[str, Any]]:
    return [
        RecommendationContextItem(
            name=r.product_name,
            stock=r.current_stock,
            current_week_sales=r.current_week_sales,
            last_week_sales=r.last_week_sales,
            growth=f"{r.sales_growth:.1f}%",
            reorder_point=r.reorder_point,
            lead_time=r.lead_time_days,
        ).model_dump(by_alias=True)
        for r in select_analysis_targets(records)
    ]


def request_recommendations(records: Iterable[InventoryRecord], analyzer: Analyzer) -> Any:
    """Hands the serialized context to `analyzer` and returns whatever it answers."""
    context = build_recommendation_context(records)
    logger.info(f"Requesting recommendations for {len(context)} items")
    return analyzer(json.dumps(context, ensure_ascii=False))


def post_context_to_webhook(context_json: str, url: str | None = None) -> Any:
    """Default analyzer: ships the context to RECOMMENDATION_WEBHOOK_URL."""
    url = url or settings.RECOMMENDATION_WEBHOOK_URL
    if not url:
        raise ValueError("RECOMMENDATION_WEBHOOK_URL is not set.")
    return post_to_webhook({"items": json.loads(context_json)}, url)


def parse_recommendations(payload: Any) -> RecommendationReport | None:
    """
    Validates a structured reply ({"recommendations": [...], "generalInsights": "..."}).
    Free-form replies that don't fit return None rather than raising.
    """
    if payload is None:
        return None
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Recommendation reply is not JSON; leaving it unparsed.")
            return None

    try:
        return RecommendationReport.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Recommendation reply doesn't match the expected shape: {e}")
        return None
