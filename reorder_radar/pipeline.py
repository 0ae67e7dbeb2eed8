import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import requests

from . import data_handler, settings
from .ranking import build_dashboard
from .recommendations import parse_recommendations, post_context_to_webhook, request_recommendations
from .schemas import DashboardView, InventoryRecord

logger = logging.getLogger(__name__)

# Failures that mean "the source couldn't be read", as opposed to bugs.
SOURCE_ERRORS = (requests.exceptions.RequestException, OSError)


class IngestionError(RuntimeError):
    """The source couldn't be read and falling back to demo data is disabled."""


class IngestionSource(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class IngestionResult:
    """
    Records from one ingestion pass plus where they came from, so an empty
    live sheet can be told apart from a failed fetch that was papered over
    with demo data.
    """

    records: list[InventoryRecord]
    source: IngestionSource
    error: str | None = None
    ordered_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def used_fallback(self) -> bool:
        return self.source is IngestionSource.FALLBACK

    def dashboard(self, ordered_ids: Iterable[str] | None = None) -> DashboardView:
        """Views are recomputed on demand; pass a new ordered set to re-rank."""
        return build_dashboard(
            self.records, self.ordered_ids if ordered_ids is None else ordered_ids
        )


class DataPipeline(ABC):
    """
    Abstract base class for sheet pipelines.
    Follows an Extract -> Transform -> Load (ETL) pattern, with a recovery
    step when extraction fails.
    """

    def __init__(
        self,
        report_type: str,
        ordered_ids: Iterable[str] = (),
        allow_fallback: bool | None = None,
        test_mode: bool = False,
    ):
        self.report_type = report_type
        self.ordered_ids = frozenset(ordered_ids)
        self.allow_fallback = settings.FALLBACK_TO_MOCK if allow_fallback is None else allow_fallback
        self.test_mode = test_mode

    def run(self) -> IngestionResult:
        """
        Orchestrates the pipeline execution.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} REPORT")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        try:
            raw_text = self.extract()
        except SOURCE_ERRORS as e:
            result = self.recover(e)
        else:
            # --- 2. TRANSFORM ---
            result = IngestionResult(
                records=self.transform(raw_text),
                source=IngestionSource.LIVE,
                ordered_ids=self.ordered_ids,
            )

        # --- 3. LOAD ---
        self.load(result)

        logger.info(f"✅ {self.report_type.capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return result

    def recover(self, error: Exception) -> IngestionResult:
        if not self.allow_fallback:
            logger.error(f"❌ Could not read the {self.report_type} source: {error}")
            raise IngestionError(str(error)) from error

        logger.error(f"❌ Could not read the {self.report_type} source, using demo data instead: {error}")
        return IngestionResult(
            records=self.fallback_records(),
            source=IngestionSource.FALLBACK,
            error=str(error),
            ordered_ids=self.ordered_ids,
        )

    @abstractmethod
    def extract(self) -> str:
        """
        Reads the raw sheet text. Source failures should surface as
        requests or OS errors so `run` can recover from them.
        """

    @abstractmethod
    def transform(self, raw_text: str) -> list[InventoryRecord]:
        """Parses and reconstructs the raw text into records."""

    @abstractmethod
    def fallback_records(self) -> list[InventoryRecord]:
        """Records to serve when extraction failed."""

    def load(self, result: IngestionResult):
        """
        Saves the report to disk and hands the recommendation context to the webhook.
        """
        # 1. Save Outputs (CSV/JSON)
        if result.records:
            data_handler.save_outputs(result.records, f"{self.report_type}_report")
        else:
            logger.warning("No data to save to disk.")

        # 2. Recommendation Webhook
        if self.test_mode:
            logger.info("🧪 Test Mode: Skipping recommendation webhook.")
            return
        if not settings.RECOMMENDATION_WEBHOOK_URL:
            logger.info("⚠️ RECOMMENDATION_WEBHOOK_URL not set. Skipping recommendations.")
            return

        try:
            reply = request_recommendations(result.records, post_context_to_webhook)
            logger.info("✅ Recommendation context posted.")
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Error posting recommendation context: {e}")
            return

        report = parse_recommendations(reply)
        if report:
            logger.info(f"Received {len(report.recommendations)} recommendations.")
            if report.general_insights:
                logger.info(report.general_insights)
        elif isinstance(reply, str) and reply.strip():
            logger.info(f"Recommendation reply: {reply.strip()}")
