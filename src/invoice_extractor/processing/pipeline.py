from __future__ import annotations

from enum import Enum
from pathlib import Path

from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from invoice_extractor.processing.ai import AIExtractor
from invoice_extractor.processing.classifier import ExtractionStrategy, classify_mime_type
from invoice_extractor.processing.model import TextModel
from invoice_extractor.processing.normalizer import normalize_model_output
from invoice_extractor.processing.records import ExtractedRecords
from invoice_extractor.processing.tabular import DEFAULT_ROW_LIMIT, extract_tabular_records

logger = get_logger(__name__)


class Stage(str, Enum):
    RECEIVED = "received"
    CLASSIFIED = "classified"
    EXTRACTED = "extracted"
    NORMALIZED = "normalized"
    CLEANED = "cleaned"
    RESPONDED = "responded"


class UploadPipeline:
    """Classify a stored upload and run the matching extraction path.

    Cleanup and response shaping happen around this object, in the upload route.
    """

    def __init__(self, model: TextModel, row_limit: int = DEFAULT_ROW_LIMIT) -> None:
        self.extractor = AIExtractor(model)
        self.row_limit = row_limit

    async def run(self, path: Path, mime_type: str | None) -> ExtractedRecords:
        strategy = classify_mime_type(mime_type)
        logger.info("pipeline_stage", stage=Stage.CLASSIFIED.value, strategy=strategy.value)

        if strategy is ExtractionStrategy.TABULAR:
            # openpyxl parsing is blocking
            data = await run_in_threadpool(path.read_bytes)
            records = await run_in_threadpool(extract_tabular_records, data, row_limit=self.row_limit)
            logger.info("pipeline_stage", stage=Stage.EXTRACTED.value, strategy=strategy.value)
            return records

        raw_text = await self.extractor.extract(path)
        logger.info("pipeline_stage", stage=Stage.EXTRACTED.value, strategy=strategy.value)
        records = normalize_model_output(raw_text)
        logger.info(
            "pipeline_stage",
            stage=Stage.NORMALIZED.value,
            invoices=len(records.invoices),
            products=len(records.products),
            customers=len(records.customers),
        )
        return records
