from __future__ import annotations

from pathlib import Path
from typing import Any

from starlette.concurrency import run_in_threadpool
from structlog import get_logger

from invoice_extractor.core.errors import ExtractionFailedError
from invoice_extractor.core.metrics import observe_extraction
from invoice_extractor.processing.encoder import encode_document
from invoice_extractor.processing.model import TextModel

logger = get_logger(__name__)

EXTRACTION_PROMPT = """Extract the following information in JSON format:
- Invoices: { Serial Number, Customer Name, Product Name, Qty, Tax, Total Amount, Date }
- Products: { Product Name, Category, Unit Price, Tax, Price with Tax, Stock Quantity }
- Customers: { Customer Name, Phone Number, Total Purchase Amount }
Ensure the response follows strict JSON formatting."""


class AIExtractor:
    def __init__(self, model: TextModel) -> None:
        self.model = model

    @observe_extraction("ai-delegated")
    async def extract(self, path: str | Path, prompt: str = EXTRACTION_PROMPT) -> str:
        """Send the prompt and the encoded document to the model, return its raw text."""
        document = await run_in_threadpool(encode_document, path)
        contents: list[Any] = [prompt]
        if document is not None:
            contents.append(document.to_part())
        else:
            logger.warning("document_not_encodable", path=str(path))

        try:
            text = await self.model.generate_text(contents)
        except Exception as exc:
            logger.exception("model_call_failed", path=str(path), error=str(exc))
            raise ExtractionFailedError() from exc

        logger.info("model_call_ok", path=str(path), length=len(text))
        return text
