from __future__ import annotations

from functools import lru_cache

from invoice_extractor.core.settings import get_settings
from invoice_extractor.processing.model import GeminiModel, TextModel
from invoice_extractor.processing.pipeline import UploadPipeline


@lru_cache(maxsize=1)
def get_model() -> TextModel:
    return GeminiModel.from_settings(get_settings())


def get_pipeline() -> UploadPipeline:
    return UploadPipeline(get_model(), row_limit=get_settings().tabular_row_limit)
