from __future__ import annotations

from enum import Enum

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExtractionStrategy(str, Enum):
    TABULAR = "tabular"
    AI_DELEGATED = "ai-delegated"


def classify_mime_type(mime_type: str | None) -> ExtractionStrategy:
    """Pick the extraction strategy from the declared MIME type.

    Only an exact match on the xlsx MIME type goes down the tabular path.
    """
    if mime_type == XLSX_MIME_TYPE:
        return ExtractionStrategy.TABULAR
    return ExtractionStrategy.AI_DELEGATED
