import pytest

from invoice_extractor.processing.classifier import XLSX_MIME_TYPE, ExtractionStrategy, classify_mime_type


def test_xlsx_mime_is_tabular() -> None:
    assert classify_mime_type(XLSX_MIME_TYPE) is ExtractionStrategy.TABULAR


@pytest.mark.parametrize(
    "mime_type",
    [
        "image/png",
        "application/pdf",
        "text/plain",
        "application/vnd.ms-excel",
        XLSX_MIME_TYPE.upper(),
        XLSX_MIME_TYPE + "; charset=binary",
        "",
        None,
    ],
)
def test_everything_else_is_ai_delegated(mime_type) -> None:
    assert classify_mime_type(mime_type) is ExtractionStrategy.AI_DELEGATED
