from __future__ import annotations

from io import BytesIO
from typing import Any, Callable, Sequence

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from invoice_extractor.core.settings import get_settings


class FakeModel:
    """Records every call and answers with a canned reply or raises."""

    def __init__(self, reply: str = "{}", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[list[Any]] = []

    async def generate_text(self, contents: Sequence[Any]) -> str:
        self.calls.append(list(contents))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    target = tmp_path / "uploads"
    monkeypatch.setenv("IE_UPLOAD_DIR", str(target))
    get_settings.cache_clear()
    yield target
    get_settings.cache_clear()


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def client(upload_dir, fake_model):
    from invoice_extractor.api.deps import get_pipeline
    from invoice_extractor.api.main import create_app
    from invoice_extractor.processing.pipeline import UploadPipeline

    app = create_app()
    app.dependency_overrides[get_pipeline] = lambda: UploadPipeline(
        fake_model, row_limit=get_settings().tabular_row_limit
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    def _make(rows: list[list[Any]], header: list[Any] | None = None) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.append(header or ["Serial", "Date", "Total", "Product", "Qty", "PriceTax", "Unused", "Tax", "Customer", "Phone"])
        for row in rows:
            ws.append(row)
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    return _make
