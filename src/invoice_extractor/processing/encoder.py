from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from pathlib import Path

from google.genai import types

IMAGE_MIME_TYPE = "image/jpeg"
PDF_MIME_TYPE = "application/pdf"

_MIME_BY_EXTENSION = {
    ".png": IMAGE_MIME_TYPE,
    ".jpg": IMAGE_MIME_TYPE,
    ".jpeg": IMAGE_MIME_TYPE,
    ".pdf": PDF_MIME_TYPE,
}


@dataclass(frozen=True)
class EncodedDocument:
    mime_type: str
    data: str  # base64
    raw: bytes | None = field(default=None, repr=False, compare=False)

    def to_part(self) -> types.Part:
        raw = self.raw if self.raw is not None else base64.b64decode(self.data)
        return types.Part.from_bytes(data=raw, mime_type=self.mime_type)


def mime_type_for(path: str | Path) -> str | None:
    return _MIME_BY_EXTENSION.get(Path(path).suffix.lower())


def encode_document(path: str | Path) -> EncodedDocument | None:
    """Read a stored upload and base64 it for inline submission to the model.

    Returns None for extensions the model cannot take inline.
    """
    normalized = Path(os.path.normpath(path))
    raw = normalized.read_bytes()
    data = base64.b64encode(raw).decode("ascii")
    mime_type = mime_type_for(normalized)
    if mime_type is None:
        return None
    return EncodedDocument(mime_type=mime_type, data=data, raw=raw)
