from __future__ import annotations

import time
from contextlib import contextmanager
from pathlib import Path, PurePath
from typing import Iterator, Optional

from structlog import get_logger

from invoice_extractor.core.settings import get_settings


logger = get_logger(__name__)


def _safe_name(filename: Optional[str]) -> str:
    # Drop any directory components a client may send (either separator style)
    name = PurePath((filename or "").replace("\\", "/")).name
    return name or "file.bin"


def upload_path_for(filename: Optional[str]) -> Path:
    settings = get_settings()
    stamp = int(time.time() * 1000)
    return settings.upload_dir / f"{stamp}-{_safe_name(filename)}"


def save_upload(file_bytes: bytes, filename: Optional[str]) -> Path:
    out = upload_path_for(filename)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(file_bytes)
    logger.debug("upload_saved", path=str(out), size_bytes=len(file_bytes))
    return out


def delete_upload(path: Path) -> bool:
    """Remove a stored upload. Failures are logged, never raised."""
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("upload_already_removed", path=str(path))
        return False
    except OSError as e:
        logger.warning("upload_delete_failed", path=str(path), error=str(e))
        return False
    logger.debug("upload_deleted", path=str(path))
    return True


@contextmanager
def stored_upload(file_bytes: bytes, filename: Optional[str]) -> Iterator[Path]:
    path = save_upload(file_bytes, filename)
    try:
        yield path
    finally:
        delete_upload(path)
