"""
Run the extraction API.

Usage:
    python -m invoice_extractor
"""
import uvicorn

from invoice_extractor.core.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("invoice_extractor.api.main:app", host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()
