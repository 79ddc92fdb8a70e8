from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from io import BytesIO
from typing import Any, Sequence

from openpyxl import load_workbook
from structlog import get_logger

from invoice_extractor.core.errors import InvalidSpreadsheetError
from invoice_extractor.core.metrics import observe_extraction
from invoice_extractor.processing.records import (
    MISSING,
    CustomerRecord,
    ExtractedRecords,
    InvoiceRecord,
    ProductRecord,
)

logger = get_logger(__name__)

DEFAULT_ROW_LIMIT = 15

# Fixed cell positions (0-indexed) of the supported sheet layout
COL_SERIAL_NUMBER = 0
COL_DATE = 1
COL_TOTAL_AMOUNT = 2
COL_PRODUCT_NAME = 3
COL_QTY = 4
COL_PRICE_WITH_TAX = 5
COL_TAX = 7
COL_CUSTOMER_NAME = 8
COL_PHONE_NUMBER = 9


def _cell(row: Sequence[Any], index: int) -> Any:
    """Return the cell at `index` or "N/A" when it is blank or past the row end."""
    if index >= len(row):
        return MISSING
    value = row[index]
    if value is None:
        return MISSING
    if isinstance(value, str) and not value.strip():
        return MISSING
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def read_first_sheet(data: bytes, max_rows: int | None = None) -> list[tuple[Any, ...]] | None:
    """Load the workbook and return the first sheet as a grid of row tuples.

    Returns None when the workbook has no sheets. `max_rows` bounds the grid,
    header row included.
    """
    try:
        workbook = load_workbook(BytesIO(data), data_only=True)
    except Exception as exc:
        raise InvalidSpreadsheetError(f"Unable to read spreadsheet: {exc}") from exc
    try:
        if not workbook.worksheets:
            return None
        sheet = workbook.worksheets[0]
        last_row = sheet.max_row if max_rows is None else min(sheet.max_row, max_rows)
        if last_row < 1:
            return []
        return list(sheet.iter_rows(min_row=1, max_row=last_row, values_only=True))
    finally:
        workbook.close()


def row_to_records(row: Sequence[Any]) -> tuple[InvoiceRecord, ProductRecord, CustomerRecord]:
    invoice = InvoiceRecord(
        serial_number=_cell(row, COL_SERIAL_NUMBER),
        customer_name=_cell(row, COL_CUSTOMER_NAME),
        product_name=_cell(row, COL_PRODUCT_NAME),
        qty=_cell(row, COL_QTY),
        tax=_cell(row, COL_TAX),
        total_amount=_cell(row, COL_TOTAL_AMOUNT),
        date=_cell(row, COL_DATE),
    )
    product = ProductRecord(
        product_name=_cell(row, COL_PRODUCT_NAME),
        category=None,
        tax=_cell(row, COL_TAX),
        unit_price=_cell(row, COL_TOTAL_AMOUNT),
        stock_quantity=_cell(row, COL_QTY),
        price_with_tax=_cell(row, COL_PRICE_WITH_TAX),
    )
    customer = CustomerRecord(
        customer_name=_cell(row, COL_CUSTOMER_NAME),
        phone_number=_cell(row, COL_PHONE_NUMBER),
        total_purchase_amount=MISSING,
    )
    return invoice, product, customer


@observe_extraction("tabular")
def extract_tabular_records(data: bytes, row_limit: int = DEFAULT_ROW_LIMIT) -> ExtractedRecords:
    """Map the first sheet's data rows onto invoice, product and customer records.

    Row 0 is treated as the header; at most `row_limit` rows after it are read.
    """
    grid = read_first_sheet(data, max_rows=row_limit + 1)
    result = ExtractedRecords()
    if grid is None:
        logger.info("tabular_no_sheets")
        return result

    for row in grid[1 : row_limit + 1]:
        invoice, product, customer = row_to_records(row)
        result.invoices.append(invoice.to_dict())
        result.products.append(product.to_dict())
        result.customers.append(customer.to_dict())

    logger.info("tabular_extracted", rows=len(result.invoices), row_limit=row_limit)
    return result
