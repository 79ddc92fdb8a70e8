from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

MISSING = "N/A"

CellValue = Union[str, int, float, None]


@dataclass
class InvoiceRecord:
    serial_number: CellValue = MISSING
    customer_name: CellValue = MISSING
    product_name: CellValue = MISSING
    qty: CellValue = MISSING
    tax: CellValue = MISSING
    total_amount: CellValue = MISSING
    date: CellValue = MISSING

    def to_dict(self) -> dict[str, Any]:
        return {
            "Serial Number": self.serial_number,
            "Customer Name": self.customer_name,
            "Product Name": self.product_name,
            "Qty": self.qty,
            "Tax": self.tax,
            "Total Amount": self.total_amount,
            "Date": self.date,
        }


@dataclass
class ProductRecord:
    product_name: CellValue = MISSING
    category: CellValue = None
    tax: CellValue = MISSING
    unit_price: CellValue = MISSING
    stock_quantity: CellValue = MISSING
    price_with_tax: CellValue = MISSING

    def to_dict(self) -> dict[str, Any]:
        return {
            "Product Name": self.product_name,
            "Category": self.category,
            "Tax": self.tax,
            "Unit Price": self.unit_price,
            "Stock Quantity": self.stock_quantity,
            "Price with Tax": self.price_with_tax,
        }


@dataclass
class CustomerRecord:
    customer_name: CellValue = MISSING
    phone_number: CellValue = MISSING
    total_purchase_amount: CellValue = MISSING

    def to_dict(self) -> dict[str, Any]:
        return {
            "Customer Name": self.customer_name,
            "Phone Number": self.phone_number,
            "Total Purchase Amount": self.total_purchase_amount,
        }


@dataclass
class ExtractedRecords:
    """The three record families returned for one upload."""

    invoices: list[dict[str, Any]] = field(default_factory=list)
    products: list[dict[str, Any]] = field(default_factory=list)
    customers: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoices": self.invoices,
            "products": self.products,
            "customers": self.customers,
        }
