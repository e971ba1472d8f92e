"""Inventory CSV export and parsing.

The file format is the one spreadsheet users edit by hand: semicolon
delimited, French headers, one row per product variant and a comma as the
decimal separator for prices.
"""

from __future__ import annotations

import csv
import io
import logging
import math
from collections.abc import Iterable

from grso_pos.config import settings
from grso_pos.errors import CsvImportError
from grso_pos.models.catalog import Product
from grso_pos.models.inventory import ImportRow

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"
_UTF8_BOM_BYTES = UTF8_BOM.encode("utf-8")

INVENTORY_HEADERS = ["nom", "catégorie", "prix", "taille", "stock", "seuil de stock faible"]
_HEADER_FIELDS = dict(
    zip(
        INVENTORY_HEADERS,
        ["name", "category", "price", "size", "stock", "low_stock_threshold"],
        strict=True,
    )
)


def format_amount(value: float) -> str:
    """Render an amount with two decimals and a comma separator."""

    return f"{value:.2f}".replace(".", ",")


def export_inventory_csv(products: Iterable[Product]) -> str:
    """Serialize products to CSV text, BOM included."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=";", lineterminator="\n")
    writer.writerow(INVENTORY_HEADERS)
    for product in products:
        for variant in product.variants:
            writer.writerow(
                [
                    product.name,
                    product.category,
                    format_amount(product.price),
                    variant.size,
                    variant.stock,
                    variant.low_stock_threshold,
                ]
            )
    return UTF8_BOM + buffer.getvalue()


def decode_inventory_bytes(data: bytes, encoding: str | None = None) -> str:
    """Decode an uploaded inventory file.

    Files starting with a UTF-8 byte-order mark (such as our own exports) are
    read as UTF-8; anything else is read with the configured legacy encoding.
    """

    if data.startswith(_UTF8_BOM_BYTES):
        return data.decode("utf-8-sig")
    return data.decode(encoding or settings.INVENTORY_IMPORT_ENCODING, errors="replace")


def _parse_price(raw: str) -> float:
    value = float(raw.replace(",", ".") or "0")
    if not math.isfinite(value):
        raise ValueError(f"Price {raw!r} is not a number")
    return value


def _parse_row(values: dict[str, str], line_number: int) -> ImportRow:
    try:
        return ImportRow(
            name=values.get("name", ""),
            category=values.get("category", ""),
            price=_parse_price(values.get("price", "")),
            size=values.get("size") or "N/A",
            stock=int(values.get("stock") or "0"),
            low_stock_threshold=int(values.get("low_stock_threshold") or "0"),
        )
    except ValueError as exc:
        logger.debug("Rejected inventory line %d: %s", line_number, exc)
        raise CsvImportError(
            f"Line {line_number} is invalid: missing or incorrect data",
            line=line_number,
        ) from exc


def parse_inventory_csv(text: str) -> list[ImportRow]:
    """Parse inventory CSV text into import rows, all or nothing.

    Raises:
        CsvImportError: If the file has no data rows, lacks a required header,
            or contains an invalid row. Nothing is returned in that case, so a
            bad file never leads to a partial import.
    """

    reader = csv.reader(io.StringIO(text.lstrip(UTF8_BOM)), delimiter=";")
    records = [
        (reader.line_num, row) for row in reader if any(cell.strip() for cell in row)
    ]
    if len(records) < 2:
        raise CsvImportError("The CSV file is empty or only contains headers")

    headers = [cell.strip().lower() for cell in records[0][1]]
    missing = [header for header in INVENTORY_HEADERS if header not in headers]
    if missing:
        raise CsvImportError(
            f"Missing or incorrect headers. Required: {'; '.join(INVENTORY_HEADERS)}. "
            f"Missing: {', '.join(missing)}",
            missing_headers=missing,
        )

    rows = []
    for line_number, cells in records[1:]:
        values = {}
        for index, header in enumerate(headers):
            field = _HEADER_FIELDS.get(header)
            if field:
                values[field] = cells[index].strip() if index < len(cells) else ""
        rows.append(_parse_row(values, line_number))
    return rows
