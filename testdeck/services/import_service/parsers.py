"""File parsing functions for XLSX and CSV parameter files."""

import csv
import io
from typing import Any

from openpyxl import load_workbook

from .constants import MAX_ROWS


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_csv(file_content: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    """Parse CSV file content into headers and rows.

    Tries UTF-8 first (BOM tolerated), falls back to Latin-1. All values
    are strings.

    Args:
        file_content: Raw CSV file bytes.

    Returns:
        Tuple of (headers, rows) where rows are dicts keyed by header name.

    Raises:
        ValueError: If the CSV has no headers.
    """
    reader = None
    for encoding in ("utf-8-sig", "latin-1"):
        try:
            text_stream = io.TextIOWrapper(io.BytesIO(file_content), encoding=encoding)
            reader = csv.DictReader(text_stream)
            # Force header read to trigger any decode error early
            _ = reader.fieldnames
            break
        except (UnicodeDecodeError, csv.Error):
            reader = None
            continue

    if reader is None or reader.fieldnames is None:
        raise ValueError("CSV file has no headers")

    headers = [h.strip() for h in reader.fieldnames if h and h.strip()]
    if not headers:
        raise ValueError("CSV file has no valid headers")

    rows: list[dict[str, Any]] = []
    for i, row in enumerate(reader):
        if i >= MAX_ROWS:
            break
        cleaned = {h.strip(): (v or "").strip() for h, v in row.items() if h and h.strip()}
        if any(v for v in cleaned.values()):
            rows.append(cleaned)

    return headers, rows


def parse_xlsx(file_content: bytes) -> tuple[list[str], list[dict[str, Any]]]:
    """Parse XLSX file content into headers and rows (first sheet only).

    Cell values keep their native types (booleans stay booleans, numbers
    stay numbers); only strings are trimmed. Fully blank rows are skipped.

    Args:
        file_content: Raw XLSX file bytes.

    Returns:
        Tuple of (headers, rows) where rows are dicts keyed by header name.

    Raises:
        ValueError: If the XLSX is empty or has no headers.
    """
    wb = load_workbook(filename=io.BytesIO(file_content), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0] if wb.worksheets else None
        if ws is None:
            raise ValueError("XLSX file has no worksheets")

        row_iter = ws.iter_rows(values_only=True)

        # First row = headers
        try:
            raw_headers = next(row_iter)
        except StopIteration:
            raise ValueError("XLSX file is empty") from None

        columns = [(j, str(h).strip()) for j, h in enumerate(raw_headers) if not _is_blank(h)]
        if not columns:
            raise ValueError("XLSX file has no valid headers")

        rows: list[dict[str, Any]] = []
        for i, row_values in enumerate(row_iter):
            if i >= MAX_ROWS:
                break
            row_dict: dict[str, Any] = {}
            for j, header in columns:
                val = row_values[j] if j < len(row_values) else None
                row_dict[header] = val.strip() if isinstance(val, str) else val
            if not all(_is_blank(v) for v in row_dict.values()):
                rows.append(row_dict)
    finally:
        wb.close()

    return [header for _, header in columns], rows


def parse_spreadsheet(file_content: bytes, file_type: str = "xlsx") -> tuple[list[str], list[dict[str, Any]]]:
    """Dispatch to the parser for ``file_type`` ("xlsx" or "csv")."""
    if file_type.lower().lstrip(".") == "csv":
        return parse_csv(file_content)
    return parse_xlsx(file_content)
