"""Conversion of the backend's validation payload into a ValidationReport."""

import logging
from typing import Any

from testdeck.schemas.import_schemas import (
    RowError,
    SheetKind,
    SheetReport,
    ValidationReport,
    ValidationStatus,
)

from .columns import column_to_key, get_cell_value
from .constants import SHEET_FIELD_TABLE
from .converters import _coerce_float, _coerce_int
from .normalizers import normalize_severity, normalize_sheet_kind, normalize_validation_status

logger = logging.getLogger(__name__)

_KINDS = {k.value for k in SheetKind}
_STATUSES = {s.value for s in ValidationStatus}


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def map_row(raw: dict[str, Any], kind: str, columns: list[str]) -> dict[str, str]:
    """Build a canonical row record from a raw backend row.

    Known fields for the sheet kind are taken from the first source alias
    that resolves to a value. Every declared column not filled that way is
    then read from the raw row by its own label and stored under its
    canonical key. Table fields still empty after both passes are "".

    Args:
        raw: Row as sent by the backend.
        kind: Canonical sheet kind.
        columns: Declared column headers of the sheet.

    Returns:
        Dict keyed by canonical key with string values.
    """
    record: dict[str, str] = {}
    fields = SHEET_FIELD_TABLE.get(kind, [])

    for key, aliases in fields:
        value = next((v for v in (get_cell_value(raw, a) for a in aliases) if v), "")
        if value:
            record[key] = value

    for column in columns:
        key = column_to_key(column) or column
        if not record.get(key):
            record[key] = get_cell_value(raw, column)

    for key, _ in fields:
        record.setdefault(key, "")

    return record


def flatten_errors(entries: list[Any]) -> list[RowError]:
    """Expand backend error entries into one RowError per message.

    An entry carries either a ``messages`` list or a single ``message``;
    entries without any message are dropped.
    """
    flattened: list[RowError] = []
    for entry in entries:
        entry = _as_dict(entry)
        messages = entry.get("messages")
        if not isinstance(messages, list):
            messages = [entry.get("message")]
        messages = [str(m) for m in messages if m]
        if not messages:
            continue

        row = _coerce_int(entry.get("row")) or 0
        column = str(entry.get("column") or "")
        severity = normalize_severity(entry.get("severity"))
        for message in messages:
            flattened.append(RowError(row=row, column=column, message=message, severity=severity))

    return flattened


def transform_sheet(sheet: dict[str, Any]) -> SheetReport:
    """Transform one backend sheet into a SheetReport."""
    raw_kind = sheet.get("type") or sheet.get("kind") or ""
    kind = normalize_sheet_kind(raw_kind or sheet.get("name"))
    raw_status = sheet.get("validationStatus") or ""
    status = normalize_validation_status(raw_status)

    if kind not in _KINDS:
        logger.debug("Unrecognized sheet kind %r for sheet %r", raw_kind, sheet.get("name"))
        kind = SheetKind.UNKNOWN.value
    if status not in _STATUSES:
        logger.debug("Unrecognized validation status %r for sheet %r", raw_status, sheet.get("name"))
        status = ValidationStatus.UNKNOWN.value

    columns = [str(c) for c in _as_list(sheet.get("columns"))]
    rows = [map_row(_as_dict(r), kind, columns) for r in _as_list(sheet.get("data"))]

    row_count = _coerce_int(sheet.get("rowCount"))
    if row_count is None:
        row_count = len(rows)

    return SheetReport(
        name=str(sheet.get("name") or ""),
        kind=SheetKind(kind),
        raw_kind=str(raw_kind),
        columns=columns,
        rows=rows,
        row_count=row_count,
        validation_status=ValidationStatus(status),
        raw_status=str(raw_status),
        errors=flatten_errors(_as_list(sheet.get("errors"))),
    )


def transform_validation_response(payload: Any) -> ValidationReport:
    """Convert a backend validation response into a ValidationReport.

    Never raises on shape drift: a payload without ``data`` or
    ``data.sheets`` yields an empty report.

    Args:
        payload: Decoded JSON body of the validate call.

    Returns:
        ValidationReport with one SheetReport per backend sheet.
    """
    payload = _as_dict(payload)
    data = _as_dict(payload.get("data"))

    sheets = [transform_sheet(_as_dict(s)) for s in _as_list(data.get("sheets"))]
    upload_id = data.get("uploadId")

    report = ValidationReport(
        success=bool(payload.get("success")),
        upload_id=str(upload_id) if upload_id not in (None, "") else None,
        file_name=str(data["fileName"]) if data.get("fileName") is not None else None,
        file_size=_coerce_int(data.get("fileSize")),
        processing_time=_coerce_float(payload.get("processingTime")),
        sheets=sheets,
        total_rows=sum(s.row_count for s in sheets),
    )
    logger.debug(
        "Transformed validation response: %d sheets, %d rows",
        len(report.sheets),
        report.total_rows,
    )
    return report
