"""Cell coercion and row conversion functions for parameter imports."""

import json
from typing import Any

from testdeck.schemas.import_schemas import ParameterRow

from .columns import render_cell_value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_int(value: Any) -> int | None:
    """Try to coerce a cell to an int."""
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _coerce_float(value: Any) -> float | None:
    """Try to coerce a cell to a float."""
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _coerce_str(value: Any) -> str | None:
    if _is_blank(value):
        return None
    return render_cell_value(value).strip()


def _decode_json(value: Any) -> Any:
    """Decode a JSON cell.

    Non-string cells, and strings that are not valid JSON, are returned
    as they are; reporting bad JSON is the validator's job.
    """
    if _is_blank(value):
        return None
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value


def is_active(value: Any) -> bool:
    """A row is active only when flagged with boolean True or the string "TRUE"."""
    return value is True or value == "TRUE"


def row_to_parameter_data(row: dict[str, Any]) -> dict[str, Any]:
    """Convert a parsed spreadsheet row to ParameterRow constructor kwargs.

    Args:
        row: Raw row dict keyed by the spreadsheet headers.

    Returns:
        Dict of ParameterRow constructor kwargs.
    """
    return {
        "row_id": _coerce_str(row.get("Row_ID")) or "",
        "active": is_active(row.get("Active")),
        "test_name": _coerce_str(row.get("Test_Name")),
        "headers": _decode_json(row.get("Headers")),
        "query_params": _decode_json(row.get("Query_Params")),
        "request_body": _decode_json(row.get("Request_Body")),
        "expected_status": _coerce_int(row.get("Expected_Status")),
        "assertions": _decode_json(row.get("Assertions")),
        "variables_extract": _decode_json(row.get("Variables_Extract")),
        "environment": _coerce_str(row.get("Environment")),
        "timeout": _coerce_int(row.get("Timeout")),
        "retry_count": _coerce_int(row.get("Retry_Count")),
        "delay_after": _coerce_int(row.get("Delay_After")),
    }


def row_to_parameter(row: dict[str, Any]) -> ParameterRow:
    """Build a ParameterRow from a parsed spreadsheet row."""
    return ParameterRow(**row_to_parameter_data(row))
