"""Generation of the example execution parameter workbook."""

import io
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

PARAMETER_TEMPLATE_FILENAME = "Bulk_Test_Data_Template.xlsx"
PARAMETER_TEMPLATE_SHEET = "TestData"

PARAMETER_TEMPLATE_HEADERS = [
    "Row_ID",
    "Test_Name",
    "Headers",
    "Query_Params",
    "Request_Body",
    "Expected_Status",
    "Assertions",
    "Environment",
    "Timeout",
    "Active",
]

_HEADERS_JSON = '{"Content-Type": "application/json", "Authorization": "Bearer {{token}}"}'
_QUERY_JSON = '{"page": 1, "limit": 10}'

PARAMETER_TEMPLATE_ROWS: list[dict[str, Any]] = [
    {
        "Row_ID": 1,
        "Test_Name": "Valid User Data",
        "Headers": _HEADERS_JSON,
        "Query_Params": _QUERY_JSON,
        "Request_Body": '{"name": "John Doe", "email": "john@example.com", "age": 30}',
        "Expected_Status": 200,
        "Assertions": '[{"type": "status", "expected": 200}, '
        '{"type": "response_contains", "field": "data.name", "expected": "John Doe"}]',
        "Environment": "DEV",
        "Timeout": 5000,
        "Active": "TRUE",
    },
    {
        "Row_ID": 2,
        "Test_Name": "Invalid Email Format",
        "Headers": _HEADERS_JSON,
        "Query_Params": _QUERY_JSON,
        "Request_Body": '{"name": "Jane Doe", "email": "invalid-email", "age": 25}',
        "Expected_Status": 400,
        "Assertions": '[{"type": "status", "expected": 400}, '
        '{"type": "response_contains", "field": "error.message", "expected": "Invalid email format"}]',
        "Environment": "DEV",
        "Timeout": 5000,
        "Active": "TRUE",
    },
    {
        "Row_ID": 3,
        "Test_Name": "Missing Required Field",
        "Headers": _HEADERS_JSON,
        "Query_Params": _QUERY_JSON,
        "Request_Body": '{"email": "test@example.com", "age": 28}',
        "Expected_Status": 400,
        "Assertions": '[{"type": "status", "expected": 400}, '
        '{"type": "response_contains", "field": "error.message", "expected": "Name is required"}]',
        "Environment": "DEV",
        "Timeout": 5000,
        "Active": "TRUE",
    },
]


def build_parameter_template() -> bytes:
    """Build the example parameter workbook.

    Returns:
        XLSX content as bytes, with a single "TestData" sheet.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = PARAMETER_TEMPLATE_SHEET

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
    header_alignment = Alignment(horizontal="center")

    for col_idx, header in enumerate(PARAMETER_TEMPLATE_HEADERS, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment

    for row_idx, row in enumerate(PARAMETER_TEMPLATE_ROWS, 2):
        for col_idx, header in enumerate(PARAMETER_TEMPLATE_HEADERS, 1):
            ws.cell(row=row_idx, column=col_idx, value=row.get(header))

    for col_idx, header in enumerate(PARAMETER_TEMPLATE_HEADERS, 1):
        longest = max([len(header)] + [len(str(r.get(header, ""))) for r in PARAMETER_TEMPLATE_ROWS])
        ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, 50)

    ws.freeze_panes = "A2"

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def write_parameter_template(dest_dir: Path) -> Path:
    """Write the example parameter workbook into ``dest_dir`` and return its path."""
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)
    path = dest_dir / PARAMETER_TEMPLATE_FILENAME
    path.write_bytes(build_parameter_template())
    return path
