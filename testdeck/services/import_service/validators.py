"""Structural validators for uploaded spreadsheets.

Two implementations share one interface: the remote validator delegates
to the backend and returns the transformed per-sheet report, the local
one parses an execution parameter file in-process. Row-level problems
are always returned as data, never raised.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from testdeck.models.import_session import UploadedFile
from testdeck.schemas.import_schemas import ParameterValidationResult, ValidationReport

from .constants import ACTIVE_VALUES, PARAMETER_JSON_COLUMNS, PARAMETER_REQUIRED_COLUMNS
from .converters import _is_blank, is_active, row_to_parameter
from .parsers import parse_spreadsheet
from .transformer import transform_validation_response

if TYPE_CHECKING:
    from testdeck.services.bulk_upload_client import BulkUploadClient

logger = logging.getLogger(__name__)


class StructuralValidator(ABC):
    """Abstract base class for spreadsheet validators."""

    @abstractmethod
    async def validate(self, upload: UploadedFile) -> Any:
        """Validate an uploaded file.

        Args:
            upload: The selected spreadsheet.

        Returns:
            A report describing every structural error and warning found.
        """
        pass


class RemoteSheetValidator(StructuralValidator):
    """Validates a multi-sheet import workbook through the backend."""

    def __init__(self, client: "BulkUploadClient", user_id: int | str, project_id: int | str) -> None:
        self.client = client
        self.user_id = user_id
        self.project_id = project_id

    async def validate(self, upload: UploadedFile) -> ValidationReport:
        """Send the file to the backend and transform its report.

        Raises:
            TransportError: If the backend call fails.
        """
        payload = await self.client.validate(upload, user_id=self.user_id, project_id=self.project_id)
        report = transform_validation_response(payload)
        logger.info(
            "Remote validation of %s: %d sheets, %d rows",
            upload.filename,
            len(report.sheets),
            report.total_rows,
        )
        return report


class ParameterFileValidator(StructuralValidator):
    """Validates an execution parameter file locally."""

    async def validate(self, upload: UploadedFile) -> ParameterValidationResult:
        return validate_parameter_file(upload.content, file_type=upload.extension or "xlsx")


def _row_label(row_number: int, row_id: Any) -> str:
    return f"Row {row_number} (ID: {'' if row_id is None else row_id})"


def _check_row(row: dict[str, Any], row_number: int, errors: list[str], warnings: list[str]) -> None:
    row_id = row.get("Row_ID")
    if _is_blank(row_id):
        errors.append(f"Row {row_number}: Missing Row_ID")

    for field in PARAMETER_JSON_COLUMNS:
        value = row.get(field)
        if isinstance(value, str) and value.strip():
            try:
                json.loads(value)
            except ValueError:
                errors.append(f"{_row_label(row_number, row_id)}: Invalid JSON in {field}")

    active = row.get("Active")
    if not isinstance(active, bool) and active not in ACTIVE_VALUES:
        warnings.append(f"{_row_label(row_number, row_id)}: Active should be TRUE or FALSE")


def validate_parameter_file(content: bytes, file_type: str = "xlsx") -> ParameterValidationResult:
    """Validate an execution parameter spreadsheet.

    Errors accumulate across rows and fields rather than stopping at the
    first failure. Warnings never affect validity.

    Args:
        content: Raw file bytes.
        file_type: "xlsx" (default) or "csv".

    Returns:
        ParameterValidationResult with the active rows in ``data``.
    """
    try:
        headers, rows = parse_spreadsheet(content, file_type)
    except Exception as e:
        logger.warning("Could not parse parameter file: %s", e)
        return ParameterValidationResult(valid=False, errors=[f"Failed to parse Excel file: {e}"])

    if not rows:
        return ParameterValidationResult(valid=False, errors=["Excel file contains no data rows"])

    errors: list[str] = []
    warnings: list[str] = []

    for column in PARAMETER_REQUIRED_COLUMNS:
        if column not in headers:
            errors.append(f"Missing required column: {column}")

    # Header is spreadsheet row 1, so the first data row is row 2
    for index, row in enumerate(rows):
        _check_row(row, index + 2, errors, warnings)

    data = [row_to_parameter(row) for row in rows if is_active(row.get("Active"))]

    logger.info(
        "Validated parameter file: %d rows, %d active, %d errors, %d warnings",
        len(rows),
        len(data),
        len(errors),
        len(warnings),
    )
    return ParameterValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        data=data,
        total_rows=len(rows),
        active_rows=len(data),
    )
