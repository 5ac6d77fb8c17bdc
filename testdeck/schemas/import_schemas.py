"""Pydantic schemas for bulk spreadsheet import functionality."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SheetKind(str, Enum):
    """Entity kind a spreadsheet tab describes."""

    PACKAGE = "package"
    SUITE = "suite"
    TEST_CASE = "test-case"
    UNKNOWN = "unknown"


class ValidationStatus(str, Enum):
    """Backend verdict for one sheet."""

    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"
    UNKNOWN = "unknown"


class Severity(str, Enum):
    """Severity of a row-level validation message."""

    ERROR = "error"
    WARNING = "warning"


class RowError(BaseModel):
    """One validation message for a row/column of a sheet."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(..., description="1-based spreadsheet row number")
    column: str = ""
    message: str
    severity: Severity = Severity.ERROR


class SheetReport(BaseModel):
    """Validation result for a single spreadsheet tab."""

    name: str
    kind: SheetKind = SheetKind.UNKNOWN
    raw_kind: str = ""
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(default_factory=list)
    row_count: int = 0
    validation_status: ValidationStatus = ValidationStatus.UNKNOWN
    raw_status: str = ""
    errors: list[RowError] = Field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for e in self.errors if e.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self.errors if e.severity == Severity.WARNING)


class ValidationReport(BaseModel):
    """Transformed multi-sheet validation result for one uploaded file."""

    success: bool = False
    upload_id: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    processing_time: float | None = None
    sheets: list[SheetReport] = Field(default_factory=list)
    total_rows: int = 0

    @property
    def has_blocking_errors(self) -> bool:
        """True when any sheet failed validation outright."""
        return any(s.validation_status == ValidationStatus.ERROR for s in self.sheets)

    @property
    def valid_sheet_count(self) -> int:
        return sum(1 for s in self.sheets if s.validation_status == ValidationStatus.VALID)

    @property
    def warning_sheet_count(self) -> int:
        return sum(1 for s in self.sheets if s.validation_status == ValidationStatus.WARNING)

    @property
    def component_counts(self) -> dict[str, int]:
        """Row counts per importable kind, used for the completion summary."""
        counts = {
            SheetKind.PACKAGE.value: 0,
            SheetKind.SUITE.value: 0,
            SheetKind.TEST_CASE.value: 0,
        }
        for sheet in self.sheets:
            if sheet.kind.value in counts:
                counts[sheet.kind.value] += sheet.row_count
        return counts


class ParameterRow(BaseModel):
    """One data-driven execution row from a parameter spreadsheet."""

    model_config = ConfigDict(frozen=True)

    row_id: str
    active: bool
    test_name: str | None = None
    headers: Any = None
    query_params: Any = None
    request_body: Any = None
    expected_status: int | None = None
    assertions: Any = None
    variables_extract: Any = None
    environment: str | None = None
    timeout: int | None = None
    retry_count: int | None = None
    delay_after: int | None = None


class ParameterValidationResult(BaseModel):
    """Outcome of validating a parameter spreadsheet client-side."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    data: list[ParameterRow] = Field(default_factory=list)
    total_rows: int = 0
    active_rows: int = 0


class ProcessResult(BaseModel):
    """Backend response after committing a validated upload."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    file_name: str | None = Field(None, alias="fileName")
    file_size: int | None = Field(None, alias="fileSize")
    completed_at: str | None = Field(None, alias="completedAt")
    project_id: str | int | None = Field(None, alias="projectId")
    total_components: dict[str, int] = Field(default_factory=dict, alias="totalComponents")
