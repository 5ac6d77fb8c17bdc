"""Pydantic schemas for testdeck."""

from testdeck.schemas.import_schemas import (
    ParameterRow,
    ParameterValidationResult,
    ProcessResult,
    RowError,
    Severity,
    SheetKind,
    SheetReport,
    ValidationReport,
    ValidationStatus,
)

__all__ = [
    "ParameterRow",
    "ParameterValidationResult",
    "ProcessResult",
    "RowError",
    "Severity",
    "SheetKind",
    "SheetReport",
    "ValidationReport",
    "ValidationStatus",
]
