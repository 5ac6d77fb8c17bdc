"""Canonicalization of free-form sheet kind, validation status and severity labels."""

from typing import Any

from testdeck.schemas.import_schemas import Severity, SheetKind, ValidationStatus

from .constants import SHEET_KIND_ALIASES, SHEET_KIND_KEYWORDS, VALIDATION_STATUS_ALIASES


def _clean(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, SheetKind | ValidationStatus | Severity):
        return raw.value
    return str(raw).strip().lower()


def normalize_sheet_kind(raw: Any) -> str:
    """Canonicalize a sheet kind label.

    Known synonyms map onto package/suite/test-case. Labels that merely
    contain one of those words ("Test Packages v2") are matched by keyword.
    Anything else comes back as the lower-cased literal.

    Args:
        raw: Label from the backend or the spreadsheet tab name.

    Returns:
        Canonical kind value, "unknown" for empty input, or the literal.
    """
    value = _clean(raw)
    if not value:
        return SheetKind.UNKNOWN.value
    if value in SHEET_KIND_ALIASES:
        return SHEET_KIND_ALIASES[value]
    for keyword, kind in SHEET_KIND_KEYWORDS:
        if keyword in value:
            return kind
    return value


def normalize_validation_status(raw: Any) -> str:
    """Canonicalize a validation verdict (success/ok/passed -> valid, ...).

    Returns "unknown" for empty input and the lower-cased literal when
    the verdict is not recognized.
    """
    value = _clean(raw)
    if not value:
        return ValidationStatus.UNKNOWN.value
    return VALIDATION_STATUS_ALIASES.get(value, value)


def normalize_severity(raw: Any) -> Severity:
    """Severity of a backend error entry; anything but a warning is an error."""
    value = _clean(raw)
    if value in ("warning", "warn", "warnings"):
        return Severity.WARNING
    return Severity.ERROR
