"""Column label normalization and cell lookup for spreadsheet rows."""

import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from .constants import COLUMN_ALIASES

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^0-9A-Za-z_\s]")
_TOKEN_SPLIT = re.compile(r"[\s_]+")
_FOLD = re.compile(r"[^0-9a-z]")


def _alias_forms(label: str) -> tuple[str, str]:
    """Return the two lookup forms of a label: spaces collapsed, and underscored."""
    collapsed = _WHITESPACE.sub(" ", label.strip().lower())
    return collapsed, collapsed.replace(" ", "_")


def column_to_key(label: str) -> str:
    """Map a human-authored column label to its canonical key.

    "Suite Name", "suite_name" and "SUITE NAME" all resolve to ``suiteName``.
    Labels missing from the alias table are camel-cased.

    Args:
        label: Column header as found in the spreadsheet or backend payload.

    Returns:
        Canonical field key, or "" for a blank label.
    """
    for form in _alias_forms(label):
        if form in COLUMN_ALIASES:
            return COLUMN_ALIASES[form]

    cleaned = _DISALLOWED.sub("", label)
    tokens = [t for t in _TOKEN_SPLIT.split(cleaned) if t]
    if not tokens:
        return ""

    first, rest = tokens[0], tokens[1:]
    return first.lower() + "".join(t[:1].upper() + t[1:].lower() for t in rest)


def _fold(key: str) -> str:
    return _FOLD.sub("", key.lower())


def render_cell_value(value: Any) -> str:
    """Render a cell value the way it is shown in a preview table."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _by_exact_label(row: Mapping[str, Any], label: str) -> Any:
    return row.get(label)


def _by_trimmed_label(row: Mapping[str, Any], label: str) -> Any:
    return row.get(label.strip())


def _by_canonical_key(row: Mapping[str, Any], label: str) -> Any:
    key = column_to_key(label)
    return row.get(key) if key else None


def _by_folded_scan(row: Mapping[str, Any], label: str) -> Any:
    target = _fold(label)
    if not target:
        return None
    for key, value in row.items():
        if isinstance(key, str) and _fold(key) == target and value is not None:
            return value
    return None


# Tried in order; the first resolver returning a non-None value wins.
CELL_RESOLVERS: list[Callable[[Mapping[str, Any], str], Any]] = [
    _by_exact_label,
    _by_trimmed_label,
    _by_canonical_key,
    _by_folded_scan,
]


def get_cell_value(row: Mapping[str, Any] | None, label: str) -> str:
    """Resolve the value a row holds for a column label.

    Args:
        row: Row record, keyed by literal labels, canonical keys, or both.
        label: Column label to look up.

    Returns:
        The cell rendered as a string, or "" when no spelling matches.
    """
    if not row:
        return ""

    for resolver in CELL_RESOLVERS:
        value = resolver(row, label)
        if value is not None:
            return render_cell_value(value)

    logger.debug("No cell found for column %r", label)
    return ""
