"""Import service package for validating spreadsheets and driving bulk uploads."""

from .columns import CELL_RESOLVERS, column_to_key, get_cell_value, render_cell_value
from .constants import (
    COLUMN_ALIASES,
    MAX_ROWS,
    PARAMETER_JSON_COLUMNS,
    PARAMETER_OPTIONAL_COLUMNS,
    PARAMETER_REQUIRED_COLUMNS,
    SHEET_FIELD_TABLE,
    SHEET_KIND_ALIASES,
    VALIDATION_STATUS_ALIASES,
)
from .converters import (
    _coerce_float,
    _coerce_int,
    _decode_json,
    is_active,
    row_to_parameter,
    row_to_parameter_data,
)
from .errors import (
    BadRequestError,
    BulkImportError,
    ProcessingError,
    TemplateDownloadError,
    TransportError,
    WorkflowError,
)
from .normalizers import normalize_severity, normalize_sheet_kind, normalize_validation_status
from .parsers import parse_csv, parse_spreadsheet, parse_xlsx
from .templates import (
    PARAMETER_TEMPLATE_FILENAME,
    build_parameter_template,
    write_parameter_template,
)
from .transformer import flatten_errors, map_row, transform_sheet, transform_validation_response
from .validators import (
    ParameterFileValidator,
    RemoteSheetValidator,
    StructuralValidator,
    validate_parameter_file,
)
from .workflow import ImportWorkflow

__all__ = [
    # Constants
    "COLUMN_ALIASES",
    "MAX_ROWS",
    "PARAMETER_JSON_COLUMNS",
    "PARAMETER_OPTIONAL_COLUMNS",
    "PARAMETER_REQUIRED_COLUMNS",
    "SHEET_FIELD_TABLE",
    "SHEET_KIND_ALIASES",
    "VALIDATION_STATUS_ALIASES",
    # Columns
    "CELL_RESOLVERS",
    "column_to_key",
    "get_cell_value",
    "render_cell_value",
    # Normalizers
    "normalize_severity",
    "normalize_sheet_kind",
    "normalize_validation_status",
    # Parsers
    "parse_csv",
    "parse_spreadsheet",
    "parse_xlsx",
    # Converters
    "is_active",
    "row_to_parameter",
    "row_to_parameter_data",
    "_coerce_float",
    "_coerce_int",
    "_decode_json",
    # Errors
    "BadRequestError",
    "BulkImportError",
    "ProcessingError",
    "TemplateDownloadError",
    "TransportError",
    "WorkflowError",
    # Transformer
    "flatten_errors",
    "map_row",
    "transform_sheet",
    "transform_validation_response",
    # Validators
    "ParameterFileValidator",
    "RemoteSheetValidator",
    "StructuralValidator",
    "validate_parameter_file",
    # Templates
    "PARAMETER_TEMPLATE_FILENAME",
    "build_parameter_template",
    "write_parameter_template",
    # Workflow
    "ImportWorkflow",
]
