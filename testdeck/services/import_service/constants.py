"""Constants for the bulk import service."""

from testdeck.schemas.import_schemas import SheetKind, ValidationStatus

# Safety limit on rows read from a local parameter file
MAX_ROWS = 5000

# Column alias table: normalized label (lower-case, underscores for spaces) -> canonical key
COLUMN_ALIASES: dict[str, str] = {
    # package
    "package_name": "packageName",
    "packagename": "packageName",
    "package": "packageName",
    "test_package": "packageName",
    # suite
    "suite_name": "suiteName",
    "suitename": "suiteName",
    "suite": "suiteName",
    "test_suite": "suiteName",
    # test case
    "testcasename": "testCaseName",
    "test_case_name": "testCaseName",
    "testcase_name": "testCaseName",
    "case_name": "testCaseName",
    "test_case": "testCaseName",
    # api reference
    "api_id": "apiId",
    "apiid": "apiId",
    "api": "apiId",
    "test_case_id": "testCaseId",
    # shared
    "description": "description",
    "desc": "description",
    "execution": "execution",
    "execution_type": "executionType",
    "report_type": "reportType",
    "project_id": "projectId",
    "type": "type",
    "response_type": "responseType",
    "publish_method": "publishMethod",
    "ftp_path": "ftpPath",
    "email": "email",
    "e-mail": "email",
    # execution parameter files
    "row_id": "rowId",
    "row": "rowId",
    "active": "active",
    "test_name": "testName",
    "headers": "headers",
    "query_params": "queryParams",
    "query_parameters": "queryParams",
    "request_body": "requestBody",
    "body": "requestBody",
    "expected_status": "expectedStatus",
    "assertions": "assertions",
    "variables_extract": "variablesExtract",
    "environment": "environment",
    "env": "environment",
    "timeout": "timeout",
    "retry_count": "retryCount",
    "delay_after": "delayAfter",
}

# Sheet kind synonyms: lower-cased label -> canonical kind
SHEET_KIND_ALIASES: dict[str, str] = {
    "package": SheetKind.PACKAGE.value,
    "packages": SheetKind.PACKAGE.value,
    "test_package": SheetKind.PACKAGE.value,
    "test-package": SheetKind.PACKAGE.value,
    "test package": SheetKind.PACKAGE.value,
    "testpackage": SheetKind.PACKAGE.value,
    "test_packages": SheetKind.PACKAGE.value,
    "suite": SheetKind.SUITE.value,
    "suites": SheetKind.SUITE.value,
    "test_suite": SheetKind.SUITE.value,
    "test-suite": SheetKind.SUITE.value,
    "test suite": SheetKind.SUITE.value,
    "testsuite": SheetKind.SUITE.value,
    "test_suites": SheetKind.SUITE.value,
    "test-case": SheetKind.TEST_CASE.value,
    "test_case": SheetKind.TEST_CASE.value,
    "test case": SheetKind.TEST_CASE.value,
    "testcase": SheetKind.TEST_CASE.value,
    "test_cases": SheetKind.TEST_CASE.value,
    "testcases": SheetKind.TEST_CASE.value,
    "case": SheetKind.TEST_CASE.value,
    "cases": SheetKind.TEST_CASE.value,
    "unknown": SheetKind.UNKNOWN.value,
}

# Substring heuristics applied when no synonym matches, checked in order
SHEET_KIND_KEYWORDS: list[tuple[str, str]] = [
    ("package", SheetKind.PACKAGE.value),
    ("suite", SheetKind.SUITE.value),
    ("case", SheetKind.TEST_CASE.value),
]

# Validation verdict synonyms: lower-cased label -> canonical status
VALIDATION_STATUS_ALIASES: dict[str, str] = {
    "valid": ValidationStatus.VALID.value,
    "success": ValidationStatus.VALID.value,
    "successful": ValidationStatus.VALID.value,
    "ok": ValidationStatus.VALID.value,
    "passed": ValidationStatus.VALID.value,
    "pass": ValidationStatus.VALID.value,
    "warning": ValidationStatus.WARNING.value,
    "warnings": ValidationStatus.WARNING.value,
    "warn": ValidationStatus.WARNING.value,
    "error": ValidationStatus.ERROR.value,
    "errors": ValidationStatus.ERROR.value,
    "invalid": ValidationStatus.ERROR.value,
    "failed": ValidationStatus.ERROR.value,
    "fail": ValidationStatus.ERROR.value,
    "failure": ValidationStatus.ERROR.value,
    "unknown": ValidationStatus.UNKNOWN.value,
}

# Per-kind field table: kind -> [(canonical key, source aliases in lookup order)]
SHEET_FIELD_TABLE: dict[str, list[tuple[str, tuple[str, ...]]]] = {
    SheetKind.PACKAGE.value: [
        ("packageName", ("packageName", "Package_Name")),
        ("description", ("description", "Description")),
        ("execution", ("execution", "Execution")),
        ("executionType", ("executionType", "Execution_Type")),
        ("reportType", ("reportType", "Report_Type")),
        ("projectId", ("projectId", "Project_ID")),
    ],
    SheetKind.SUITE.value: [
        ("suiteName", ("suiteName", "Suite_Name")),
        ("description", ("description", "Description")),
        ("execution", ("execution", "Execution")),
        ("executionType", ("executionType", "Execution_Type")),
        ("publishMethod", ("publishMethod", "Publish_method")),
        ("ftpPath", ("ftpPath", "FTP_Path")),
        ("email", ("email", "Email")),
        ("reportType", ("reportType", "Report_Type")),
        ("packageName", ("packageName", "Package_Name")),
    ],
    SheetKind.TEST_CASE.value: [
        ("testCaseName", ("testCaseName", "TestCaseName")),
        ("type", ("type", "Type")),
        ("responseType", ("responseType", "RESPONSE_TYPE")),
        ("apiId", ("testCaseId", "apiId", "API_ID")),
        ("description", ("description", "DESCRIPTION")),
        ("suiteName", ("suiteName", "Suite_Name")),
    ],
}

# Execution parameter files
PARAMETER_REQUIRED_COLUMNS = ["Row_ID", "Active"]
PARAMETER_OPTIONAL_COLUMNS = [
    "Test_Name",
    "Headers",
    "Query_Params",
    "Request_Body",
    "Expected_Status",
    "Assertions",
    "Variables_Extract",
    "Environment",
    "Timeout",
    "Retry_Count",
    "Delay_After",
]
PARAMETER_JSON_COLUMNS = [
    "Headers",
    "Query_Params",
    "Request_Body",
    "Assertions",
    "Variables_Extract",
]
ACTIVE_VALUES = ("TRUE", "FALSE")
