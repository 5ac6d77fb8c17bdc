"""Pytest configuration and fixtures for testdeck tests."""

import io
from collections.abc import Generator
from typing import Any

import pytest
from openpyxl import Workbook

from testdeck.config import AppConfig, SecretsConfig, Settings, reset_settings
from testdeck.models.import_session import UploadedFile


def make_xlsx(headers: list[str], rows: list[list]) -> bytes:
    """Helper to create XLSX bytes from headers and rows."""
    wb = Workbook()
    ws = wb.active
    ws.append(headers)
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_validation_payload(
    test_case_status: str = "success",
    test_case_errors: list[dict[str, Any]] | None = None,
    upload_id: Any = "up-1",
) -> dict[str, Any]:
    """A three-sheet validate response as the backend sends it."""
    return {
        "success": True,
        "processingTime": 120,
        "data": {
            "uploadId": upload_id,
            "fileName": "import.xlsx",
            "fileSize": 2048,
            "sheets": [
                {
                    "name": "Packages",
                    "type": "TEST_PACKAGE",
                    "columns": ["Package_Name", "Description", "Owner"],
                    "rowCount": 2,
                    "validationStatus": "success",
                    "data": [
                        {"packageName": "Smoke", "description": "Smoke pkg", "Owner": "qa"},
                        {"Package_Name": "Regression"},
                    ],
                    "errors": [],
                },
                {
                    "name": "Suites",
                    "type": "test_suite",
                    "columns": ["Suite_Name", "Package_Name"],
                    "rowCount": 1,
                    "validationStatus": "warning",
                    "data": [{"suiteName": "Login", "packageName": "Smoke"}],
                    "errors": [
                        {"row": 2, "column": "Email", "message": "Email is empty", "severity": "warning"},
                    ],
                },
                {
                    "name": "TestCases",
                    "type": "test_case",
                    "columns": ["TestCaseName", "API_ID", "Request_Body"],
                    "rowCount": 5,
                    "validationStatus": test_case_status,
                    "data": [{"testCaseName": "TC1", "apiId": 42, "Request_Body": "{invalid json"}],
                    "errors": test_case_errors or [],
                },
            ],
        },
    }


INVALID_BODY_ERRORS = [
    {"row": 2, "column": "Request_Body", "message": "Invalid JSON in Request_Body", "severity": "error"},
]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Keep tests away from real config files and cached settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def test_settings() -> Settings:
    """Settings built from defaults only."""
    return Settings(config=AppConfig(), secrets=SecretsConfig())


@pytest.fixture
def workbook_upload() -> UploadedFile:
    """An .xlsx upload with a header row and one data row."""
    content = make_xlsx(["Package_Name", "Description"], [["Smoke", "Smoke pkg"]])
    return UploadedFile(filename="import.xlsx", content=content)
