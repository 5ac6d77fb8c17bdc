"""HTTP gateway to the backend's bulk upload endpoints."""

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

import httpx
from pydantic import ValidationError

from testdeck.models.import_session import UploadedFile
from testdeck.schemas.import_schemas import ProcessResult
from testdeck.services.import_service.errors import (
    BadRequestError,
    ProcessingError,
    TemplateDownloadError,
    TransportError,
)

if TYPE_CHECKING:
    from testdeck.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_FILENAME = "Template_Automation.xlsx"
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_DISPOSITION_FILENAME = re.compile(
    r"filename\*=UTF-8''([^;]+)|filename=\"?([^\";]+)\"?",
    re.IGNORECASE,
)


def filename_from_disposition(header: str | None, default: str = DEFAULT_TEMPLATE_FILENAME) -> str:
    """Extract the attachment filename from a Content-Disposition header.

    Accepts both the RFC 5987 ``filename*=UTF-8''...`` form and the plain
    ``filename="..."`` form. Directory components are stripped.

    Args:
        header: Content-Disposition header value, possibly missing.
        default: Name used when the header carries no filename.

    Returns:
        Decoded file name.
    """
    match = _DISPOSITION_FILENAME.search(header or "")
    raw = (match.group(1) or match.group(2)) if match else None
    name = Path(unquote(raw.strip())).name if raw else ""
    return name or default


class BulkUploadClient:
    """Async client for template download, validate and process calls."""

    def __init__(
        self,
        base_url: str,
        prefix: str = "/api/bulk-upload",
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend root URL, e.g. "http://localhost:8080".
            prefix: Path prefix of the bulk upload endpoints.
            token: Bearer token sent with every request, if configured.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.prefix = "/" + prefix.strip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: "Settings", transport: httpx.AsyncBaseTransport | None = None) -> "BulkUploadClient":
        return cls(
            base_url=settings.api_base_url,
            prefix=settings.bulk_prefix,
            token=settings.api_token,
            timeout=settings.api_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BulkUploadClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.prefix}/{path}"

    async def _send(self, method: str, path: str, error_cls: type[TransportError], **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise error_cls(f"Request to {path} failed: {e}") from e

    async def download_template(self, dest_dir: Path, default_name: str = DEFAULT_TEMPLATE_FILENAME) -> Path:
        """Download the import template into ``dest_dir``.

        The file is named after the Content-Disposition header, or
        ``default_name`` when the backend sends none.

        Returns:
            Path of the saved file.

        Raises:
            TemplateDownloadError: On a non-2xx response or network failure.
        """
        response = await self._send("GET", "download-template", TemplateDownloadError)
        if not response.is_success:
            raise TemplateDownloadError(
                f"Failed to download template (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        filename = filename_from_disposition(response.headers.get("Content-Disposition"), default=default_name)
        dest_dir = Path(dest_dir)
        dest_dir.mkdir(parents=True, exist_ok=True)
        path = dest_dir / filename
        path.write_bytes(response.content)
        logger.info("Saved template to %s (%d bytes)", path, len(response.content))
        return path

    async def validate(self, upload: UploadedFile, user_id: int | str, project_id: int | str) -> dict[str, Any]:
        """Send a spreadsheet to the backend for validation.

        Returns:
            The raw JSON validation response.

        Raises:
            BadRequestError: If the backend rejects the file (HTTP 400).
            TransportError: On any other non-2xx response or network failure.
        """
        response = await self._send(
            "POST",
            "validate",
            TransportError,
            files={"file": (upload.filename, upload.content, XLSX_CONTENT_TYPE)},
            data={"userId": str(user_id), "projectId": str(project_id)},
        )

        if response.status_code == 400:
            raise BadRequestError("Invalid file. Please upload a .xlsx template.", status_code=400)
        if not response.is_success:
            raise TransportError(
                f"Validation failed (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError("Validation response was not valid JSON", status_code=response.status_code) from e

    async def process(
        self,
        upload_id: str,
        project_id: int | str,
        user_id: int | str,
        confirm_warnings: bool = False,
    ) -> ProcessResult:
        """Commit a previously validated upload.

        Raises:
            ProcessingError: Carrying the backend's message, details and code,
                or when a successful response does not match ProcessResult.
        """
        try:
            response = await self._client.post(
                self._url("process"),
                json={
                    "uploadId": upload_id,
                    "projectId": str(project_id),
                    "userId": str(user_id),
                    "confirmWarnings": confirm_warnings,
                },
            )
        except httpx.HTTPError as e:
            logger.warning("Process request failed: %s", e)
            raise ProcessingError(details=str(e)) from e

        if not response.is_success:
            raise self._processing_error(response)

        try:
            body = response.json()
        except ValueError:
            body = {}
        try:
            return ProcessResult.model_validate(body if isinstance(body, dict) else {})
        except ValidationError as e:
            logger.warning("Process response for upload %s did not validate: %s", upload_id, e)
            raise ProcessingError(details=str(e), code=response.status_code) from e

    @staticmethod
    def _processing_error(response: httpx.Response) -> ProcessingError:
        try:
            body = response.json()
        except ValueError:
            body = None
        result = body.get("result") if isinstance(body, dict) else None
        result = result if isinstance(result, dict) else {}

        return ProcessingError(
            message=result.get("message") or "Processing failed",
            details=result.get("details"),
            code=result.get("code") or response.status_code,
        )

