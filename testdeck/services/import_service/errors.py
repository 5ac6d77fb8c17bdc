"""Exceptions raised by the bulk import service."""


class BulkImportError(Exception):
    """Base class for bulk import failures."""

    pass


class TransportError(BulkImportError):
    """Raised when a backend call fails with a non-2xx response or a network error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class BadRequestError(TransportError):
    """Raised when the backend rejects an uploaded file as malformed (HTTP 400)."""

    pass


class TemplateDownloadError(TransportError):
    """Raised when the import template cannot be downloaded."""

    pass


class ProcessingError(BulkImportError):
    """Raised when committing a validated upload fails.

    The string form is the text shown to the user, e.g.
    ``"Project mismatch (code 409)"``.
    """

    def __init__(
        self,
        message: str = "Processing failed",
        details: str | None = None,
        code: int | str | None = None,
    ):
        self.message = message
        self.details = details
        self.code = code
        super().__init__(self.display_message)

    @property
    def display_message(self) -> str:
        text = self.message
        if self.details:
            text = f"{text}: {self.details}"
        if self.code is not None and self.code != "":
            text = f"{text} (code {self.code})"
        return text


class WorkflowError(BulkImportError):
    """Raised when the import workflow refuses a transition."""

    pass
