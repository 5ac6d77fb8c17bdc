"""State machine driving one spreadsheet through upload, validate, preview and process."""

import logging
from typing import TYPE_CHECKING

from testdeck.models.import_session import (
    STAGE_ORDER,
    ImportProgress,
    ImportSession,
    ImportStage,
    ProgressStatus,
    UploadedFile,
)
from testdeck.schemas.import_schemas import ProcessResult, ValidationReport

from .errors import ProcessingError, TransportError, WorkflowError
from .validators import RemoteSheetValidator

if TYPE_CHECKING:
    from testdeck.config import Settings
    from testdeck.services.bulk_upload_client import BulkUploadClient

logger = logging.getLogger(__name__)


class ImportWorkflow:
    """Owns the current ImportSession and is the only code that mutates it.

    Stages only move forward; ``reset`` replaces the session wholesale.
    At most one upload is in flight: a file selected outside the upload
    stage is ignored.
    """

    def __init__(self, client: "BulkUploadClient", settings: "Settings | None" = None) -> None:
        if settings is None:
            from testdeck.config import get_settings

            settings = get_settings()
        self.client = client
        self.settings = settings
        self.session = ImportSession()

    @property
    def stage(self) -> ImportStage:
        return self.session.stage

    @property
    def can_process(self) -> bool:
        """True when the session is in preview with a clean, validated upload."""
        session = self.session
        return (
            session.stage == ImportStage.PREVIEW
            and session.upload_id is not None
            and session.report is not None
            and not session.report.has_blocking_errors
        )

    def _check_selection(self, upload: UploadedFile, project_id: int | str | None, user_id: int | str | None) -> None:
        allowed = [ext.lower().lstrip(".") for ext in self.settings.allowed_extensions]
        if upload.extension not in allowed:
            raise WorkflowError(
                f"Unsupported file type '{upload.filename}'. Allowed: {', '.join('.' + e for e in allowed)}"
            )
        if upload.size > self.settings.max_upload_size_bytes:
            raise WorkflowError(f"File too large. Maximum size is {self.settings.max_upload_size_mb}MB")
        if project_id in (None, ""):
            raise WorkflowError("Select a project before uploading")
        if user_id in (None, ""):
            raise WorkflowError("User identity is required to upload")

    async def select_file(
        self,
        upload: UploadedFile,
        project_id: int | str | None,
        user_id: int | str | None,
    ) -> ValidationReport | None:
        """Select a file and validate it remotely (upload -> validate -> preview).

        Args:
            upload: The chosen spreadsheet.
            project_id: Active project.
            user_id: Uploading user.

        Returns:
            The transformed report, or None if the selection was ignored
            or the session was reset while validation was in flight.

        Raises:
            WorkflowError: If the file or context is rejected; stage stays upload.
            TransportError: If remote validation fails; the session returns to upload.
        """
        session = self.session
        if session.stage != ImportStage.UPLOAD:
            logger.warning(
                "Ignoring selection of %s while session is in %s stage",
                upload.filename,
                session.stage.value,
            )
            return None

        try:
            self._check_selection(upload, project_id, user_id)
        except WorkflowError as e:
            logger.warning("Rejected %s: %s", upload.filename, e)
            session.error = str(e)
            raise

        session.file = upload
        session.project_id = str(project_id)
        session.user_id = str(user_id)
        session.error = None
        session.stage = ImportStage.VALIDATE
        logger.info("Validating %s (%d bytes)", upload.filename, upload.size)

        validator = RemoteSheetValidator(self.client, user_id=session.user_id, project_id=session.project_id)
        try:
            report = await validator.validate(upload)
            if not report.success:
                raise TransportError("Validation was not successful")
            if not report.upload_id:
                raise TransportError("Validation response did not include an upload id")
        except TransportError as e:
            if session is not self.session:
                logger.info("Dropping validation failure for a discarded session")
                return None
            logger.warning("Validation of %s failed: %s", upload.filename, e)
            session.stage = ImportStage.UPLOAD
            session.file = None
            session.report = None
            session.upload_id = None
            session.error = str(e)
            raise

        if session is not self.session:
            logger.info("Dropping validation result for a discarded session")
            return None

        session.report = report
        session.upload_id = report.upload_id
        session.stage = ImportStage.PREVIEW
        logger.info(
            "Upload %s ready for preview: %d valid, %d warning, %d total sheets",
            report.upload_id,
            report.valid_sheet_count,
            report.warning_sheet_count,
            len(report.sheets),
        )
        return report

    async def process(self, confirm_warnings: bool = False) -> ProcessResult | None:
        """Commit the validated upload (preview -> process).

        Returns:
            The backend's ProcessResult, or None if the session was reset
            while the call was in flight.

        Raises:
            WorkflowError: If not in preview or any sheet failed validation.
            ProcessingError: If the commit fails; the session returns to preview.
        """
        session = self.session
        if session.stage != ImportStage.PREVIEW or session.report is None or session.upload_id is None:
            raise WorkflowError("Nothing to process. Upload and validate a file first")
        if session.report.has_blocking_errors:
            raise WorkflowError("Fix the sheets with validation errors before processing")

        total = session.report.total_rows
        session.stage = ImportStage.PROCESS
        session.error = None
        session.progress = ImportProgress(current=0, total=total, status=ProgressStatus.PROCESSING)
        logger.info("Processing upload %s (%d rows)", session.upload_id, total)

        try:
            result = await self.client.process(
                session.upload_id,
                project_id=session.project_id,
                user_id=session.user_id,
                confirm_warnings=confirm_warnings,
            )
        except ProcessingError as e:
            if session is not self.session:
                logger.info("Dropping processing failure for a discarded session")
                return None
            logger.warning("Processing of upload %s failed: %s", session.upload_id, e)
            session.stage = ImportStage.PREVIEW
            session.progress = ImportProgress(current=0, total=total, status=ProgressStatus.IDLE)
            session.error = str(e)
            raise

        if session is not self.session:
            logger.info("Dropping processing result for a discarded session")
            return None

        session.progress.advance(total)
        session.progress.status = ProgressStatus.COMPLETED
        session.result = result
        logger.info("Upload %s processed: %s", session.upload_id, result.total_components)
        return result

    def update_progress(self, current: int) -> None:
        """Advance the create-step counter; never moves backwards or past the total."""
        if self.session.stage != ImportStage.PROCESS:
            logger.debug("Ignoring progress update outside the process stage")
            return
        self.session.progress.advance(current)

    def reset(self) -> None:
        """Discard the current session and start again at the upload stage."""
        logger.info("Resetting import session (was %s)", self.session.stage.value)
        self.session = ImportSession()

    def step_status(self, stage: ImportStage) -> str:
        """Indicator state for a wizard step: "completed", "current" or "pending"."""
        current = STAGE_ORDER.index(self.session.stage)
        index = STAGE_ORDER.index(ImportStage(stage))
        if index < current:
            return "completed"
        if index == current:
            if stage == ImportStage.PROCESS and self.session.progress.status == ProgressStatus.COMPLETED:
                return "completed"
            return "current"
        return "pending"
