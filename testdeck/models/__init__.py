"""Session models for testdeck."""

from testdeck.models.import_session import (
    STAGE_ORDER,
    ImportProgress,
    ImportSession,
    ImportStage,
    ProgressStatus,
    UploadedFile,
)

__all__ = [
    "STAGE_ORDER",
    "ImportProgress",
    "ImportSession",
    "ImportStage",
    "ProgressStatus",
    "UploadedFile",
]
