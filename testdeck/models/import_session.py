"""ImportSession model for tracking one spreadsheet upload through the wizard."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from testdeck.schemas.import_schemas import ProcessResult, ValidationReport


class ImportStage(str, Enum):
    """Stage of the bulk import wizard. Stages only advance, except on reset."""

    UPLOAD = "upload"
    VALIDATE = "validate"
    PREVIEW = "preview"
    PROCESS = "process"


STAGE_ORDER: list[ImportStage] = [
    ImportStage.UPLOAD,
    ImportStage.VALIDATE,
    ImportStage.PREVIEW,
    ImportStage.PROCESS,
]


class ProgressStatus(str, Enum):
    """Status of the create step."""

    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"


class UploadedFile(BaseModel):
    """A spreadsheet selected by the user. Immutable once selected."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes = Field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        """Lower-cased extension without the dot, or "" when there is none."""
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()

    @classmethod
    def from_path(cls, path: Path) -> "UploadedFile":
        return cls(filename=path.name, content=path.read_bytes())


class ImportProgress(BaseModel):
    """Counter for the create step. `current` never decreases nor exceeds `total`."""

    current: int = 0
    total: int = 0
    status: ProgressStatus = ProgressStatus.IDLE

    def advance(self, to: int) -> None:
        """Move the counter forward to `to`, capped at `total`."""
        capped = min(to, self.total)
        if capped > self.current:
            self.current = capped


class ImportSession(BaseModel):
    """Mutable state of one upload session, owned by ImportWorkflow."""

    stage: ImportStage = ImportStage.UPLOAD
    file: UploadedFile | None = None
    project_id: str | None = None
    user_id: str | None = None
    upload_id: str | None = None
    report: ValidationReport | None = None
    progress: ImportProgress = Field(default_factory=ImportProgress)

    # Last transport/processing failure shown to the user
    error: str | None = None
    result: ProcessResult | None = None
