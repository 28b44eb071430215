"""Data models for the import session and upload requests.

- File and string payload descriptors
- Per-item metadata (label, justification, classification)
- Upload request variants and upload outcomes
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

COLLAPSED = "collapsed"

Scope = Union[Literal["collapsed"], int]
Identifier = Union[str, int]


class ImportMode(str, Enum):
    """Intake mode derived from the number of selected files."""
    EMPTY = "empty"
    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def for_count(cls, count: int) -> "ImportMode":
        if count == 0:
            return cls.EMPTY
        if count == 1:
            return cls.SINGLE
        return cls.MULTIPLE


class MetadataField(str, Enum):
    """Fields an editor can write into a metadata set."""
    LABEL = "label"
    JUSTIFICATION = "justification"
    CLASSIFICATION = "classification"


class IntakeKind(str, Enum):
    """Discriminator passed to the upload transport."""
    IMPORT_FILES = "importFiles"
    IMPORT_FILE_STRING = "importFileString"
    CREATE = "create"


class UploadState(str, Enum):
    """State of an upload lifecycle."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.SUCCEEDED, UploadState.CANCELLED)


class FileDescriptor(BaseModel):
    """A file captured from the user's selection."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="File name as selected")
    size: int = Field(..., ge=0, description="File size in bytes")
    payload: Any = Field(None, description="Opaque reference to the file content")


class StringPayload(BaseModel):
    """A pasted text blob imported in place of a file."""
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Text content")
    mime_type: str = Field("text/plain", description="MIME type of the content")
    type_name: Optional[str] = Field(None, description="Display name for the pasted content")


class LabelValue(BaseModel):
    """Visibility label as reported by the label editor."""
    value: Optional[str] = Field(None, description="Opaque visibility token")
    valid: bool = Field(False, description="Whether the editor accepted the value")


class JustificationValue(BaseModel):
    """Justification as reported by the justification editor."""
    text: Optional[str] = Field(None, description="Free-text justification")
    source_info: Optional[dict[str, Any]] = Field(None, description="Reference to a supporting source")
    valid: bool = Field(False, description="Whether the editor accepted the value")


class MetadataSet(BaseModel):
    """Label, justification and classification for one file or for all."""
    label: LabelValue = Field(default_factory=LabelValue)
    justification: JustificationValue = Field(default_factory=JustificationValue)
    classification: Optional[str] = Field(None, description="Selected classification id")

    def is_valid(self, require_justification: bool = False) -> bool:
        if not self.label.valid:
            return False
        if require_justification and not self.justification.valid:
            return False
        return True


class BulkFilesRequest(BaseModel):
    """Upload of one or more files.

    In collapsed mode ``classifications`` and ``labels`` are single shared
    values; in expanded mode they are lists aligned with ``files``.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    kind: Literal[IntakeKind.IMPORT_FILES] = IntakeKind.IMPORT_FILES
    files: list[FileDescriptor]
    classifications: Union[list[str], Optional[str]] = None
    labels: Union[list[Optional[str]], Optional[str]] = None

    @property
    def classification(self) -> Union[list[str], Optional[str]]:
        return self.classifications

    @property
    def label(self) -> Union[list[Optional[str]], Optional[str]]:
        return self.labels

    @property
    def payload(self) -> list[FileDescriptor]:
        return self.files


class TextImportRequest(BaseModel):
    """Import of a pasted string as a new item."""
    kind: Literal[IntakeKind.IMPORT_FILE_STRING] = IntakeKind.IMPORT_FILE_STRING
    content: str
    mime_type: str
    classification: Optional[str] = None
    label: Optional[str] = None

    @property
    def payload(self) -> dict[str, str]:
        return {"string": self.content, "type": self.mime_type}


class MetadataOnlyCreateRequest(BaseModel):
    """Creation of an item from metadata alone, backed by a justification."""
    kind: Literal[IntakeKind.CREATE] = IntakeKind.CREATE
    justification: JustificationValue
    classification: Optional[str] = None
    label: Optional[str] = None

    @property
    def payload(self) -> JustificationValue:
        return self.justification


UploadRequest = Annotated[
    Union[BulkFilesRequest, TextImportRequest, MetadataOnlyCreateRequest],
    Field(discriminator="kind"),
]


class UploadSucceeded(BaseModel):
    """The transport created one or more items."""
    outcome: Literal["success"] = "success"
    created_ids: list[Identifier] = Field(..., description="Ids of the created items")


class UploadFailed(BaseModel):
    """The transport rejected the request."""
    outcome: Literal["failure"] = "failure"
    error: str = Field(..., description="Message shown to the user")


class UploadCancelled(BaseModel):
    """The request was abandoned by teardown."""
    outcome: Literal["cancelled"] = "cancelled"


UploadOutcome = Annotated[
    Union[UploadSucceeded, UploadFailed, UploadCancelled],
    Field(discriminator="outcome"),
]
