"""Import session state and the upload lifecycle.

- Session state for files, pasted strings and per-item metadata
- Submit-eligibility validation
- Upload request construction, progress, cancellation and outcomes
"""

from content_import.upload.models import (
    COLLAPSED,
    Scope,
    ImportMode,
    MetadataField,
    IntakeKind,
    UploadState,
    FileDescriptor,
    StringPayload,
    LabelValue,
    JustificationValue,
    MetadataSet,
    BulkFilesRequest,
    TextImportRequest,
    MetadataOnlyCreateRequest,
    UploadRequest,
    UploadSucceeded,
    UploadFailed,
    UploadCancelled,
    UploadOutcome,
)
from content_import.upload.validator import (
    SessionValidator,
    ValidityReport,
    FieldValidationError,
)
from content_import.upload.session import ImportSession, SessionSnapshot
from content_import.upload.task import UploadTask
from content_import.upload.transport import UploadTransport, normalize_created_ids
from content_import.upload.lifecycle import (
    UploadLifecycle,
    FieldErrorDisplay,
    build_request,
)

__all__ = [
    # Models
    "COLLAPSED",
    "Scope",
    "ImportMode",
    "MetadataField",
    "IntakeKind",
    "UploadState",
    "FileDescriptor",
    "StringPayload",
    "LabelValue",
    "JustificationValue",
    "MetadataSet",
    "BulkFilesRequest",
    "TextImportRequest",
    "MetadataOnlyCreateRequest",
    "UploadRequest",
    "UploadSucceeded",
    "UploadFailed",
    "UploadCancelled",
    "UploadOutcome",
    # Validation
    "SessionValidator",
    "ValidityReport",
    "FieldValidationError",
    # Session
    "ImportSession",
    "SessionSnapshot",
    # Transport
    "UploadTask",
    "UploadTransport",
    "normalize_created_ids",
    # Lifecycle
    "UploadLifecycle",
    "FieldErrorDisplay",
    "build_request",
]
