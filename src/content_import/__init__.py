"""Import files, pasted text or bare metadata into a content repository.

- Import sessions with shared or per-file label, justification and
  classification
- Upload lifecycle with progress, cancellation and error reporting
- Cloud ingestion sources bridged into the upload path
"""

from content_import.core import ImportConfig, configure_logging, get_logger
from content_import.events import InboundEvent, Signal, SignalBus
from content_import.upload import (
    COLLAPSED,
    FileDescriptor,
    ImportMode,
    ImportSession,
    StringPayload,
    UploadLifecycle,
    UploadState,
    UploadTask,
    UploadTransport,
)
from content_import.cloud import CloudImportBridge, CloudSourceRegistry
from content_import.popover import FileImportPopover
from content_import.view import ViewState, render_view

__version__ = "0.1.0"

__all__ = [
    "ImportConfig",
    "configure_logging",
    "get_logger",
    "InboundEvent",
    "Signal",
    "SignalBus",
    "COLLAPSED",
    "FileDescriptor",
    "ImportMode",
    "ImportSession",
    "StringPayload",
    "UploadLifecycle",
    "UploadState",
    "UploadTask",
    "UploadTransport",
    "CloudImportBridge",
    "CloudSourceRegistry",
    "FileImportPopover",
    "ViewState",
    "render_view",
]
