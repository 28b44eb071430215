"""Cloud ingestion sources and their bridge into the upload path."""

from content_import.cloud.registry import CloudSourceDescriptor, CloudSourceRegistry
from content_import.cloud.bridge import CloudImportBridge, load_component

__all__ = [
    "CloudSourceDescriptor",
    "CloudSourceRegistry",
    "CloudImportBridge",
    "load_component",
]
