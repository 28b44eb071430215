"""Runtime configuration for the import surface."""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_UNKNOWN_ERROR = "Unknown Error"
DEFAULT_CLOUD_EXTENSION_POINT = "org.visallo.ingest.cloud"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ImportConfig:
    """Configuration for an import popover.

    Values default from the environment so a host application can tune the
    surface without code changes.
    """
    log_level: str = field(
        default_factory=lambda: os.environ.get("CONTENT_IMPORT_LOG_LEVEL", "INFO")
    )
    log_json: bool = field(
        default_factory=lambda: _env_flag("CONTENT_IMPORT_LOG_JSON", False)
    )
    log_file: Optional[str] = field(
        default_factory=lambda: os.environ.get("CONTENT_IMPORT_LOG_FILE") or None
    )
    unknown_error_message: str = field(
        default_factory=lambda: os.environ.get(
            "CONTENT_IMPORT_UNKNOWN_ERROR", DEFAULT_UNKNOWN_ERROR
        )
    )
    cloud_extension_point: str = field(
        default_factory=lambda: os.environ.get(
            "CONTENT_IMPORT_CLOUD_EXTENSION_POINT", DEFAULT_CLOUD_EXTENSION_POINT
        )
    )

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if not self.unknown_error_message:
            self.unknown_error_message = DEFAULT_UNKNOWN_ERROR
