"""Core utilities for content import."""

from content_import.core.logging import get_logger, configure_logging, configure_logging_from
from content_import.core.errors import (
    ContentImportError,
    TransportError,
    ProgrammerError,
    InvalidScopeError,
    RegistrationError,
    ComponentLoadError,
)
from content_import.core.config import ImportConfig

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "configure_logging_from",
    # Errors
    "ContentImportError",
    "TransportError",
    "ProgrammerError",
    "InvalidScopeError",
    "RegistrationError",
    "ComponentLoadError",
    # Config
    "ImportConfig",
]
