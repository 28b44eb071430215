"""Exception classes for content import.

Validation problems are never raised; they are reported as flags and
markers by the session validator. Only transport failures and programming
mistakes travel as exceptions.
"""

from typing import Any, Optional


class ContentImportError(Exception):
    """Base exception for all content import errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class TransportError(ContentImportError):
    """The upload transport rejected a request.

    The message may be empty; callers fall back to a generic message.
    """

    def __init__(
        self,
        message: str = "",
        status_code: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="TRANSPORT", **kwargs)
        self.status_code = status_code
        self.details.update({"status_code": status_code})


class ProgrammerError(ContentImportError):
    """Misuse of the import API. Not recoverable by the user."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "PROGRAMMER")
        super().__init__(message, **kwargs)


class InvalidScopeError(ProgrammerError):
    """A metadata mutation was addressed to a file index that does not exist."""

    def __init__(
        self,
        message: str,
        scope: Any = None,
        file_count: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="INVALID_SCOPE", **kwargs)
        self.scope = scope
        self.file_count = file_count
        self.details.update({
            "scope": scope,
            "file_count": file_count,
        })


class RegistrationError(ContentImportError):
    """A cloud source registration did not satisfy the registry contract."""

    def __init__(
        self,
        message: str,
        entry: Any = None,
        **kwargs,
    ):
        super().__init__(message, error_code="REGISTRATION", **kwargs)
        self.entry = entry
        self.details.update({"entry": repr(entry)})


class ComponentLoadError(ContentImportError):
    """A configuration surface could not be resolved from its component path."""

    def __init__(
        self,
        message: str,
        component_path: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="COMPONENT_LOAD", **kwargs)
        self.component_path = component_path
        self.details.update({"component_path": component_path})
