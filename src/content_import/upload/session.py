"""Import session state.

Owns the selected files, the optional pasted string, the collapsed/expanded
toggle and the metadata collected for the upload. All mutation goes through
this object; validity is recomputed from its state on demand.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Union

from content_import.core import get_logger
from content_import.core.errors import InvalidScopeError, ProgrammerError
from content_import.upload.models import (
    COLLAPSED,
    FileDescriptor,
    ImportMode,
    JustificationValue,
    LabelValue,
    MetadataField,
    MetadataSet,
    Scope,
    StringPayload,
)
from content_import.upload.validator import SessionValidator, ValidityReport

logger = get_logger(__name__)

SessionListener = Callable[["ImportSession", str], None]


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable copy of a session taken at submission time."""
    files: tuple[FileDescriptor, ...]
    string_payload: Optional[StringPayload]
    collapsed: bool
    shared_metadata: MetadataSet
    per_file_metadata: tuple[MetadataSet, ...]

    @property
    def mode(self) -> ImportMode:
        return ImportMode.for_count(len(self.files))


class ImportSession:
    """Files and metadata gathered by one import popover.

    Multiple files start in collapsed mode, where one shared metadata set
    applies to every file. Expanding gives each file its own set. With one
    file or none the session is always collapsed.
    """

    def __init__(
        self,
        files: Optional[Iterable[Union[FileDescriptor, dict]]] = None,
        string_payload: Optional[Union[StringPayload, dict]] = None,
        validator: Optional[SessionValidator] = None,
    ):
        """Initialize an import session.

        Args:
            files: Files to pre-seed the session with
            string_payload: Pasted content imported instead of files
            validator: Validator used for submit eligibility
        """
        if isinstance(string_payload, dict):
            string_payload = StringPayload.model_validate(string_payload)
        self.string_payload: Optional[StringPayload] = string_payload
        self.shared_metadata = MetadataSet()
        self._validator = validator or SessionValidator()
        self._listeners: list[SessionListener] = []
        self._files: tuple[FileDescriptor, ...] = ()
        self._per_file_metadata: list[MetadataSet] = []
        self._mode = ImportMode.EMPTY
        self._collapsed = True
        self.set_files(files or [])

    @property
    def files(self) -> tuple[FileDescriptor, ...]:
        return self._files

    @property
    def mode(self) -> ImportMode:
        return self._mode

    @property
    def collapsed(self) -> bool:
        return self._collapsed

    @property
    def per_file_metadata(self) -> tuple[MetadataSet, ...]:
        return tuple(self._per_file_metadata)

    @property
    def requires_justification(self) -> bool:
        """Without a file nothing backs the label, so it must be justified."""
        return not self._files

    @property
    def requires_classification(self) -> bool:
        return not self._files and self.string_payload is None

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self._files)

    def on_change(self, listener: SessionListener) -> None:
        """Register a listener called with ``(session, reason)`` after each mutation."""
        self._listeners.append(listener)

    def set_files(self, files: Iterable[Union[FileDescriptor, dict]]) -> None:
        """Replace the selected files.

        Per-file metadata is reset to fresh defaults sized to the new list
        and the session collapses unless several files are selected.

        Args:
            files: New file selection, possibly empty

        Raises:
            ProgrammerError: If files are selected for a session importing
                a string payload
        """
        selected = tuple(
            f if isinstance(f, FileDescriptor) else FileDescriptor.model_validate(f)
            for f in files
        )
        if selected and self.string_payload is not None:
            raise ProgrammerError(
                "A session importing a string payload cannot also import files",
                details={"file_count": len(selected)},
            )
        self._files = selected
        self._per_file_metadata = [MetadataSet() for _ in self._files]
        self._mode = ImportMode.for_count(len(self._files))
        if self._mode != ImportMode.MULTIPLE:
            self._collapsed = True

        logger.debug(
            "session_files_set",
            file_count=len(self._files),
            mode=self._mode.value,
            collapsed=self._collapsed,
        )
        self._notify("files")

    def set_metadata(
        self,
        scope: Scope,
        field: Union[MetadataField, str],
        value: Any,
    ) -> None:
        """Write one metadata field for the shared set or a single file.

        Args:
            scope: ``COLLAPSED`` or a zero-based file index
            field: Field to write
            value: ``LabelValue``, ``JustificationValue`` or classification id

        Raises:
            InvalidScopeError: If the index does not address a selected file
            ProgrammerError: If the field or value type is not recognised
        """
        try:
            field = MetadataField(field)
        except ValueError:
            raise ProgrammerError(f"Unknown metadata field: {field!r}") from None

        target = self._metadata_for(scope)

        if field == MetadataField.LABEL:
            target.label = self._coerce(value, LabelValue, field)
        elif field == MetadataField.JUSTIFICATION:
            target.justification = self._coerce(value, JustificationValue, field)
        else:
            if value is not None and not isinstance(value, str):
                raise ProgrammerError(
                    f"Classification must be an id string or None, got {type(value).__name__}"
                )
            target.classification = value

        self._notify(field.value)

    def toggle_collapsed(self, checked: bool) -> None:
        """Switch between shared and per-file metadata.

        Only meaningful with several files selected; otherwise the session
        stays collapsed.
        """
        if self._mode != ImportMode.MULTIPLE:
            logger.debug("collapse_toggle_ignored", mode=self._mode.value)
            return

        self._collapsed = bool(checked)
        self._notify("collapsed")

    def is_valid(self) -> bool:
        """Whether the session may be submitted. Has no side effects."""
        return self._validator.is_valid(self)

    def validity(self) -> ValidityReport:
        return self._validator.validate(self)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            files=self._files,
            string_payload=self.string_payload,
            collapsed=self._collapsed,
            shared_metadata=self.shared_metadata.model_copy(deep=True),
            per_file_metadata=tuple(
                m.model_copy(deep=True) for m in self._per_file_metadata
            ),
        )

    def _metadata_for(self, scope: Scope) -> MetadataSet:
        if scope == COLLAPSED:
            return self.shared_metadata
        if isinstance(scope, int) and not isinstance(scope, bool):
            if 0 <= scope < len(self._per_file_metadata):
                return self._per_file_metadata[scope]
        raise InvalidScopeError(
            f"No file at scope {scope!r}",
            scope=scope,
            file_count=len(self._files),
        )

    @staticmethod
    def _coerce(value: Any, model: type, field: MetadataField) -> Any:
        if isinstance(value, model):
            return value.model_copy()
        if isinstance(value, dict):
            return model.model_validate(value)
        raise ProgrammerError(
            f"Unexpected value for {field.value}: {type(value).__name__}"
        )

    def _notify(self, reason: str) -> None:
        for listener in list(self._listeners):
            listener(self, reason)
