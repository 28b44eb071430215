"""File import popover.

Owns one import session together with its upload lifecycle and cloud
bridge, and routes the events forwarded by the presentation layer into
session mutations. Rendering lives in ``content_import.view``.
"""

from typing import Any, Callable, Iterable, Optional, Union

from content_import.cloud import CloudImportBridge, CloudSourceRegistry, load_component
from content_import.core import get_logger
from content_import.core.config import ImportConfig
from content_import.events import InboundEvent, SignalBus
from content_import.upload.lifecycle import FieldErrorDisplay, UploadLifecycle
from content_import.upload.models import (
    COLLAPSED,
    FileDescriptor,
    JustificationValue,
    LabelValue,
    MetadataField,
    StringPayload,
)
from content_import.upload.session import ImportSession
from content_import.upload.transport import UploadTransport

logger = get_logger(__name__)


class FieldErrors:
    """In-memory field error display."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def mark_field_errors(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()


class FileImportPopover:
    """One import surface: session, upload lifecycle and cloud sources.

    Example:
        popover = FileImportPopover(transport, files=[{"name": "a.txt", "size": 3}])
        popover.handle("visibilitychange", {"scope": "collapsed", "value": "", "valid": True})
        popover.handle("import")
    """

    def __init__(
        self,
        transport: UploadTransport,
        bus: Optional[SignalBus] = None,
        registry: Optional[CloudSourceRegistry] = None,
        files: Optional[Iterable[Union[FileDescriptor, dict]]] = None,
        string_payload: Optional[Union[StringPayload, dict]] = None,
        field_errors: Optional[FieldErrorDisplay] = None,
        position: Any = None,
        config: Optional[ImportConfig] = None,
        loader: Callable[[str], Callable[..., Any]] = load_component,
    ):
        """Open an import popover.

        Args:
            transport: Executes uploads and cloud imports
            bus: Signal bus shared with the host
            registry: Registered cloud sources
            files: Files to pre-seed the session with
            string_payload: Pasted content to import instead of files
            field_errors: Display for transport errors
            position: Positioning hint forwarded on success
            config: Import configuration
            loader: Resolves cloud component paths
        """
        self.config = config or ImportConfig()
        self.bus = bus or SignalBus()
        self.field_errors = field_errors or FieldErrors()
        self.session = ImportSession(files=files, string_payload=string_payload)
        self.lifecycle = UploadLifecycle(
            transport,
            self.bus,
            teardown=self.teardown,
            field_errors=self.field_errors,
            position=position,
            config=self.config,
        )
        self.bridge = CloudImportBridge(
            registry or CloudSourceRegistry(self.config.cloud_extension_point),
            transport,
            self.bus,
            teardown=self.teardown,
            loader=loader,
        )
        self.showing_cloud_sources = False
        self._torn_down = False
        self._handlers: dict[InboundEvent, Callable[[dict], Any]] = {
            InboundEvent.FILE_SELECTION_CHANGE: self._on_file_selection,
            InboundEvent.VISIBILITY_CHANGE: self._on_visibility_change,
            InboundEvent.JUSTIFICATION_CHANGE: self._on_justification_change,
            InboundEvent.CONCEPT_SELECTED: self._on_concept_selected,
            InboundEvent.COLLAPSE_TOGGLE_CHANGE: self._on_collapse_toggle,
            InboundEvent.IMPORT: self._on_import,
            InboundEvent.IMPORT_CLOUD: self._on_import_cloud,
            InboundEvent.CLOUD_SOURCE_SELECTED: self._on_cloud_source_selected,
            InboundEvent.CANCEL: self._on_cancel,
            InboundEvent.OUTSIDE_TAP: self._on_outside_tap,
        }

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    @property
    def teardown_on_tap(self) -> bool:
        """Whether a tap outside the popover closes it."""
        return not self._torn_down and not self.lifecycle.in_flight

    def handle(self, event: Union[InboundEvent, str], data: Optional[dict] = None) -> Any:
        """Route an event from the presentation layer.

        Args:
            event: Event name
            data: Event payload

        Returns:
            Whatever the handler returns; ``import`` returns whether a
            request was issued
        """
        event = InboundEvent(event)
        if self._torn_down:
            logger.debug("event_after_teardown_ignored", event_name=event.value)
            return None
        return self._handlers[event](data or {})

    def teardown(self) -> None:
        """Close the popover. Cancels an upload still in flight."""
        if self._torn_down:
            return
        self._torn_down = True
        self.bridge.teardown()
        self.lifecycle.cancel()
        logger.info("popover_torn_down", upload_state=self.lifecycle.state.value)

    def _on_file_selection(self, data: dict) -> None:
        files = data.get("files") or []
        if not files:
            return
        if self.session.string_payload is not None:
            logger.debug("file_selection_ignored_for_string_payload", file_count=len(files))
            return
        self.session.set_files(files)

    def _on_visibility_change(self, data: dict) -> None:
        self.session.set_metadata(
            data.get("scope", COLLAPSED),
            MetadataField.LABEL,
            LabelValue(value=data.get("value"), valid=bool(data.get("valid"))),
        )

    def _on_justification_change(self, data: dict) -> None:
        self.session.set_metadata(
            data.get("scope", COLLAPSED),
            MetadataField.JUSTIFICATION,
            JustificationValue(
                text=data.get("text"),
                source_info=data.get("sourceInfo"),
                valid=bool(data.get("valid")),
            ),
        )

    def _on_concept_selected(self, data: dict) -> None:
        concept = data.get("concept")
        if isinstance(concept, dict):
            concept = concept.get("id")
        self.session.set_metadata(
            data.get("scope", COLLAPSED),
            MetadataField.CLASSIFICATION,
            concept or None,
        )

    def _on_collapse_toggle(self, data: dict) -> None:
        self.field_errors.clear()
        self.session.toggle_collapsed(bool(data.get("checked")))

    def _on_import(self, data: dict) -> bool:
        return self.lifecycle.submit(self.session)

    def _on_import_cloud(self, data: dict) -> None:
        self.showing_cloud_sources = True

    def _on_cloud_source_selected(self, data: dict) -> Any:
        return self.bridge.select(data.get("identifier"))

    def _on_cancel(self, data: dict) -> None:
        self.teardown()

    def _on_outside_tap(self, data: dict) -> None:
        if self.teardown_on_tap:
            self.teardown()
