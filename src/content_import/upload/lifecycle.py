"""Upload lifecycle for an import session.

- Builds the request variant matching the session's intake mode
- Keeps at most one request in flight
- Forwards progress, resolves to success, failure or cancellation
- Emits success and selection signals, then tears the session down
"""

import asyncio
from typing import Any, Callable, Optional, Protocol, Union

from content_import.core import get_logger
from content_import.core.config import ImportConfig
from content_import.core.errors import ContentImportError
from content_import.events import Signal, SignalBus
from content_import.upload.models import (
    BulkFilesRequest,
    Identifier,
    MetadataOnlyCreateRequest,
    TextImportRequest,
    UploadCancelled,
    UploadFailed,
    UploadState,
    UploadSucceeded,
)
from content_import.upload.session import ImportSession, SessionSnapshot
from content_import.upload.task import UploadTask
from content_import.upload.transport import (
    UploadTransport,
    dispatch,
    normalize_created_ids,
)

logger = get_logger(__name__)

Request = Union[BulkFilesRequest, TextImportRequest, MetadataOnlyCreateRequest]
Outcome = Union[UploadSucceeded, UploadFailed, UploadCancelled]


class FieldErrorDisplay(Protocol):
    """Shows transport errors next to the form fields."""

    def mark_field_errors(self, message: str) -> None:
        ...

    def clear(self) -> None:
        ...


def build_request(snapshot: SessionSnapshot) -> Request:
    """Select the request variant for a session snapshot.

    Args:
        snapshot: Session state at submission time

    Returns:
        Bulk file upload when files are selected, text import when only a
        string is present, metadata-only creation otherwise
    """
    shared = snapshot.shared_metadata

    if snapshot.files:
        if snapshot.collapsed:
            classifications = shared.classification
            labels = shared.label.value
        else:
            classifications = [m.classification or "" for m in snapshot.per_file_metadata]
            labels = [m.label.value for m in snapshot.per_file_metadata]
        return BulkFilesRequest(
            files=list(snapshot.files),
            classifications=classifications,
            labels=labels,
        )

    if snapshot.string_payload is not None:
        return TextImportRequest(
            content=snapshot.string_payload.content,
            mime_type=snapshot.string_payload.mime_type,
            classification=shared.classification,
            label=shared.label.value,
        )

    return MetadataOnlyCreateRequest(
        justification=shared.justification.model_copy(deep=True),
        classification=shared.classification,
        label=shared.label.value,
    )


class UploadLifecycle:
    """Drives one session's upload from submission to a terminal outcome.

    States move ``IDLE -> SUBMITTING -> SUCCEEDED | FAILED | CANCELLED``.
    A failed upload may be resubmitted; success and cancellation are final.
    """

    def __init__(
        self,
        transport: UploadTransport,
        bus: SignalBus,
        teardown: Callable[[], None],
        field_errors: Optional[FieldErrorDisplay] = None,
        position: Any = None,
        config: Optional[ImportConfig] = None,
    ):
        """Initialize the lifecycle.

        Args:
            transport: Executes upload requests
            bus: Receives success and selection signals
            teardown: Tears the owning session down after success
            field_errors: Displays transport failures
            position: Positioning hint forwarded with the success signal
            config: Import configuration
        """
        self.transport = transport
        self.bus = bus
        self.field_errors = field_errors
        self.position = position
        self.config = config or ImportConfig()
        self._teardown = teardown
        self._state = UploadState.IDLE
        self._task: Optional[UploadTask] = None
        self._request: Optional[Request] = None
        self._outcome: Optional[Outcome] = None
        self.progress: Optional[float] = None
        self._state_listeners: list[Callable[[UploadState], None]] = []
        self._progress_listeners: list[Callable[[float], None]] = []

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def request(self) -> Optional[Request]:
        return self._request

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    @property
    def in_flight(self) -> bool:
        return self._state == UploadState.SUBMITTING

    @property
    def submission_enabled(self) -> bool:
        return self._state in (UploadState.IDLE, UploadState.FAILED)

    def on_state_change(self, listener: Callable[[UploadState], None]) -> None:
        self._state_listeners.append(listener)

    def on_progress(self, listener: Callable[[float], None]) -> None:
        self._progress_listeners.append(listener)

    def submit(self, session: ImportSession) -> bool:
        """Submit the session's upload.

        Args:
            session: Session to upload

        Returns:
            True if a request was issued, False if the session is invalid
            or the lifecycle cannot accept another submission
        """
        if self._state == UploadState.SUBMITTING:
            logger.warning("submit_ignored_in_flight")
            return False
        if self._state.is_terminal:
            logger.warning("submit_ignored_terminal", state=self._state.value)
            return False
        if not session.is_valid():
            logger.info("submit_rejected_invalid_session", mode=session.mode.value)
            return False

        request = build_request(session.snapshot())
        self._request = request
        self._outcome = None
        self.progress = None
        if self.field_errors is not None:
            self.field_errors.clear()
        self._set_state(UploadState.SUBMITTING)

        logger.info(
            "upload_submitted",
            kind=request.kind.value,
            file_count=len(session.files),
            collapsed=session.collapsed,
        )

        try:
            task = dispatch(self.transport, request)
        except Exception as e:
            self._fail(e)
            return True

        self._task = task
        if task.supports_progress:
            task.on_progress(lambda fraction: self._on_progress(task, fraction))
        task.add_done_callback(self._on_settled)
        return True

    def cancel(self) -> None:
        """Abandon the request in flight. Called on session teardown.

        Does nothing when no request is outstanding.
        """
        if self._state != UploadState.SUBMITTING:
            return

        task = self._task
        self._task = None
        self._outcome = UploadCancelled()
        self._set_state(UploadState.CANCELLED)

        if task is not None and task.supports_cancel:
            task.cancel()
        logger.info(
            "upload_cancelled",
            cancel_supported=task is not None and task.supports_cancel,
        )

    def _on_progress(self, task: UploadTask, fraction: float) -> None:
        if task is not self._task or self._state != UploadState.SUBMITTING:
            return
        self.progress = min(1.0, max(0.0, float(fraction)))
        for listener in list(self._progress_listeners):
            listener(self.progress)

    def _on_settled(self, task: UploadTask) -> None:
        if task is not self._task or self._state != UploadState.SUBMITTING:
            logger.debug("stale_upload_result_ignored", state=self._state.value)
            return

        if task.cancelled():
            self._task = None
            self._outcome = UploadCancelled()
            self._set_state(UploadState.CANCELLED)
            logger.info("upload_cancelled_by_transport")
            return

        error = task.exception()
        if error is not None:
            self._fail(error)
            return

        try:
            created_ids = normalize_created_ids(task.result())
        except ValueError as e:
            self._fail(e)
            return
        self._succeed(created_ids)

    def _succeed(self, created_ids: list[Identifier]) -> None:
        self._task = None
        self._outcome = UploadSucceeded(created_ids=created_ids)
        self._set_state(UploadState.SUCCEEDED)
        logger.info("upload_succeeded", created_count=len(created_ids))

        self.bus.publish(
            Signal.FILE_IMPORT_SUCCESS,
            {"vertexIds": list(created_ids), "position": self.position},
        )
        self.bus.publish(Signal.SELECT_OBJECTS, {"vertexIds": list(created_ids)})

        # Listeners of the signals above must still see a live session.
        asyncio.get_running_loop().call_soon(self._teardown)

    def _fail(self, error: BaseException) -> None:
        message = error.message if isinstance(error, ContentImportError) else str(error)
        message = message or self.config.unknown_error_message

        self._task = None
        self._outcome = UploadFailed(error=message)
        self._set_state(UploadState.FAILED)
        logger.warning(
            "upload_failed",
            error=message,
            error_type=type(error).__name__,
        )

        if self.field_errors is not None:
            self.field_errors.mark_field_errors(message)

    def _set_state(self, state: UploadState) -> None:
        self._state = state
        for listener in list(self._state_listeners):
            listener(state)
