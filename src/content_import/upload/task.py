"""Handle on an in-flight upload.

An ``UploadTask`` wraps an asyncio future and adds two optional
capabilities: progress reporting and cancellation. Callers check
``supports_progress`` and ``supports_cancel`` before using either.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from content_import.core.errors import ProgrammerError

ProgressListener = Callable[[float], None]


class UploadTask:
    """Asynchronous upload with success, failure and cancellation outcomes."""

    def __init__(
        self,
        operation: Awaitable[Any],
        cancel: Optional[Callable[[], None]] = None,
        progress: bool = False,
    ):
        """Wrap an awaitable as an upload task.

        Args:
            operation: Coroutine or future resolving to the transport result
            cancel: Abort hook; presence makes the task cancellable
            progress: Whether the transport reports progress
        """
        self._future: asyncio.Future = asyncio.ensure_future(operation)
        self._cancel_hook = cancel
        self._progress_listeners: Optional[list[ProgressListener]] = [] if progress else None
        self._cancel_requested = False

    @property
    def supports_progress(self) -> bool:
        return self._progress_listeners is not None

    @property
    def supports_cancel(self) -> bool:
        return self._cancel_hook is not None

    def on_progress(self, listener: ProgressListener) -> None:
        if self._progress_listeners is None:
            raise ProgrammerError("Upload task does not report progress")
        self._progress_listeners.append(listener)

    def report_progress(self, fraction: float) -> None:
        """Called by the transport as bytes go out."""
        if self._progress_listeners is None or self._future.done():
            return
        for listener in list(self._progress_listeners):
            listener(fraction)

    def cancel(self) -> None:
        """Abort the upload. Safe to call repeatedly or after settlement."""
        if self._cancel_hook is None:
            raise ProgrammerError("Upload task cannot be cancelled")
        if self._cancel_requested or self._future.done():
            return
        self._cancel_requested = True
        self._cancel_hook()
        self._future.cancel()

    def add_done_callback(self, callback: Callable[["UploadTask"], None]) -> None:
        self._future.add_done_callback(lambda _: callback(self))

    def done(self) -> bool:
        return self._future.done()

    def cancelled(self) -> bool:
        return self._future.cancelled()

    def result(self) -> Any:
        return self._future.result()

    def exception(self) -> Optional[BaseException]:
        return self._future.exception()

    def __await__(self):
        return self._future.__await__()
