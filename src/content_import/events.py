"""Signal bus connecting the import core to its host.

The core publishes outcome signals on an explicit bus instead of bubbling
events through a widget tree. Hosts subscribe per signal.
"""

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Optional

from content_import.core import get_logger

logger = get_logger(__name__)

SignalHandler = Callable[[dict[str, Any]], None]


class Signal(str, Enum):
    """Signals emitted by the import core."""

    FILE_IMPORT_SUCCESS = "fileImportSuccess"
    SELECT_OBJECTS = "selectObjects"
    SHOW_ACTIVITY_DISPLAY = "showActivityDisplay"
    CLOUD_IMPORTED = "cloudImported"


class InboundEvent(str, Enum):
    """Events the presentation layer forwards into a popover."""

    FILE_SELECTION_CHANGE = "fileSelectionChange"
    VISIBILITY_CHANGE = "visibilitychange"
    JUSTIFICATION_CHANGE = "justificationchange"
    CONCEPT_SELECTED = "conceptSelected"
    COLLAPSE_TOGGLE_CHANGE = "collapseToggleChange"
    IMPORT = "import"
    IMPORT_CLOUD = "importCloud"
    CLOUD_SOURCE_SELECTED = "cloudSourceSelected"
    CANCEL = "cancel"
    OUTSIDE_TAP = "outsideTap"


class SignalBus:
    """Publish/subscribe channel for import signals.

    Example:
        bus = SignalBus()
        bus.subscribe(Signal.SELECT_OBJECTS, lambda data: print(data["vertexIds"]))
        bus.publish(Signal.SELECT_OBJECTS, {"vertexIds": ["v1"]})
    """

    def __init__(self) -> None:
        self._subscribers: dict[Signal, list[SignalHandler]] = defaultdict(list)

    def subscribe(self, signal: Signal, handler: SignalHandler) -> None:
        """Register a handler for a signal."""
        self._subscribers[Signal(signal)].append(handler)

    def unsubscribe(self, signal: Signal, handler: SignalHandler) -> None:
        """Remove a previously registered handler."""
        handlers = self._subscribers.get(Signal(signal))
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, signal: Signal, data: Optional[dict[str, Any]] = None) -> None:
        """Deliver a signal to every subscriber in registration order.

        A failing handler is logged and does not stop delivery to the rest.
        """
        signal = Signal(signal)
        data = data if data is not None else {}
        logger.debug("signal_published", signal=signal.value)

        for handler in list(self._subscribers.get(signal, [])):
            try:
                handler(data)
            except Exception as e:
                logger.error(
                    "signal_handler_failed",
                    signal=signal.value,
                    handler=repr(handler),
                    error=str(e),
                    exc_info=True,
                )
