"""Bridge between cloud configuration surfaces and the upload path.

A surface is any callable accepting an ``on_import`` keyword. It collects
its own settings and calls ``on_import(import_config)`` once the user
confirms. The bridge forwards that configuration to the transport tagged
with the source identifier, closes the import popover and, once the
transport accepts the import, asks the host to show the activity view.
"""

import importlib
from functools import partial
from typing import Any, Callable, Optional

from content_import.cloud.registry import CloudSourceDescriptor, CloudSourceRegistry
from content_import.core import get_logger
from content_import.core.errors import ComponentLoadError, ProgrammerError
from content_import.events import Signal, SignalBus
from content_import.upload.task import UploadTask
from content_import.upload.transport import UploadTransport

logger = get_logger(__name__)


def load_component(component_path: str) -> Callable[..., Any]:
    """Resolve a component path to the callable it names.

    Accepts ``package.module:Attr`` or ``package.module.Attr``.

    Raises:
        ComponentLoadError: If the module or attribute cannot be found
    """
    module_name, sep, attr = component_path.partition(":")
    if not sep:
        module_name, _, attr = component_path.rpartition(".")
    if not module_name or not attr:
        raise ComponentLoadError(
            f"Malformed component path: {component_path}",
            component_path=component_path,
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ComponentLoadError(
            f"Cannot import {module_name}",
            component_path=component_path,
        ) from e

    if not hasattr(module, attr):
        raise ComponentLoadError(
            f"{attr} not found in {module_name}",
            component_path=component_path,
        )
    return getattr(module, attr)


class CloudImportBridge:
    """Lists cloud sources and wires their configuration surfaces."""

    def __init__(
        self,
        registry: CloudSourceRegistry,
        transport: UploadTransport,
        bus: SignalBus,
        teardown: Callable[[], None],
        loader: Callable[[str], Callable[..., Any]] = load_component,
    ):
        """Initialize the bridge.

        Args:
            registry: Registered cloud sources
            transport: Receives cloud imports
            bus: Receives cloudImported and showActivityDisplay signals
            teardown: Tears the owning popover down after an import starts
            loader: Resolves component paths to surface factories
        """
        self.registry = registry
        self.transport = transport
        self.bus = bus
        self._teardown = teardown
        self._loader = loader
        self._surfaces: list[Any] = []
        self._closed = False

    @property
    def has_sources(self) -> bool:
        return len(self.registry) > 0

    def list_sources(self) -> list[CloudSourceDescriptor]:
        return self.registry.sources()

    def select(self, identifier: str) -> Any:
        """Attach the configuration surface of a cloud source.

        Args:
            identifier: Identifier of a registered source

        Returns:
            The instantiated surface
        """
        if self._closed:
            raise ProgrammerError("Cloud import bridge is already torn down")

        descriptor = self.registry.get(identifier)
        if descriptor is None:
            raise ProgrammerError(f"Unknown cloud source: {identifier}")

        factory = self._loader(descriptor.component_path)
        surface = factory(on_import=partial(self._import, descriptor))
        self._surfaces.append(surface)

        logger.info(
            "cloud_surface_attached",
            identifier=descriptor.identifier,
            component_path=descriptor.component_path,
        )
        return surface

    def teardown(self) -> None:
        """Tear down every attached surface."""
        surfaces, self._surfaces = self._surfaces, []
        self._closed = True
        for surface in surfaces:
            surface_teardown = getattr(surface, "teardown", None)
            if callable(surface_teardown):
                surface_teardown()

    def _import(self, descriptor: CloudSourceDescriptor, import_config: Any) -> None:
        if self._closed:
            logger.warning("cloud_import_after_teardown", identifier=descriptor.identifier)
            return

        self.bus.publish(
            Signal.CLOUD_IMPORTED,
            {"identifier": descriptor.identifier, "importConfig": import_config},
        )
        task = self.transport.cloud_import(descriptor.identifier, import_config)
        task.add_done_callback(partial(self._on_import_settled, descriptor.identifier))
        logger.info("cloud_import_started", identifier=descriptor.identifier)

        self._teardown()

    def _on_import_settled(self, identifier: str, task: UploadTask) -> None:
        if task.cancelled():
            logger.info("cloud_import_cancelled", identifier=identifier)
            return

        error: Optional[BaseException] = task.exception()
        if error is not None:
            logger.error("cloud_import_failed", identifier=identifier, error=str(error))
            return

        self.bus.publish(Signal.SHOW_ACTIVITY_DISPLAY, {})
