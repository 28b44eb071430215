"""Registry of cloud ingestion sources.

Plug-ins register a descriptor naming the source and the configuration
surface that collects its settings. Descriptors are validated when they are
registered, never when they are used.
"""

from typing import Any, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from content_import.core import get_logger
from content_import.core.config import DEFAULT_CLOUD_EXTENSION_POINT
from content_import.core.errors import RegistrationError

logger = get_logger(__name__)


class CloudSourceDescriptor(BaseModel):
    """A cloud source available for import."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    identifier: StrictStr = Field(..., description="Unique identifier of the cloud source")
    component_path: StrictStr = Field(
        ...,
        alias="componentPath",
        description="Import path of the configuration surface",
    )

    @property
    def title_key(self) -> str:
        """Message key for the user-visible title of the source."""
        return f"{self.identifier}.title"


class CloudSourceRegistry:
    """Ordered collection of registered cloud sources."""

    description = "Specify cloud destinations for ingestion"

    def __init__(self, extension_point: Optional[str] = None):
        self.extension_point = extension_point or DEFAULT_CLOUD_EXTENSION_POINT
        self._sources: list[CloudSourceDescriptor] = []

    def register(
        self,
        entry: Union[CloudSourceDescriptor, Mapping[str, Any]],
    ) -> CloudSourceDescriptor:
        """Register a cloud source.

        Args:
            entry: Descriptor, or mapping with string ``identifier`` and
                ``componentPath`` values

        Returns:
            The validated descriptor

        Raises:
            RegistrationError: If the entry is malformed or the identifier
                is already registered
        """
        if isinstance(entry, CloudSourceDescriptor):
            descriptor = entry
        elif isinstance(entry, Mapping):
            try:
                descriptor = CloudSourceDescriptor.model_validate(dict(entry))
            except ValidationError as e:
                logger.warning(
                    "cloud_source_rejected",
                    extension_point=self.extension_point,
                    error_count=e.error_count(),
                )
                raise RegistrationError(
                    "Cloud source needs string identifier and componentPath",
                    entry=entry,
                ) from e
        else:
            raise RegistrationError(
                f"Cloud source must be a mapping, got {type(entry).__name__}",
                entry=entry,
            )

        if self.get(descriptor.identifier) is not None:
            raise RegistrationError(
                f"Cloud source already registered: {descriptor.identifier}",
                entry=entry,
            )

        self._sources.append(descriptor)
        logger.info(
            "cloud_source_registered",
            extension_point=self.extension_point,
            identifier=descriptor.identifier,
        )
        return descriptor

    def get(self, identifier: str) -> Optional[CloudSourceDescriptor]:
        for descriptor in self._sources:
            if descriptor.identifier == identifier:
                return descriptor
        return None

    def sources(self) -> list[CloudSourceDescriptor]:
        return list(self._sources)

    def __iter__(self) -> Iterator[CloudSourceDescriptor]:
        return iter(list(self._sources))

    def __len__(self) -> int:
        return len(self._sources)
