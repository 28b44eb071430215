"""Contract for the transport that executes upload requests.

The import core never talks to the network itself. A host supplies an
object implementing ``UploadTransport`` and returns ``UploadTask`` handles.
A task resolves with a mapping carrying either ``id`` or ``vertexIds`` and
raises ``TransportError`` (or any other exception) on failure.
"""

from typing import Any, Mapping, Protocol, Union, runtime_checkable

from content_import.upload.models import (
    BulkFilesRequest,
    Identifier,
    IntakeKind,
    MetadataOnlyCreateRequest,
    TextImportRequest,
)
from content_import.upload.task import UploadTask


@runtime_checkable
class UploadTransport(Protocol):
    """Executes uploads on behalf of the import core."""

    def upload(
        self,
        kind: IntakeKind,
        classification: Any,
        label: Any,
        payload: Any,
    ) -> UploadTask:
        """Start an upload.

        Args:
            kind: Intake discriminator
            classification: Shared classification id or per-file list
            label: Shared label value or per-file list
            payload: Files, string payload or justification
        """
        ...

    def cloud_import(self, identifier: str, import_config: Any) -> UploadTask:
        """Start an import from a registered cloud source."""
        ...


def dispatch(
    transport: UploadTransport,
    request: Union[BulkFilesRequest, TextImportRequest, MetadataOnlyCreateRequest],
) -> UploadTask:
    """Hand a request to the transport using its positional contract."""
    return transport.upload(
        request.kind,
        request.classification,
        request.label,
        request.payload,
    )


def normalize_created_ids(result: Any) -> list[Identifier]:
    """Reduce a transport result to the list of created ids.

    A result listing ``vertexIds`` is taken as is; a single ``id`` becomes
    a one-element list.
    """
    if isinstance(result, Mapping):
        vertex_ids = result.get("vertexIds")
        if isinstance(vertex_ids, (list, tuple)):
            return list(vertex_ids)
        if "id" in result:
            return [result["id"]]
    raise ValueError(f"Transport result carries no created ids: {result!r}")
