"""Render state for the file import popover.

Produces message keys and flags only; translation, byte formatting and
layout belong to the host.
"""

from typing import Optional

from pydantic import BaseModel, Field

from content_import.popover import FileImportPopover
from content_import.upload.models import ImportMode, Scope, UploadState

TITLE_KEY = "popovers.file_import.title"
NOFILE_TITLE_KEY = "popovers.file_import.nofile.title"
FILES_ONE_KEY = "popovers.file_import.files.one"
FILES_SOME_KEY = "popovers.file_import.files.some"
BUTTON_IMPORT_KEY = "popovers.file_import.button.import"
BUTTON_NOFILE_IMPORT_KEY = "popovers.file_import.button.nofile.import"
IMPORTING_KEY = "popovers.file_import.importing"
CREATING_KEY = "popovers.file_import.creating"
CONCEPT_PLACEHOLDER_KEY = "popovers.file_import.concept.placeholder"
CONCEPT_NOFILE_PLACEHOLDER_KEY = "popovers.file_import.concept.nofile.placeholder"


class CloudSourceView(BaseModel):
    identifier: str
    title_key: str


class ViewState(BaseModel):
    """Everything the presentation layer needs to draw the popover."""
    title_key: str
    title_args: list = Field(default_factory=list)
    summary_name: Optional[str] = Field(None, description="Name shown on the shared editor")
    total_size: int = Field(0, description="Combined size of the selected files in bytes")
    import_button_key: str
    progress_percent: Optional[int] = Field(None, description="Upload progress while submitting")
    submit_disabled: bool
    show_cancel_button: bool = False
    show_file_select: bool = False
    show_collapse_toggle: bool = False
    show_shared_editor: bool = True
    show_individual_editors: bool = False
    show_justification: bool = False
    classification_placeholder_key: str
    invalid_scopes: list[Scope] = Field(default_factory=list)
    field_errors: list[str] = Field(default_factory=list)
    cloud_sources: list[CloudSourceView] = Field(default_factory=list)
    showing_cloud_sources: bool = False


def title_for(popover: FileImportPopover) -> tuple[str, list]:
    """Title key and arguments for the popover header."""
    session = popover.session
    count = len(session.files)
    if not count:
        return NOFILE_TITLE_KEY, []
    string_type = session.string_payload is not None
    plural_key = FILES_ONE_KEY if count == 1 or string_type else FILES_SOME_KEY
    return TITLE_KEY, [plural_key, count]


def button_key_for(popover: FileImportPopover) -> str:
    has_files = bool(popover.session.files)
    if popover.lifecycle.state == UploadState.SUBMITTING:
        return IMPORTING_KEY if has_files else CREATING_KEY
    return BUTTON_IMPORT_KEY if has_files else BUTTON_NOFILE_IMPORT_KEY


def render_view(popover: FileImportPopover) -> ViewState:
    """Compute the view state of a popover."""
    session = popover.session
    lifecycle = popover.lifecycle
    report = session.validity()
    title_key, title_args = title_for(popover)

    summary_name = None
    if session.mode == ImportMode.SINGLE:
        summary_name = session.files[0].name
    elif session.mode == ImportMode.EMPTY and session.string_payload is not None:
        summary_name = session.string_payload.type_name

    progress_percent = None
    if lifecycle.in_flight and lifecycle.progress is not None:
        progress_percent = round(lifecycle.progress * 100)

    field_errors = getattr(popover.field_errors, "messages", [])

    return ViewState(
        title_key=title_key,
        title_args=title_args,
        summary_name=summary_name,
        total_size=session.total_size,
        import_button_key=button_key_for(popover),
        progress_percent=progress_percent,
        submit_disabled=not (report.valid and lifecycle.submission_enabled),
        show_cancel_button=lifecycle.in_flight,
        show_file_select=session.mode == ImportMode.EMPTY and session.string_payload is None,
        show_collapse_toggle=session.mode == ImportMode.MULTIPLE,
        show_shared_editor=session.collapsed,
        show_individual_editors=not session.collapsed,
        show_justification=session.requires_justification,
        classification_placeholder_key=(
            CONCEPT_PLACEHOLDER_KEY if session.files else CONCEPT_NOFILE_PLACEHOLDER_KEY
        ),
        invalid_scopes=report.invalid_scopes,
        field_errors=list(field_errors),
        cloud_sources=[
            CloudSourceView(identifier=d.identifier, title_key=d.title_key)
            for d in popover.bridge.list_sources()
        ],
        showing_cloud_sources=popover.showing_cloud_sources,
    )
