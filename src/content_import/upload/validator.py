"""Submit-eligibility validation for import sessions.

- Collapsed mode: the shared label must validate, and without files the
  shared justification must validate too
- Expanded mode: every per-file label must validate; per-file
  justifications are never required
- Metadata-only creation additionally requires a classification

Validation never raises. Results are flags plus per-scope markers that the
presentation layer shows as invalid inputs.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from content_import.upload.models import (
    COLLAPSED,
    MetadataField,
    MetadataSet,
    Scope,
    StringPayload,
)


@dataclass
class FieldValidationError:
    """A field that currently blocks submission."""
    scope: Scope
    field_name: MetadataField
    error_message: str


@dataclass
class ValidityReport:
    """Outcome of validating a session.

    ``metadata_valid`` is the label/justification check alone; ``valid``
    also accounts for the mandatory classification of metadata-only
    creation.
    """
    valid: bool
    metadata_valid: bool
    invalid_scopes: list[Scope] = field(default_factory=list)
    field_errors: list[FieldValidationError] = field(default_factory=list)


class SessionValidator:
    """Computes whether a session may be submitted.

    Works on anything exposing ``files``, ``string_payload``, ``collapsed``,
    ``shared_metadata`` and ``per_file_metadata``: a live session or a
    snapshot of one.
    """

    def is_valid(self, session: Any) -> bool:
        return self.validate(session).valid

    def validate(self, session: Any) -> ValidityReport:
        files: Sequence = session.files
        string_payload: Optional[StringPayload] = session.string_payload
        shared: MetadataSet = session.shared_metadata

        if session.collapsed:
            report = self._validate_collapsed(shared, has_files=len(files) > 0)
        else:
            report = self._validate_expanded(session.per_file_metadata)

        # Metadata-only creation must also name what is being created.
        if not files and string_payload is None and shared.classification is None:
            report.valid = False
            report.field_errors.append(
                FieldValidationError(
                    scope=COLLAPSED,
                    field_name=MetadataField.CLASSIFICATION,
                    error_message="A classification is required when no file is attached.",
                )
            )

        return report

    def _validate_collapsed(self, shared: MetadataSet, has_files: bool) -> ValidityReport:
        errors = []
        if not shared.label.valid:
            errors.append(
                FieldValidationError(
                    scope=COLLAPSED,
                    field_name=MetadataField.LABEL,
                    error_message="Label is invalid.",
                )
            )
        if not has_files and not shared.justification.valid:
            errors.append(
                FieldValidationError(
                    scope=COLLAPSED,
                    field_name=MetadataField.JUSTIFICATION,
                    error_message="Justification is required when no file is attached.",
                )
            )

        valid = shared.is_valid(require_justification=not has_files)
        return ValidityReport(
            valid=valid,
            metadata_valid=valid,
            invalid_scopes=[] if valid else [COLLAPSED],
            field_errors=errors,
        )

    def _validate_expanded(self, per_file: Sequence[MetadataSet]) -> ValidityReport:
        invalid = [index for index, metadata in enumerate(per_file) if not metadata.label.valid]
        errors = [
            FieldValidationError(
                scope=index,
                field_name=MetadataField.LABEL,
                error_message="Label is invalid.",
            )
            for index in invalid
        ]
        return ValidityReport(
            valid=not invalid,
            metadata_valid=not invalid,
            invalid_scopes=list(invalid),
            field_errors=errors,
        )
