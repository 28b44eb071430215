"""Tests for import session state and submit eligibility.

- File selection and derived intake mode
- Collapsed/expanded metadata
- Validity rules for file, string and metadata-only imports
"""

import pytest

from content_import.core.errors import InvalidScopeError, ProgrammerError
from content_import.upload.models import (
    COLLAPSED,
    FileDescriptor,
    ImportMode,
    JustificationValue,
    LabelValue,
    MetadataField,
    StringPayload,
)
from content_import.upload.session import ImportSession

VALID_LABEL = LabelValue(value="public", valid=True)
INVALID_LABEL = LabelValue(value="a&", valid=False)
VALID_JUSTIFICATION = JustificationValue(text="Seen in field report", valid=True)


class TestSetFiles:
    """Tests for ImportSession.set_files."""

    def test_new_session_is_empty_and_collapsed(self):
        session = ImportSession()

        assert session.files == ()
        assert session.mode == ImportMode.EMPTY
        assert session.collapsed is True
        assert session.per_file_metadata == ()

    def test_single_file_mode(self, one_file):
        session = ImportSession(files=one_file)

        assert session.mode == ImportMode.SINGLE
        assert len(session.per_file_metadata) == 1
        assert session.collapsed is True

    def test_multiple_files_default_to_collapsed(self, two_files):
        session = ImportSession(files=two_files)

        assert session.mode == ImportMode.MULTIPLE
        assert session.collapsed is True
        assert len(session.per_file_metadata) == 2

    def test_accepts_file_dicts(self):
        session = ImportSession(files=[{"name": "a.txt", "size": 3}])

        assert isinstance(session.files[0], FileDescriptor)
        assert session.files[0].name == "a.txt"

    def test_rejects_negative_size(self):
        with pytest.raises(ValueError):
            ImportSession(files=[{"name": "a.txt", "size": -1}])

    def test_reselection_resets_per_file_metadata(self, two_files):
        session = ImportSession(files=two_files)
        session.toggle_collapsed(False)
        session.set_metadata(0, MetadataField.LABEL, VALID_LABEL)

        session.set_files(two_files + [FileDescriptor(name="c.txt", size=1)])

        assert len(session.per_file_metadata) == 3
        assert all(not m.label.valid for m in session.per_file_metadata)

    def test_shrinking_to_one_file_forces_collapsed(self, two_files):
        session = ImportSession(files=two_files)
        session.toggle_collapsed(False)
        assert session.collapsed is False

        session.set_files(two_files[:1])

        assert session.mode == ImportMode.SINGLE
        assert session.collapsed is True

    def test_total_size(self, two_files):
        session = ImportSession(files=two_files)

        assert session.total_size == 30

    def test_change_listener_notified(self, two_files):
        session = ImportSession()
        reasons = []
        session.on_change(lambda s, reason: reasons.append(reason))

        session.set_files(two_files)
        session.set_metadata(COLLAPSED, "label", VALID_LABEL)
        session.toggle_collapsed(False)

        assert reasons == ["files", "label", "collapsed"]


class TestSetMetadata:
    """Tests for ImportSession.set_metadata."""

    def test_collapsed_scope_writes_shared_metadata(self, one_file):
        session = ImportSession(files=one_file)

        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)
        session.set_metadata(COLLAPSED, MetadataField.CLASSIFICATION, "document")

        assert session.shared_metadata.label == VALID_LABEL
        assert session.shared_metadata.classification == "document"

    def test_index_scope_writes_per_file_metadata(self, two_files):
        session = ImportSession(files=two_files)

        session.set_metadata(1, "classification", "image")

        assert session.per_file_metadata[1].classification == "image"
        assert session.per_file_metadata[0].classification is None
        assert session.shared_metadata.classification is None

    def test_label_dict_is_accepted(self, one_file):
        session = ImportSession(files=one_file)

        session.set_metadata(COLLAPSED, "label", {"value": "x", "valid": True})

        assert session.shared_metadata.label.valid is True

    def test_out_of_range_index_fails_fast(self, two_files):
        session = ImportSession(files=two_files)

        with pytest.raises(InvalidScopeError) as exc_info:
            session.set_metadata(2, MetadataField.LABEL, VALID_LABEL)

        assert exc_info.value.file_count == 2

    def test_negative_index_fails_fast(self, two_files):
        session = ImportSession(files=two_files)

        with pytest.raises(InvalidScopeError):
            session.set_metadata(-1, MetadataField.LABEL, VALID_LABEL)

    def test_index_scope_without_files_fails_fast(self):
        session = ImportSession()

        with pytest.raises(InvalidScopeError):
            session.set_metadata(0, MetadataField.LABEL, VALID_LABEL)

    def test_unknown_scope_string_fails_fast(self, one_file):
        session = ImportSession(files=one_file)

        with pytest.raises(InvalidScopeError):
            session.set_metadata("shared", MetadataField.LABEL, VALID_LABEL)

    def test_unknown_field_fails_fast(self, one_file):
        session = ImportSession(files=one_file)

        with pytest.raises(ProgrammerError):
            session.set_metadata(COLLAPSED, "colour", "red")

    def test_wrong_value_type_fails_fast(self, one_file):
        session = ImportSession(files=one_file)

        with pytest.raises(ProgrammerError):
            session.set_metadata(COLLAPSED, MetadataField.LABEL, "public")

    def test_stored_label_is_a_copy(self, one_file):
        session = ImportSession(files=one_file)
        label = LabelValue(value="public", valid=True)

        session.set_metadata(COLLAPSED, MetadataField.LABEL, label)
        label.valid = False

        assert session.shared_metadata.label.valid is True


class TestToggleCollapsed:
    """Tests for ImportSession.toggle_collapsed."""

    def test_expand_and_collapse_multiple(self, two_files):
        session = ImportSession(files=two_files)

        session.toggle_collapsed(False)
        assert session.collapsed is False

        session.toggle_collapsed(True)
        assert session.collapsed is True

    @pytest.mark.parametrize("file_count", [0, 1])
    def test_toggle_ignored_without_multiple_files(self, file_count):
        files = [FileDescriptor(name=f"f{i}", size=1) for i in range(file_count)]
        session = ImportSession(files=files)

        session.toggle_collapsed(False)

        assert session.collapsed is True


class TestValidity:
    """Tests for ImportSession.is_valid."""

    def test_metadata_only_creation_scenario(self):
        session = ImportSession()
        session.set_files([])
        assert session.is_valid() is False

        session.set_metadata(COLLAPSED, MetadataField.CLASSIFICATION, "document")
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)
        assert session.is_valid() is False

        session.set_metadata(COLLAPSED, MetadataField.JUSTIFICATION, VALID_JUSTIFICATION)
        assert session.is_valid() is True

    def test_metadata_only_creation_requires_classification(self):
        session = ImportSession()
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)
        session.set_metadata(COLLAPSED, MetadataField.JUSTIFICATION, VALID_JUSTIFICATION)

        assert session.is_valid() is False
        assert session.requires_classification is True

    def test_string_import_needs_justification_but_not_classification(self):
        session = ImportSession(string_payload=StringPayload(content="hello"))
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)
        assert session.is_valid() is False

        session.set_metadata(COLLAPSED, MetadataField.JUSTIFICATION, VALID_JUSTIFICATION)

        assert session.requires_classification is False
        assert session.is_valid() is True

    def test_files_rejected_when_seeded_with_string_payload(self, one_file):
        with pytest.raises(ProgrammerError):
            ImportSession(files=one_file, string_payload=StringPayload(content="pasted"))

    def test_set_files_rejected_for_string_payload(self, one_file):
        session = ImportSession(string_payload=StringPayload(content="pasted"))

        with pytest.raises(ProgrammerError):
            session.set_files(one_file)

        assert session.files == ()
        assert session.mode == ImportMode.EMPTY

    def test_empty_selection_allowed_for_string_payload(self):
        session = ImportSession(string_payload=StringPayload(content="pasted"))

        session.set_files([])

        assert session.string_payload.content == "pasted"

    def test_single_file_needs_only_label(self, one_file):
        session = ImportSession(files=one_file)
        assert session.is_valid() is False

        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)

        assert session.requires_justification is False
        assert session.is_valid() is True

    def test_collapsed_multiple_ignores_per_file_classifications(self, two_files):
        session = ImportSession(files=two_files)
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)

        assert session.is_valid() is True

        session.set_metadata(0, MetadataField.CLASSIFICATION, "image")
        assert session.is_valid() is True

    def test_expanded_requires_every_label(self, two_files):
        session = ImportSession(files=two_files)
        session.toggle_collapsed(False)
        session.set_metadata(0, MetadataField.LABEL, VALID_LABEL)
        session.set_metadata(1, MetadataField.LABEL, INVALID_LABEL)
        assert session.is_valid() is False

        session.set_metadata(1, MetadataField.LABEL, VALID_LABEL)

        assert session.is_valid() is True

    def test_expanded_never_requires_justification(self, two_files):
        session = ImportSession(files=two_files)
        session.toggle_collapsed(False)
        session.set_metadata(0, MetadataField.LABEL, VALID_LABEL)
        session.set_metadata(1, MetadataField.LABEL, VALID_LABEL)

        assert all(not m.justification.valid for m in session.per_file_metadata)
        assert session.is_valid() is True

    def test_expanded_ignores_shared_label(self, two_files):
        session = ImportSession(files=two_files)
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)

        session.toggle_collapsed(False)

        assert session.is_valid() is False

    def test_is_valid_is_repeatable(self, one_file):
        session = ImportSession(files=one_file)
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)

        results = {session.is_valid() for _ in range(5)}

        assert results == {True}


class TestSnapshot:
    """Tests for ImportSession.snapshot."""

    def test_snapshot_is_detached(self, two_files):
        session = ImportSession(files=two_files)
        session.set_metadata(COLLAPSED, MetadataField.LABEL, VALID_LABEL)

        snapshot = session.snapshot()
        session.set_metadata(COLLAPSED, MetadataField.LABEL, INVALID_LABEL)

        assert snapshot.shared_metadata.label.valid is True
        assert snapshot.mode == ImportMode.MULTIPLE
        assert snapshot.files == session.files
