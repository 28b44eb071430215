"""
Hypothesis strategies for import session models.
"""

from hypothesis import strategies as st
from hypothesis.strategies import composite

from content_import.upload.models import (
    FileDescriptor,
    JustificationValue,
    LabelValue,
    MetadataSet,
)

name_strategy = st.text(
    min_size=1,
    max_size=40,
    alphabet=st.characters(whitelist_categories=('L', 'N')),
)

classification_strategy = st.one_of(
    st.none(),
    st.sampled_from(['document', 'image', 'person', 'location', 'organization']),
)


@composite
def file_descriptor_strategy(draw):
    """Generate a FileDescriptor."""
    return FileDescriptor(
        name=draw(name_strategy),
        size=draw(st.integers(min_value=0, max_value=10 * 1024 * 1024)),
        payload=None,
    )


def file_list_strategy(min_files: int = 0, max_files: int = 8):
    """Generate a list of FileDescriptors."""
    return st.lists(file_descriptor_strategy(), min_size=min_files, max_size=max_files)


@composite
def label_strategy(draw, valid: bool = None):
    """
    Generate a LabelValue.

    Args:
        valid: Force the validity flag. If None, randomly decide.
    """
    is_valid = valid if valid is not None else draw(st.booleans())
    return LabelValue(
        value=draw(st.sampled_from(['', 'public', 'secret', 'a&b'])),
        valid=is_valid,
    )


@composite
def justification_strategy(draw, valid: bool = None):
    is_valid = valid if valid is not None else draw(st.booleans())
    return JustificationValue(
        text=draw(st.one_of(st.none(), name_strategy)),
        valid=is_valid,
    )


@composite
def metadata_set_strategy(draw):
    """Generate a MetadataSet with random validity."""
    return MetadataSet(
        label=draw(label_strategy()),
        justification=draw(justification_strategy()),
        classification=draw(classification_strategy),
    )
