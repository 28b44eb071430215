"""
Hypothesis strategies for property-based testing of import sessions.
"""

from tests.strategies.session_strategies import (
    file_descriptor_strategy,
    file_list_strategy,
    label_strategy,
    justification_strategy,
    classification_strategy,
    metadata_set_strategy,
)

__all__ = [
    "file_descriptor_strategy",
    "file_list_strategy",
    "label_strategy",
    "justification_strategy",
    "classification_strategy",
    "metadata_set_strategy",
]
