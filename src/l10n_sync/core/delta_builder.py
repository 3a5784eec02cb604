"""
Assembly of the minimal documents that need translation.
"""

from __future__ import annotations

import copy
import logging

from .flattener import flatten, get_nested_value, set_nested_value
from .types import DetectionResult, Document, DocumentTree

logger = logging.getLogger(__name__)


def build_delta(detection: DetectionResult, current_tree: DocumentTree) -> DocumentTree:
    """
    Build the sparse documents to send to the translation provider.

    Wholly new documents are included complete. Other documents carry only
    their new and modified leaves, with values read from ``current_tree``.
    Deleted paths are never included, and documents without new or modified
    leaves are omitted.

    Args:
        detection: Change detection result for this run
        current_tree: Current source tree supplying leaf values

    Returns:
        Mapping of document name to (sparse) document
    """
    delta: DocumentTree = {}

    for name, changes in detection.change_sets.items():
        current = current_tree.get(name)
        if current is None:
            continue

        if changes.is_new_document:
            if changes.new_keys:
                delta[name] = copy.deepcopy(current)
            continue

        if not changes.needs_translation:
            continue

        sparse: Document = {}
        for path in [key.path for key in changes.new_keys] + [
            key.path for key in changes.modified_keys
        ]:
            set_nested_value(sparse, path, copy.deepcopy(get_nested_value(current, path)))
        delta[name] = sparse

    for name, document in delta.items():
        logger.info(f"Delta for {name}: {len(flatten(document))} keys")

    return delta
