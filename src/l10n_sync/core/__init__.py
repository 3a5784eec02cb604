"""
Incremental diff/merge engine.

Flattening, change detection, delta building and merging over nested
JSON documents. Nothing in this package performs I/O.
"""

from .change_detector import detect, detect_changes, values_equal
from .delta_builder import build_delta
from .flattener import (
    delete_nested_value,
    flatten,
    get_nested_value,
    set_nested_value,
    unflatten,
)
from .merger import deep_merge, merge
from .types import (
    ChangeSet,
    DetectionResult,
    Document,
    DocumentTree,
    FlatMap,
    ModifiedKey,
    NewKey,
    TranslatedTree,
)

__all__ = [
    # Types
    "ChangeSet",
    "DetectionResult",
    "Document",
    "DocumentTree",
    "FlatMap",
    "ModifiedKey",
    "NewKey",
    "TranslatedTree",
    # Flattener
    "flatten",
    "unflatten",
    "set_nested_value",
    "get_nested_value",
    "delete_nested_value",
    # Detection and delta
    "detect",
    "detect_changes",
    "values_equal",
    "build_delta",
    # Merge
    "deep_merge",
    "merge",
]
