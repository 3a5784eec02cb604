"""
Filesystem collaborators: the language tree and the source snapshot.
"""

from .documents import (
    clean_translations,
    find_documents,
    load_translations,
    read_document,
    read_documents,
    serialize_document,
    write_translations,
)
from .snapshot import SnapshotStore

__all__ = [
    "SnapshotStore",
    "clean_translations",
    "find_documents",
    "load_translations",
    "read_document",
    "read_documents",
    "serialize_document",
    "write_translations",
]
