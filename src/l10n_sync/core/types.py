"""
Core types and data classes for the diff/merge engine.

Documents are plain JSON-compatible dictionaries. Change records are built
fresh on every run and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, TypeAlias

Document: TypeAlias = dict[str, object]
FlatMap: TypeAlias = dict[str, object]
DocumentTree: TypeAlias = dict[str, Document]  # document name -> document
TranslatedTree: TypeAlias = dict[str, DocumentTree]  # language -> documents

PATH_SEPARATOR = "."


class NewKey(NamedTuple):
    """A leaf path that did not exist in the previous snapshot."""

    path: str
    value: object


class ModifiedKey(NamedTuple):
    """A leaf path whose value changed since the previous snapshot."""

    path: str
    old_value: object
    new_value: object


@dataclass
class ChangeSet:
    """Classification of one document's leaf paths against the snapshot."""

    document: str
    new_keys: list[NewKey] = field(default_factory=list)
    modified_keys: list[ModifiedKey] = field(default_factory=list)
    deleted_keys: list[str] = field(default_factory=list)
    is_new_document: bool = False

    @property
    def has_changes(self) -> bool:
        """Whether the document produced any new, modified or deleted entry."""
        return bool(self.new_keys or self.modified_keys or self.deleted_keys)

    @property
    def needs_translation(self) -> bool:
        """Whether the document contributes leaves to the translation delta."""
        return bool(self.new_keys or self.modified_keys)


@dataclass
class DetectionResult:
    """Run-level outcome of comparing the snapshot with the current tree."""

    change_sets: dict[str, ChangeSet] = field(default_factory=dict)
    removed_documents: list[str] = field(default_factory=list)

    @property
    def new_documents(self) -> list[str]:
        return [
            name for name, changes in self.change_sets.items() if changes.is_new_document
        ]

    @property
    def modified_documents(self) -> list[str]:
        return [
            name
            for name, changes in self.change_sets.items()
            if not changes.is_new_document and changes.has_changes
        ]

    @property
    def has_changes(self) -> bool:
        """True iff any document changed, any document is new, or any vanished."""
        return bool(self.removed_documents) or any(
            changes.has_changes or changes.is_new_document
            for changes in self.change_sets.values()
        )

    @property
    def new_key_count(self) -> int:
        return sum(len(c.new_keys) for c in self.change_sets.values())

    @property
    def modified_key_count(self) -> int:
        return sum(len(c.modified_keys) for c in self.change_sets.values())

    @property
    def deleted_key_count(self) -> int:
        return sum(len(c.deleted_keys) for c in self.change_sets.values())
