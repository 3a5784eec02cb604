"""
Change detection between the previous source snapshot and the current tree.

Both sides are flattened and compared path by path. A path present only in
the current document is new, a path present only in the previous one is
deleted, and a path whose value differs under strict equality is modified.
"""

from __future__ import annotations

import logging

from .flattener import flatten
from .types import ChangeSet, DetectionResult, Document, DocumentTree, ModifiedKey, NewKey

logger = logging.getLogger(__name__)


def values_equal(left: object, right: object) -> bool:
    """
    Compare two JSON values strictly.

    Values are equal only when their JSON types match, so ``1`` differs from
    ``"1"``, ``True`` and ``1.0``. Lists are compared element-wise with the
    same rule.
    """
    if type(left) is not type(right):
        return False

    match left:
        case list():
            right_items: list[object] = right  # pyright: ignore[reportAssignmentType]
            return len(left) == len(right_items) and all(  # pyright: ignore[reportUnknownArgumentType]
                values_equal(a, b)
                for a, b in zip(left, right_items)  # pyright: ignore[reportUnknownArgumentType,reportUnknownVariableType]
            )
        case dict():
            right_map: dict[str, object] = right  # pyright: ignore[reportAssignmentType]
            return left.keys() == right_map.keys() and all(  # pyright: ignore[reportUnknownMemberType]
                values_equal(left[key], right_map[key])  # pyright: ignore[reportUnknownArgumentType]
                for key in left  # pyright: ignore[reportUnknownVariableType]
            )
        case _:
            return left == right


def detect(previous: Document | None, current: Document, document: str = "") -> ChangeSet:
    """
    Classify the leaf paths of one document against its previous version.

    Args:
        previous: Document as of the previous run, or None if unseen before
        current: Document as it exists now
        document: Document name used for the change set and log messages

    Returns:
        ChangeSet with new, modified and deleted paths
    """
    current_flat = flatten(current)

    if previous is None:
        changes = ChangeSet(document=document, is_new_document=True)
        changes.new_keys = [NewKey(path, value) for path, value in current_flat.items()]
        logger.info(f"New document: {document} ({len(changes.new_keys)} keys)")
        return changes

    previous_flat = flatten(previous)
    changes = ChangeSet(document=document)

    for path, value in current_flat.items():
        if path not in previous_flat:
            changes.new_keys.append(NewKey(path, value))
            logger.debug(f"New key in {document}: {path} = {value!r}")
        elif not values_equal(previous_flat[path], value):
            changes.modified_keys.append(ModifiedKey(path, previous_flat[path], value))
            logger.debug(
                f"Modified in {document}: {path} ({previous_flat[path]!r} -> {value!r})"
            )

    for path in previous_flat:
        if path not in current_flat:
            changes.deleted_keys.append(path)
            logger.debug(f"Deleted in {document}: {path}")

    return changes


def detect_changes(previous_tree: DocumentTree, current_tree: DocumentTree) -> DetectionResult:
    """
    Compare every current document against the previous snapshot.

    Args:
        previous_tree: Snapshot of the source tree from the previous run
        current_tree: Current source tree

    Returns:
        DetectionResult holding one change set per current document
    """
    result = DetectionResult()

    for name, current in current_tree.items():
        changes = detect(previous_tree.get(name), current, document=name)
        result.change_sets[name] = changes

        if changes.has_changes and not changes.is_new_document:
            logger.info(
                f"Modified document: {name} "
                f"(+{len(changes.new_keys)} new, ~{len(changes.modified_keys)} modified, "
                f"-{len(changes.deleted_keys)} deleted)"
            )

    result.removed_documents = [name for name in previous_tree if name not in current_tree]
    for name in result.removed_documents:
        logger.info(f"Document no longer in source: {name}")

    return result
