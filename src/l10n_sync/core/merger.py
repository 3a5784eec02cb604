"""
Merging of newly translated content into existing translations.

The merger is the only component that combines old and new translated
content. It works on a value copy of the existing translations, so the
caller's data stays untouched if anything fails before the result is
written.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable

from .flattener import delete_nested_value, get_nested_value
from .types import PATH_SEPARATOR, DetectionResult, Document, TranslatedTree

logger = logging.getLogger(__name__)


def _replaced_by_mapping(document: Document, path: str, added_paths: list[str]) -> bool:
    """
    Whether a deleted leaf has become a mapping that received this run's additions.

    A leaf that turns into a mapping is reported as deleted while its new
    children are reported as new. Once the children are merged, deleting the
    path would remove them again.
    """
    prefix = f"{path}{PATH_SEPARATOR}"
    if not any(added.startswith(prefix) for added in added_paths):
        return False
    return isinstance(get_nested_value(document, path), dict)


def deep_merge(target: Document, source: Document) -> Document:
    """
    Merge ``source`` into a copy of ``target``.

    For each key in ``source``, nested mappings on both sides are merged
    recursively; otherwise the source value overwrites the target value.

    Returns:
        New merged document; neither argument is modified
    """
    result: Document = dict(target)

    for key, value in source.items():
        existing = result.get(key)
        if isinstance(value, dict) and isinstance(existing, dict):
            result[key] = deep_merge(existing, value)  # pyright: ignore[reportUnknownArgumentType]
        else:
            result[key] = copy.deepcopy(value)

    return result


def merge(
    existing: TranslatedTree,
    newly_translated: TranslatedTree,
    detection: DetectionResult,
    target_languages: Iterable[str] | None = None,
) -> TranslatedTree:
    """
    Combine existing translations with the newly translated delta.

    Args:
        existing: Previously accepted translations, by language and document
        newly_translated: Translations of this run's delta
        detection: Change detection result supplying the deleted paths
        target_languages: Languages that must be present in the result even
            when they have no translations yet

    Returns:
        Merged translations; ``existing`` and ``newly_translated`` are not
        modified and the result shares no mutable state with them
    """
    merged: TranslatedTree = copy.deepcopy(existing)

    for language in target_languages or ():
        _ = merged.setdefault(language, {})

    for language, documents in newly_translated.items():
        language_tree = merged.setdefault(language, {})

        for name, new_content in documents.items():
            current = language_tree.get(name)
            if current is None:
                language_tree[name] = copy.deepcopy(new_content)
                logger.info(f"{language}/{name} - new document added")
            else:
                language_tree[name] = deep_merge(current, new_content)
                logger.info(f"{language}/{name} - merged changes")

    for name, changes in detection.change_sets.items():
        if not changes.deleted_keys:
            continue
        added_paths = [key.path for key in changes.new_keys]
        added_paths += [key.path for key in changes.modified_keys]

        for language, language_tree in merged.items():
            document = language_tree.get(name)
            if document is None:
                continue
            for path in changes.deleted_keys:
                if _replaced_by_mapping(document, path, added_paths):
                    continue
                if delete_nested_value(document, path):
                    logger.debug(f"{language}/{name} - deleted: {path}")

    return merged
