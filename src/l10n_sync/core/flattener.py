"""
Conversion between nested documents and flat dotted-path mappings.

Nested mappings are descended into; every other value (strings, numbers,
booleans, None and lists) is a leaf. Lists are opaque and never split into
per-index paths.
"""

from __future__ import annotations

from .types import PATH_SEPARATOR, Document, FlatMap


def _join(prefix: str, key: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key


def flatten(doc: Document, prefix: str = "") -> FlatMap:
    """
    Flatten a nested document into a mapping of dotted path to leaf value.

    Args:
        doc: Document to flatten
        prefix: Path prefix prepended to every emitted key

    Returns:
        Flat mapping preserving the document's key order
    """
    result: FlatMap = {}

    for key, value in doc.items():
        path = _join(prefix, key)
        if isinstance(value, dict):
            result.update(flatten(value, path))  # pyright: ignore[reportUnknownArgumentType]
        else:
            result[path] = value

    return result


def unflatten(flat_map: FlatMap) -> Document:
    """
    Rebuild a nested document from a flat dotted-path mapping.

    Args:
        flat_map: Mapping of dotted path to leaf value

    Returns:
        Nested document with intermediate mappings materialized
    """
    result: Document = {}
    for path, value in flat_map.items():
        set_nested_value(result, path, value)
    return result


def set_nested_value(doc: Document, path: str, value: object) -> None:
    """
    Assign a value at a dotted path, creating intermediate mappings.

    An intermediate segment holding a non-mapping value is replaced by a
    mapping.
    """
    keys = path.split(PATH_SEPARATOR)
    current = doc

    for key in keys[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child  # pyright: ignore[reportUnknownVariableType]

    current[keys[-1]] = value


def get_nested_value(doc: Document, path: str, default: object = None) -> object:
    """Return the value at a dotted path, or ``default`` when unreachable."""
    current: object = doc
    for key in path.split(PATH_SEPARATOR):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]  # pyright: ignore[reportUnknownVariableType]
    return current


def delete_nested_value(doc: Document, path: str) -> bool:
    """
    Remove the value at a dotted path.

    Returns:
        True if a value was removed, False if the path was already absent
    """
    keys = path.split(PATH_SEPARATOR)
    current = doc

    for key in keys[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            return False
        current = child  # pyright: ignore[reportUnknownVariableType]

    if keys[-1] not in current:
        return False

    del current[keys[-1]]
    return True
