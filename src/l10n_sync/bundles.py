"""
Read-side helpers for consumers of a synchronized language tree.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .core.types import Document
from .storage.documents import DOCUMENT_SUFFIX, find_documents, read_document

logger = logging.getLogger(__name__)


def get_available_languages(languages_dir: Path) -> list[str]:
    """
    List the language directories of a language tree.

    Returns:
        Language codes sorted alphabetically, or an empty list if the tree
        does not exist
    """
    if not languages_dir.is_dir():
        logger.warning(f"Languages directory does not exist: {languages_dir}")
        return []
    return sorted(
        path.name
        for path in languages_dir.iterdir()
        if path.is_dir() and not path.name.startswith(".")
    )


def get_translation_files(languages_dir: Path, language: str) -> list[str]:
    """List the document names (without extension) available for a language."""
    return [path.stem for path in find_documents(languages_dir / language)]


def load_translation(languages_dir: Path, language: str, name: str) -> Document | None:
    """
    Load one document of a language.

    Args:
        languages_dir: Root of the language tree
        language: Language code
        name: Document name, with or without the ``.json`` extension

    Returns:
        The document, or None if it does not exist
    """
    file_name = name if name.endswith(DOCUMENT_SUFFIX) else f"{name}{DOCUMENT_SUFFIX}"
    path = languages_dir / language / file_name
    if not path.is_file():
        return None
    return read_document(path)
