"""
Reading and writing language directories of JSON documents.

The languages directory holds one sub-directory per language, each
containing flat ``*.json`` documents::

    languages/
        en-US/common.json
        es/common.json

Translated documents are written all-or-nothing: every file is staged to a
temporary file next to its destination first, and only when all staging
succeeded are the staged files moved into place.
"""

from __future__ import annotations

import json
import logging
import tempfile
from collections.abc import Iterable
from pathlib import Path

from ..core.types import PATH_SEPARATOR, Document, DocumentTree, TranslatedTree
from ..utils.core.exceptions import SourceUnreadableError, TranslationStoreError

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIX = ".json"


def find_documents(language_dir: Path) -> list[Path]:
    """
    Find all JSON documents directly inside a language directory.

    Returns:
        Document paths sorted alphabetically, or an empty list if the
        directory does not exist
    """
    if not language_dir.is_dir():
        return []
    return sorted(
        path
        for path in language_dir.iterdir()
        if path.is_file() and path.suffix == DOCUMENT_SUFFIX
    )


def read_document(path: Path) -> Document:
    """
    Read one JSON document.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the content is not a JSON object
    """
    with path.open("r", encoding="utf-8") as f:
        data: object = json.load(f)  # pyright: ignore[reportAny]

    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a JSON object, got {type(data).__name__}")
    return data  # pyright: ignore[reportUnknownVariableType]


def _find_separator_key(doc: Document, prefix: str = "") -> str | None:
    """Return the first key path whose own name contains the path separator."""
    for key, value in doc.items():
        path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key
        if PATH_SEPARATOR in key:
            return path
        if isinstance(value, dict):
            nested = _find_separator_key(value, path)  # pyright: ignore[reportUnknownArgumentType]
            if nested is not None:
                return nested
    return None


def read_documents(languages_dir: Path, base_language: str) -> DocumentTree:
    """
    Read every base-language document.

    Args:
        languages_dir: Root of the language tree
        base_language: Name of the base-language directory

    Returns:
        Mapping of file name to document

    Raises:
        SourceUnreadableError: If the directory or any document cannot be read
    """
    base_dir = languages_dir / base_language
    if not base_dir.is_dir():
        raise SourceUnreadableError(
            f"Base language directory not found: {base_dir}", context=base_dir
        )

    documents: DocumentTree = {}
    for path in find_documents(base_dir):
        try:
            documents[path.name] = read_document(path)
        except (OSError, ValueError) as e:
            raise SourceUnreadableError(
                f"Error reading base file {path}: {e}", context=path
            ) from e

        # Dotted key names would collide with nested paths once flattened
        dotted = _find_separator_key(documents[path.name])
        if dotted is not None:
            raise SourceUnreadableError(
                f"Key {dotted!r} in {path} contains {PATH_SEPARATOR!r}, which is reserved for nested paths",
                context=path,
            )
        logger.debug(f"Read: {path.name}")

    logger.info(f"Read {len(documents)} base documents from {base_dir}")
    return documents


def load_translations(languages_dir: Path, languages: Iterable[str]) -> TranslatedTree:
    """
    Load existing translations for the given languages.

    Documents with zero keys are treated as not yet translated and left
    out. Unreadable documents are skipped with a warning.

    Returns:
        Mapping of language to (file name to document); every requested
        language is present, possibly empty
    """
    translations: TranslatedTree = {}

    for language in languages:
        language_tree: DocumentTree = {}
        translations[language] = language_tree
        language_dir = languages_dir / language

        if not language_dir.is_dir():
            logger.info(f"Directory {language} not found - will create")
            continue

        for path in find_documents(language_dir):
            try:
                document = read_document(path)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not load {language}/{path.name}: {e}")
                continue

            if document:
                language_tree[path.name] = document
                logger.debug(f"Loaded existing: {language}/{path.name}")

    return translations


def serialize_document(document: Document) -> str:
    """Serialize a document the way it is stored on disk."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_translations(
    languages_dir: Path, translations: TranslatedTree, languages: Iterable[str]
) -> list[Path]:
    """
    Write translated documents for the given languages.

    Languages not listed are ignored. Either every document is written or,
    if staging any of them fails, none is.

    Returns:
        Paths of the written documents

    Raises:
        TranslationStoreError: If the documents cannot be written
    """
    wanted = set(languages)
    staged: list[tuple[Path, Path]] = []

    try:
        for language, documents in translations.items():
            if language not in wanted:
                continue

            language_dir = languages_dir / language
            language_dir.mkdir(parents=True, exist_ok=True)

            for name, document in documents.items():
                target = language_dir / name
                with tempfile.NamedTemporaryFile(
                    mode="w",
                    encoding="utf-8",
                    dir=language_dir,
                    prefix=f".{name}.",
                    suffix=".tmp",
                    delete=False,
                ) as temp_file:
                    staged.append((Path(temp_file.name), target))
                    _ = temp_file.write(serialize_document(document))
                    temp_file.flush()

        written: list[Path] = []
        for temp_path, target in staged:
            _ = temp_path.replace(target)
            written.append(target)
            logger.debug(f"Saved {target.parent.name}/{target.name}")

    except (OSError, TypeError, ValueError) as e:
        for temp_path, _target in staged:
            temp_path.unlink(missing_ok=True)
        raise TranslationStoreError(f"Failed to write translations: {e}") from e

    logger.info(f"Total: {len(written)} files saved")
    return written


def clean_translations(languages_dir: Path, languages: Iterable[str]) -> list[Path]:
    """
    Reset every document of the given languages to an empty object.

    Cleaned documents are treated as not yet translated on the next run.

    Returns:
        Paths of the cleaned documents
    """
    cleaned: list[Path] = []

    for language in languages:
        language_dir = languages_dir / language
        if not language_dir.is_dir():
            logger.warning(f"Directory {language} not found - skipping")
            continue

        for path in find_documents(language_dir):
            _ = path.write_text("{}", encoding="utf-8")
            cleaned.append(path)
            logger.debug(f"Cleaned: {language}/{path.name}")

    logger.info(f"Cleaned {len(cleaned)} files")
    return cleaned
