"""
Offline pseudo-translation for simulations and tests.

Every string leaf is prefixed with the target language tag; other values
are copied unchanged. The document structure is preserved exactly.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from typing_extensions import override

from ..core.types import DocumentTree, TranslatedTree
from .base import Translator

logger = logging.getLogger(__name__)


def pseudo_translate_value(value: object, language: str) -> object:
    """Pseudo-translate one JSON value for the given language."""
    match value:
        case str():
            return f"[{language}] {value}"
        case dict():
            return {
                key: pseudo_translate_value(item, language)
                for key, item in value.items()  # pyright: ignore[reportUnknownVariableType]
            }
        case list():
            return [pseudo_translate_value(item, language) for item in value]  # pyright: ignore[reportUnknownVariableType]
        case _:
            return copy.deepcopy(value)


class PseudoTranslator(Translator):
    """Translator that simulates a provider without any network access."""

    def __init__(self) -> None:
        self.request_count: int = 0

    @override
    def translate(
        self,
        documents: DocumentTree,
        languages: Sequence[str],
        *,
        source_language: str,
    ) -> TranslatedTree:
        self.request_count += 1
        logger.info(
            f"Simulating translation of {len(documents)} documents "
            f"from {source_language} into {', '.join(languages)}"
        )
        return {
            language: {
                name: pseudo_translate_value(document, language)  # pyright: ignore[reportAssignmentType]
                for name, document in documents.items()
            }
            for language in languages
        }
