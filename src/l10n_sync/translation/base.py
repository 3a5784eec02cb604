"""
Translation provider interface and response validation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..core.types import DocumentTree, TranslatedTree
from ..utils.core.exceptions import MissingLanguageError, TranslationError

logger = logging.getLogger(__name__)


class Translator(ABC):
    """
    A provider that translates a set of documents into target languages.

    Implementations own their transport concerns (authentication, retries,
    fallbacks); callers only see the translated tree or an exception.
    """

    @abstractmethod
    def translate(
        self,
        documents: DocumentTree,
        languages: Sequence[str],
        *,
        source_language: str,
    ) -> TranslatedTree:
        """
        Translate documents into every requested language.

        Args:
            documents: Documents to translate, by name
            languages: Target language identifiers
            source_language: Language the documents are written in

        Returns:
            Mapping of language to translated documents, by name
        """

    def close(self) -> None:
        """Release provider resources; nothing to release by default."""


def validate_translation_response(
    response: object, languages: Sequence[str]
) -> TranslatedTree:
    """
    Check that a provider response covers every requested language.

    Languages that were not requested are dropped with a warning.

    Returns:
        The response restricted to the requested languages

    Raises:
        MissingLanguageError: If a requested language is absent or is not a
            mapping of documents
        TranslationError: If the response is not a mapping at all
    """
    if not isinstance(response, dict):
        raise TranslationError(
            f"Translation response must be a JSON object, got {type(response).__name__}"
        )

    validated: TranslatedTree = {}
    for language in languages:
        documents = response.get(language)  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
        if not isinstance(documents, dict):
            raise MissingLanguageError(language)

        language_tree: DocumentTree = {}
        for name, document in documents.items():  # pyright: ignore[reportUnknownVariableType]
            if isinstance(document, dict):
                language_tree[str(name)] = document  # pyright: ignore[reportUnknownArgumentType]
            else:
                logger.warning(f"Ignoring non-object translation for {language}/{name}")
        validated[language] = language_tree

    for extra in response:  # pyright: ignore[reportUnknownVariableType]
        if extra not in validated:
            logger.warning(f"Skipping unexpected language: {extra}")

    return validated
