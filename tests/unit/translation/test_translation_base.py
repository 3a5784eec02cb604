"""
Tests for translation response validation.
"""

from __future__ import annotations

import logging

import pytest

from src.l10n_sync.translation.base import Translator, validate_translation_response
from src.l10n_sync.utils.core.exceptions import (
    ErrorCategory,
    MissingLanguageError,
    TranslationError,
)


class TestValidateTranslationResponse:
    """Test the validate_translation_response function."""

    def test_complete_response(self) -> None:
        """Test a response covering all languages is returned as is."""
        response = {
            "es": {"a.json": {"greeting": "Hola"}},
            "fr": {"a.json": {"greeting": "Salut"}},
        }

        assert validate_translation_response(response, ["es", "fr"]) == response

    def test_missing_language(self) -> None:
        """Test an absent language raises MissingLanguageError."""
        with pytest.raises(MissingLanguageError) as exc_info:
            _ = validate_translation_response({"es": {"a.json": {"x": "y"}}}, ["es", "fr"])

        assert exc_info.value.language == "fr"
        assert exc_info.value.user_message == "Missing translation for language: fr"
        assert exc_info.value.category == ErrorCategory.TRANSLATION

    def test_language_that_is_not_a_mapping(self) -> None:
        """Test a language mapped to a non-object counts as missing."""
        with pytest.raises(MissingLanguageError):
            _ = validate_translation_response({"es": "Hola"}, ["es"])

    def test_non_object_response(self) -> None:
        """Test a response that is not an object is rejected."""
        with pytest.raises(TranslationError):
            _ = validate_translation_response(["es"], ["es"])

    def test_unexpected_language_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test languages that were not requested are ignored with a warning."""
        response = {"es": {"a.json": {"x": "y"}}, "de": {"a.json": {"x": "z"}}}

        with caplog.at_level(logging.WARNING):
            validated = validate_translation_response(response, ["es"])

        assert validated == {"es": {"a.json": {"x": "y"}}}
        assert "Skipping unexpected language: de" in caplog.text

    def test_non_object_document_dropped(self) -> None:
        """Test documents that are not objects are dropped."""
        response = {"es": {"a.json": {"x": "y"}, "b.json": "oops"}}

        assert validate_translation_response(response, ["es"]) == {"es": {"a.json": {"x": "y"}}}

    def test_empty_language_mapping_is_accepted(self) -> None:
        """Test a language with no documents is still present."""
        assert validate_translation_response({"es": {}}, ["es"]) == {"es": {}}


class TestTranslatorInterface:
    """Test the abstract Translator interface."""

    def test_cannot_instantiate_abstract_translator(self) -> None:
        """Test Translator requires translate to be implemented."""
        with pytest.raises(TypeError):
            _ = Translator()  # pyright: ignore[reportAbstractUsage]
