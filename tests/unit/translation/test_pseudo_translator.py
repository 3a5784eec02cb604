"""
Tests for the offline pseudo translator.
"""

from __future__ import annotations

from src.l10n_sync.core.flattener import flatten
from src.l10n_sync.core.types import DocumentTree
from src.l10n_sync.translation.pseudo import PseudoTranslator, pseudo_translate_value


class TestPseudoTranslateValue:
    """Test the pseudo_translate_value function."""

    def test_strings_are_prefixed(self) -> None:
        """Test string leaves receive the language tag."""
        assert pseudo_translate_value("Open", "es") == "[es] Open"

    def test_non_strings_unchanged(self) -> None:
        """Test numbers, booleans and None pass through."""
        assert pseudo_translate_value(3, "es") == 3
        assert pseudo_translate_value(True, "es") is True
        assert pseudo_translate_value(None, "es") is None

    def test_containers_recursed(self) -> None:
        """Test strings inside mappings and arrays are translated."""
        assert pseudo_translate_value({"a": ["x", 1], "b": {"c": "y"}}, "fr") == {
            "a": ["[fr] x", 1],
            "b": {"c": "[fr] y"},
        }


class TestPseudoTranslator:
    """Test the PseudoTranslator class."""

    def test_translates_every_language(self) -> None:
        """Test every requested language is returned with the same structure."""
        documents: DocumentTree = {"a.json": {"menu": {"open": "Open"}, "count": 2}}
        translator = PseudoTranslator()

        result = translator.translate(documents, ["es", "fr"], source_language="en-US")

        assert set(result) == {"es", "fr"}
        for language in ("es", "fr"):
            assert flatten(result[language]["a.json"]).keys() == flatten(documents["a.json"]).keys()
        assert result["es"]["a.json"] == {"menu": {"open": "[es] Open"}, "count": 2}
        assert translator.request_count == 1

    def test_source_documents_not_modified(self) -> None:
        """Test the input documents are left untouched."""
        documents: DocumentTree = {"a.json": {"days": ["Mon"]}}

        _ = PseudoTranslator().translate(documents, ["es"], source_language="en-US")

        assert documents == {"a.json": {"days": ["Mon"]}}
