"""
Tests for building the translation delta.
"""

from __future__ import annotations

from src.l10n_sync.core.change_detector import detect_changes
from src.l10n_sync.core.delta_builder import build_delta
from src.l10n_sync.core.types import DocumentTree


class TestBuildDelta:
    """Test the build_delta function."""

    def test_new_document_included_complete(self) -> None:
        """Test wholly new documents are sent complete."""
        current: DocumentTree = {"a.json": {"greeting": "Hi"}}

        delta = build_delta(detect_changes({}, current), current)

        assert delta == {"a.json": {"greeting": "Hi"}}

    def test_only_new_and_modified_leaves(self) -> None:
        """Test untouched leaves are not sent."""
        previous: DocumentTree = {
            "a.json": {"menu": {"open": "Open", "close": "Close"}, "title": "Old"}
        }
        current: DocumentTree = {
            "a.json": {"menu": {"open": "Open", "close": "Close", "save": "Save"}, "title": "New"}
        }

        delta = build_delta(detect_changes(previous, current), current)

        assert delta == {"a.json": {"menu": {"save": "Save"}, "title": "New"}}

    def test_deletions_only_document_omitted(self) -> None:
        """Test documents without new or modified leaves are omitted."""
        previous: DocumentTree = {"a.json": {"greeting": "Hi", "farewell": "Bye"}}
        current: DocumentTree = {"a.json": {"greeting": "Hi"}}

        delta = build_delta(detect_changes(previous, current), current)

        assert delta == {}

    def test_unchanged_document_omitted(self) -> None:
        """Test unchanged documents never reach the translator."""
        previous: DocumentTree = {"a.json": {"x": "1"}, "b.json": {"y": "2"}}
        current: DocumentTree = {"a.json": {"x": "1"}, "b.json": {"y": "two"}}

        delta = build_delta(detect_changes(previous, current), current)

        assert list(delta) == ["b.json"]

    def test_new_empty_document_omitted(self) -> None:
        """Test the translator never receives an empty document."""
        current: DocumentTree = {"empty.json": {}}

        delta = build_delta(detect_changes({}, current), current)

        assert delta == {}

    def test_delta_does_not_alias_source(self) -> None:
        """Test mutating the delta leaves the current tree untouched."""
        current: DocumentTree = {"a.json": {"menu": {"open": "Open"}, "days": ["Mon"]}}

        delta = build_delta(detect_changes({}, current), current)
        delta["a.json"]["menu"]["open"] = "changed"  # pyright: ignore[reportIndexIssue]
        delta["a.json"]["days"].append("Tue")  # pyright: ignore[reportAttributeAccessIssue,reportUnknownMemberType]

        assert current == {"a.json": {"menu": {"open": "Open"}, "days": ["Mon"]}}

    def test_mapping_to_scalar_sends_scalar(self) -> None:
        """Test a structural change sends only the new scalar."""
        previous: DocumentTree = {"a.json": {"menu": {"open": "Open"}}}
        current: DocumentTree = {"a.json": {"menu": "Menu"}}

        delta = build_delta(detect_changes(previous, current), current)

        assert delta == {"a.json": {"menu": "Menu"}}
