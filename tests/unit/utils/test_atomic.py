"""
Tests for atomic file replacement.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from src.l10n_sync.utils.core.atomic import atomic_write_text


class TestAtomicWriteText:
    """Test the atomic_write_text function."""

    def test_creates_and_replaces_file(self, tmp_path: Path) -> None:
        """Test the destination ends up with the latest content only."""
        target = tmp_path / "data.json"

        atomic_write_text(target, "first")
        atomic_write_text(target, "¿segundo?")

        assert target.read_text(encoding="utf-8") == "¿segundo?"
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test a missing parent directory raises OSError."""
        with pytest.raises(OSError):
            atomic_write_text(tmp_path / "missing" / "data.json", "x")

    def test_failed_replace_keeps_original(self, tmp_path: Path) -> None:
        """Test a failing rename leaves the old file and no temp file."""
        target = tmp_path / "data.json"
        _ = target.write_text("old", encoding="utf-8")

        with patch("pathlib.Path.replace", side_effect=OSError("rename failed")):
            with pytest.raises(OSError, match="rename failed"):
                atomic_write_text(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert list(tmp_path.glob("*.tmp")) == []
