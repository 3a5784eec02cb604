"""
Global test configuration fixtures for L10n Sync tests.

This module provides reusable pytest fixtures for creating SyncConfig
instances pointing at temporary language trees.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.l10n_sync.config.schema import (
    LanguagesConfig,
    PathsConfig,
    SyncConfig,
    TranslatorConfig,
)


@pytest.fixture
def languages_dir(tmp_path: Path) -> Path:
    """Root of a temporary language tree with an empty base language."""
    path = tmp_path / "languages"
    (path / "en-US").mkdir(parents=True)
    return path


@pytest.fixture
def sync_config(tmp_path: Path, languages_dir: Path) -> SyncConfig:
    """
    Create a configuration for a temporary language tree.

    Targets Spanish and French and uses the offline pseudo translator.

    Returns:
        SyncConfig: Configuration rooted in ``tmp_path``
    """
    return SyncConfig(
        paths=PathsConfig(
            languages_dir=languages_dir,
            state_dir=tmp_path / ".translation-backup",
        ),
        languages=LanguagesConfig(
            base_language="en-US",
            target_languages=["es", "fr"],
        ),
        translator=TranslatorConfig(provider="pseudo"),
    )
