"""
Tests for translator selection from configuration.
"""

from __future__ import annotations

import pytest

from src.l10n_sync.config.schema import TranslatorConfig
from src.l10n_sync.translation import (
    API_KEY_ENV_VAR,
    AnthropicTranslator,
    PseudoTranslator,
    create_translator,
)
from src.l10n_sync.utils.core.exceptions import ConfigurationError


class TestCreateTranslator:
    """Test the create_translator factory."""

    def test_pseudo_provider(self) -> None:
        """Test the pseudo provider needs no credentials."""
        assert isinstance(create_translator(TranslatorConfig(provider="pseudo")), PseudoTranslator)

    def test_anthropic_with_configured_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configured key and settings are used."""
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

        translator = create_translator(
            TranslatorConfig(provider="anthropic", api_key="from-config", model="my-model")
        )

        assert isinstance(translator, AnthropicTranslator)
        assert translator.model == "my-model"
        assert translator.client.headers["x-api-key"] == "from-config"
        translator.close()

    def test_anthropic_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the key falls back to the environment variable."""
        monkeypatch.setenv(API_KEY_ENV_VAR, "from-env")

        translator = create_translator(TranslatorConfig(provider="anthropic"))

        assert isinstance(translator, AnthropicTranslator)
        assert translator.client.headers["x-api-key"] == "from-env"
        translator.close()

    def test_anthropic_without_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing key is a configuration error."""
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

        with pytest.raises(ConfigurationError, match=API_KEY_ENV_VAR):
            _ = create_translator(TranslatorConfig(provider="anthropic"))
