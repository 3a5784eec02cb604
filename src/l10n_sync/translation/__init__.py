"""
Translation providers.

The pipeline depends only on the abstract ``Translator``; concrete
providers are chosen from configuration by ``create_translator``.
"""

from __future__ import annotations

import os

from ..config.schema import TranslatorConfig
from ..utils.core.exceptions import ConfigurationError
from .anthropic_client import AnthropicTranslator, build_prompt, extract_json_object
from .base import Translator, validate_translation_response
from .pseudo import PseudoTranslator, pseudo_translate_value

API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"


def create_translator(config: TranslatorConfig) -> Translator:
    """
    Create the translator selected by configuration.

    Raises:
        ConfigurationError: If the Anthropic provider is selected without an
            API key in the configuration or the environment
    """
    match config.provider:
        case "pseudo":
            return PseudoTranslator()
        case "anthropic":
            api_key = config.api_key or os.environ.get(API_KEY_ENV_VAR)
            if not api_key:
                raise ConfigurationError(
                    f"You need translator.api_key or the {API_KEY_ENV_VAR} environment variable"
                )
            return AnthropicTranslator(
                api_key,
                api_url=config.api_url,
                model=config.model,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                timeout=config.timeout_seconds,
                max_retries=config.max_retries,
                max_backoff=config.max_backoff_seconds,
                instructions=config.instructions,
            )
        case _:
            raise ConfigurationError(f"Unknown translation provider: {config.provider}")


__all__ = [
    "API_KEY_ENV_VAR",
    "AnthropicTranslator",
    "PseudoTranslator",
    "Translator",
    "build_prompt",
    "create_translator",
    "extract_json_object",
    "pseudo_translate_value",
    "validate_translation_response",
]
