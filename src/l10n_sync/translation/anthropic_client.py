"""
Translation through the Anthropic Messages API.

The whole delta is sent in a single prompt and the model is asked to answer
with one JSON object keyed by language, then by document name. Transport
failures, rate limiting and server errors are retried with exponential
backoff inside this client; the diff/merge engine never sees them.
"""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Callable, Sequence
from typing import Any

import httpx
from typing_extensions import override

from ..core.types import DocumentTree, TranslatedTree
from ..utils.core.exceptions import TranslationError
from .base import Translator

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
ANTHROPIC_VERSION = "2023-06-01"

RETRYABLE_STATUS_CODES = frozenset({408, 409, 429, 500, 502, 503, 504, 529})

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def build_prompt(
    documents: DocumentTree,
    languages: Sequence[str],
    source_language: str,
    instructions: str | None = None,
) -> str:
    """
    Build the incremental translation prompt.

    Args:
        documents: Documents (usually sparse) to translate
        languages: Target language identifiers
        source_language: Language of the documents
        instructions: Optional project-specific guidance appended to the rules

    Returns:
        Prompt text
    """
    file_list = ",\n    ".join(f'"{name}": {{...}}' for name in documents)
    language_template = ",\n".join(
        f'  "{language}": {{\n    {file_list}\n  }}' for language in languages
    )
    extra = f"\nPROJECT CONTEXT:\n{instructions.strip()}\n" if instructions else ""

    return f"""You are translating ONLY NEW OR MODIFIED content for a software application. This is an incremental update - translate only the provided content from {source_language}.

CRITICAL RULES:
1. PRESERVE exact JSON structure and formatting
2. ONLY translate string values, NEVER translate JSON keys
3. Use natural, contextually appropriate translations
4. Maintain consistency with existing translations
5. Keep placeholders intact ({{{{variable}}}}, %s, etc.)
{extra}
CONTENT TO TRANSLATE (incremental update):
{json.dumps(documents, indent=2, ensure_ascii=False)}

RESPOND ONLY WITH VALID JSON:
{{
{language_template}
}}

Translate ALL provided content for each target language: {", ".join(languages)}"""


def extract_json_object(text: str) -> object:
    """
    Parse the outermost JSON object embedded in a model reply.

    Raises:
        TranslationError: If no parseable JSON object is found
    """
    match = _JSON_OBJECT.search(text)
    candidate = match.group(0) if match else text
    try:
        return json.loads(candidate)  # pyright: ignore[reportAny]
    except json.JSONDecodeError as e:
        logger.debug(f"Raw response: {text}")
        raise TranslationError(f"JSON Parse Error: {e}", context=text) from e


class AnthropicTranslator(Translator):
    """Translator backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 8000,
        temperature: float = 0.3,
        timeout: float = 120.0,
        max_retries: int = 3,
        max_backoff: float = 30.0,
        instructions: str | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the Anthropic translator.

        Args:
            api_key: Anthropic API key
            api_url: Messages endpoint URL
            model: Model identifier
            max_tokens: Maximum tokens in the reply
            temperature: Sampling temperature
            timeout: Request timeout in seconds
            max_retries: Retries after the first attempt for retryable failures
            max_backoff: Upper bound for the exponential backoff delay
            instructions: Optional project-specific prompt guidance
            transport: Optional httpx transport (used by tests)
            sleep: Function used to wait between attempts
        """
        if not api_key:
            raise TranslationError("An Anthropic API key is required")

        self.api_url: str = api_url
        self.model: str = model
        self.max_tokens: int = max_tokens
        self.temperature: float = temperature
        self.max_retries: int = max_retries
        self.max_backoff: float = max_backoff
        self.instructions: str | None = instructions
        self._sleep: Callable[[float], None] = sleep
        self.client: httpx.Client = httpx.Client(
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "content-type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> AnthropicTranslator:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:  # pyright: ignore[reportExplicitAny,reportAny]
        """Context manager exit."""
        self.close()

    @override
    def close(self) -> None:
        self.client.close()

    @override
    def translate(
        self,
        documents: DocumentTree,
        languages: Sequence[str],
        *,
        source_language: str,
    ) -> TranslatedTree:
        prompt = build_prompt(documents, languages, source_language, self.instructions)
        logger.info(f"Prompt: {len(prompt)} characters")

        reply = self._request_with_retry(prompt)
        parsed = extract_json_object(reply)
        if not isinstance(parsed, dict):
            raise TranslationError(
                f"Expected a JSON object in the reply, got {type(parsed).__name__}"
            )

        logger.info(f"Received translations for: {', '.join(map(str, parsed))}")  # pyright: ignore[reportUnknownArgumentType]
        return parsed  # pyright: ignore[reportUnknownVariableType]

    def _request_with_retry(self, prompt: str) -> str:
        """
        Send the prompt, retrying transient failures with exponential backoff.

        Raises:
            TranslationError: If all attempts fail or a non-retryable error occurs
        """
        last_exception: Exception | None = None

        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                delay = min(2.0**attempt, self.max_backoff)
                logger.warning(
                    f"Retrying translation request (attempt {attempt + 1}/{self.max_retries + 1}) after {delay}s delay"
                )
                self._sleep(delay)

            try:
                return self._send(prompt)
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status not in RETRYABLE_STATUS_CODES:
                    raise TranslationError(
                        f"API Error: {status} - {_error_message(e.response)}",
                        context=status,
                    ) from e
                last_exception = e
                logger.warning(f"Translation request attempt {attempt + 1} failed: HTTP {status}")
            except httpx.TransportError as e:
                last_exception = e
                logger.warning(f"Translation request attempt {attempt + 1} failed: {e}")

        raise TranslationError(
            f"Translation request failed after {self.max_retries + 1} attempts: {last_exception}",
            recoverable=True,
        ) from last_exception

    def _send(self, prompt: str) -> str:
        """Perform a single Messages API call and return the reply text."""
        response = self.client.post(
            self.api_url,
            json={
                "model": self.model,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        _ = response.raise_for_status()

        try:
            data: dict[str, Any] = response.json()  # pyright: ignore[reportExplicitAny,reportAny]
            usage: dict[str, Any] = data.get("usage") or {}  # pyright: ignore[reportExplicitAny,reportAny]
            logger.info(f"Tokens: {usage.get('input_tokens')}/{usage.get('output_tokens')}")
            return "".join(
                str(block.get("text", ""))  # pyright: ignore[reportAny]
                for block in data["content"]  # pyright: ignore[reportAny]
                if block.get("type", "text") == "text"  # pyright: ignore[reportAny]
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise TranslationError(f"Unexpected API response: {e}") from e


def _error_message(response: httpx.Response) -> str:
    try:
        body: dict[str, Any] = response.json()  # pyright: ignore[reportExplicitAny,reportAny]
        return str(body["error"]["message"])  # pyright: ignore[reportAny]
    except (ValueError, KeyError, TypeError):
        return "Unknown error"
