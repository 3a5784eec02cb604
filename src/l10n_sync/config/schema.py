"""Configuration schema for L10n Sync using nested Pydantic models."""

from pathlib import Path
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TARGET_LANGUAGES: tuple[str, ...] = (
    "de",
    "es",
    "fr",
    "fr-ca",
    "ja",
    "ko",
    "nl",
    "pt",
    "zh-cn",
    "zh-hk",
    "it",
)

LANGUAGE_PATTERN = r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$"


class PathsConfig(BaseModel):
    """Filesystem locations."""

    languages_dir: Path = Field(
        default=Path("languages"),
        description="Directory holding one sub-directory of JSON documents per language",
    )
    state_dir: Path = Field(
        default=Path(".translation-backup"),
        description="Directory holding the snapshot of the last processed source tree",
    )
    state_file_name: str = Field(
        default="previous-state.json",
        description="File name of the snapshot inside state_dir",
        min_length=1,
    )

    @property
    def state_file(self) -> Path:
        """Full path of the snapshot file."""
        return self.state_dir / self.state_file_name


class LanguagesConfig(BaseModel):
    """Base and target languages."""

    base_language: str = Field(
        default="en-US",
        description="Directory name of the canonical source language",
        pattern=LANGUAGE_PATTERN,
    )
    target_languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TARGET_LANGUAGES),
        description="Directory names of the languages to translate into",
        min_length=1,
    )

    @field_validator("target_languages")
    @classmethod
    def validate_target_languages(cls, v: list[str]) -> list[str]:
        """Normalize target languages to lower case and drop duplicates."""
        normalized: list[str] = []
        for language in v:
            code = language.strip().lower()
            if not code:
                raise ValueError("Target language codes must not be empty")
            if code not in normalized:
                normalized.append(code)
        return normalized

    @model_validator(mode="after")
    def validate_base_not_target(self) -> "LanguagesConfig":
        """Ensure the base language is not also a target language."""
        if self.base_language.lower() in self.target_languages:
            raise ValueError(
                f"Base language {self.base_language} cannot also be a target language"
            )
        return self


class TranslatorConfig(BaseModel):
    """Translation provider configuration."""

    provider: Literal["anthropic", "pseudo"] = Field(
        default="anthropic",
        description="Translation provider: 'anthropic' for the Messages API, 'pseudo' for offline simulation",
    )
    api_key: str | None = Field(
        default=None,
        description="Anthropic API key (falls back to the ANTHROPIC_API_KEY environment variable)",
    )
    api_url: str = Field(
        default="https://api.anthropic.com/v1/messages",
        description="Anthropic Messages API endpoint",
        pattern=r"^https?://.*",
    )
    model: str = Field(
        default="claude-3-5-sonnet-20241022",
        description="Model identifier",
        min_length=1,
    )
    max_tokens: Annotated[int, Field(ge=1, le=64000)] = Field(
        default=8000,
        description="Maximum tokens in the model reply",
    )
    temperature: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.3,
        description="Sampling temperature",
    )
    timeout_seconds: Annotated[float, Field(gt=0, le=600)] = Field(
        default=120.0,
        description="HTTP request timeout in seconds",
    )
    max_retries: Annotated[int, Field(ge=0, le=10)] = Field(
        default=3,
        description="Retries after the first attempt for transient failures",
    )
    max_backoff_seconds: Annotated[float, Field(gt=0, le=300)] = Field(
        default=30.0,
        description="Upper bound of the exponential backoff delay between retries",
    )
    instructions: str | None = Field(
        default=None,
        description="Project-specific guidance appended to the translation prompt",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Console log level",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file with size-based rotation",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v


class SyncConfig(BaseModel):
    """
    Configuration model for L10n Sync with nested structure.

    Every component receives the values it needs from this model; nothing
    reads configuration from module-level state.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    languages: LanguagesConfig = Field(default_factory=LanguagesConfig)
    translator: TranslatorConfig = Field(default_factory=TranslatorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
