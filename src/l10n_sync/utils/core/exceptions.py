"""
Basic exception classes for L10n Sync.

This module contains the exception hierarchy shared by the diff/merge
engine, the storage layer and the translation clients without creating
import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """How badly an error affects the current run."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Which part of a run an error comes from."""

    SOURCE = "source"
    STORAGE = "storage"
    TRANSLATION = "translation"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class L10nSyncError(Exception):
    """Base exception class for L10n Sync specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class SourceUnreadableError(L10nSyncError):
    """Base-language documents could not be loaded."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.SOURCE,
            severity=ErrorSeverity.CRITICAL,
            user_message=user_message,
            context=context,
            recoverable=False,
        )


class SnapshotCorruptError(L10nSyncError):
    """The stored previous state could not be parsed."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.LOW,
            user_message=user_message,
            context=context,
            recoverable=True,
        )


class TranslationStoreError(L10nSyncError):
    """Translated documents could not be written."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.STORAGE,
            severity=ErrorSeverity.HIGH,
            user_message=user_message,
            context=context,
            recoverable=False,
        )


class TranslationError(L10nSyncError):
    """The translation provider failed or returned an unusable response."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.TRANSLATION,
            severity=ErrorSeverity.HIGH,
            user_message=user_message,
            context=context,
            recoverable=recoverable,
        )


class MissingLanguageError(TranslationError):
    """A requested target language is absent from the translation response."""

    def __init__(self, language: str, context: object | None = None) -> None:
        super().__init__(
            language,
            user_message=f"Missing translation for language: {language}",
            context=context,
        )
        self.language: str = language


class ConfigurationError(L10nSyncError):
    """Invalid configuration file or values."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )
