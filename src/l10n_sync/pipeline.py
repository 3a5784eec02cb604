"""
Incremental synchronization pipeline.

A run reads the base-language documents, compares them with the previous
snapshot, sends only the delta to the translation provider, merges the
result into the existing translations and finally persists the merged
translations and the new snapshot.

Everything up to the write happens in memory, so a run that fails before
persisting leaves the language tree untouched. Two runs executing at the
same time against the same directories are not coordinated: the last one
to write wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing_extensions import override

from .config.schema import SyncConfig
from .core import DetectionResult, DocumentTree, build_delta, detect_changes, merge
from .storage import SnapshotStore, load_translations, read_documents, write_translations
from .translation import Translator, validate_translation_response

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one synchronization run."""

    detection: DetectionResult
    delta: DocumentTree = field(default_factory=dict)
    written_files: list[Path] = field(default_factory=list)
    translated: bool = False
    snapshot_saved: bool = False
    dry_run: bool = False

    @property
    def has_changes(self) -> bool:
        return self.detection.has_changes

    @property
    def new_key_count(self) -> int:
        return self.detection.new_key_count

    @property
    def modified_key_count(self) -> int:
        return self.detection.modified_key_count

    @property
    def deleted_key_count(self) -> int:
        return self.detection.deleted_key_count

    @override
    def __str__(self) -> str:
        """One-line summary of the run."""
        if not self.has_changes:
            return "No changes detected - nothing to translate"
        return (
            f"Sync Results: "
            f"{len(self.detection.new_documents)} new documents, "
            f"{len(self.detection.modified_documents)} modified documents, "
            f"+{self.new_key_count} new, "
            f"~{self.modified_key_count} modified, "
            f"-{self.deleted_key_count} deleted keys, "
            f"{len(self.written_files)} files written"
        )


class IncrementalSync:
    """Runs the detect, translate, merge and persist cycle for one language tree."""

    def __init__(
        self,
        config: SyncConfig,
        translator: Translator | None,
        snapshot_store: SnapshotStore | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            config: Run configuration (paths and languages)
            translator: Translation provider; may be None for dry runs
            snapshot_store: Snapshot store, defaults to the configured state file
        """
        self.config: SyncConfig = config
        self.translator: Translator | None = translator
        self.snapshot_store: SnapshotStore = snapshot_store or SnapshotStore(
            config.paths.state_file
        )

    @property
    def languages_dir(self) -> Path:
        return self.config.paths.languages_dir

    @property
    def base_language(self) -> str:
        return self.config.languages.base_language

    @property
    def target_languages(self) -> list[str]:
        return self.config.languages.target_languages

    def detect(self) -> tuple[DocumentTree, DetectionResult]:
        """
        Read the source tree and compare it with the previous snapshot.

        Raises:
            SourceUnreadableError: If the base documents cannot be read
        """
        logger.info("Reading current base files...")
        current = read_documents(self.languages_dir, self.base_language)

        logger.info("Loading previous state...")
        previous = self.snapshot_store.load()

        logger.info("Detecting changes...")
        return current, detect_changes(previous, current)

    def run(self, dry_run: bool = False) -> SyncResult:
        """
        Execute one incremental synchronization.

        Args:
            dry_run: Detect changes and build the delta without translating
                or writing anything

        Returns:
            SyncResult describing the run

        Raises:
            SourceUnreadableError: If the base documents cannot be read
            MissingLanguageError: If the provider omitted a requested language
            TranslationError: If the provider failed
            TranslationStoreError: If the merged translations cannot be written
        """
        current, detection = self.detect()
        result = SyncResult(detection=detection, dry_run=dry_run)

        if not detection.has_changes:
            logger.info("No changes detected - nothing to translate!")
            return result

        result.delta = build_delta(detection, current)

        if dry_run:
            logger.info("Dry run - skipping translation and writes")
            return result

        logger.info("Loading existing translations...")
        existing = load_translations(self.languages_dir, self.target_languages)

        newly_translated = self._translate(result.delta)
        result.translated = bool(result.delta)

        logger.info("Merging with existing translations...")
        merged = merge(existing, newly_translated, detection, self.target_languages)

        logger.info("Saving updated translations...")
        result.written_files = write_translations(
            self.languages_dir, merged, self.target_languages
        )

        logger.info("Saving current state for future comparisons...")
        result.snapshot_saved = self._save_snapshot(current)

        logger.info(str(result))
        return result

    def _translate(self, delta: DocumentTree) -> dict[str, DocumentTree]:
        """Send the delta to the provider and validate the response."""
        if not delta:
            logger.info("Only deletions detected - no translation request needed")
            return {}

        if self.translator is None:
            raise ValueError("A translator is required unless running in dry-run mode")

        logger.info(f"Translating changes only: {', '.join(delta)}")
        response = self.translator.translate(
            delta, self.target_languages, source_language=self.base_language
        )
        return validate_translation_response(response, self.target_languages)

    def _save_snapshot(self, current: DocumentTree) -> bool:
        """Persist the snapshot; a failure here is logged but never fatal."""
        try:
            self.snapshot_store.save(current)
        except OSError as e:
            logger.error(
                f"Failed to save snapshot, the next run will retranslate affected documents: {e}"
            )
            return False
        return True
