"""
Snapshot persistence for the base-language source tree.

The snapshot records the source tree as it was at the end of the last
successful run and serves as the comparison baseline for the next one. It
is stored as a single JSON blob and replaced wholesale with an atomic
write.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from ..core.types import DocumentTree
from ..utils.core.atomic import atomic_write_text
from ..utils.core.exceptions import SnapshotCorruptError

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Manages the persisted previous state of the source tree."""

    def __init__(self, state_file_path: Path) -> None:
        """
        Initialize snapshot store.

        Args:
            state_file_path: Path to the snapshot file
        """
        self.state_file_path: Path = state_file_path
        logger.debug(f"SnapshotStore initialized with state file: {self.state_file_path}")

    def save(self, tree: DocumentTree) -> None:
        """
        Save the source tree to persistent storage with atomic operation.

        Args:
            tree: Current source tree, by document name

        Raises:
            OSError: If the snapshot cannot be written
        """
        try:
            content = json.dumps(tree, indent=2, ensure_ascii=False)
            self.state_file_path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(self.state_file_path, content)
        except (OSError, TypeError, ValueError) as e:
            raise OSError(f"Failed to save snapshot to {self.state_file_path}: {e}") from e

        logger.debug(f"Snapshot saved to {self.state_file_path}")

    def load(self) -> DocumentTree:
        """
        Load the previous source tree.

        Returns:
            The stored tree, or an empty tree if no snapshot exists or the
            stored snapshot is corrupted
        """
        if not self.state_file_path.exists():
            logger.info("No previous state found - will do full translation")
            return {}

        try:
            tree = self._read()
        except SnapshotCorruptError as e:
            logger.warning(f"Previous state is corrupted, ignoring it: {e}")
            self._backup_corrupted_state()
            return {}

        logger.info(f"Loaded previous state from {self.state_file_path}")
        return tree

    def _read(self) -> DocumentTree:
        """Read and validate the snapshot file."""
        try:
            with self.state_file_path.open("r", encoding="utf-8") as f:
                data: object = json.load(f)  # pyright: ignore[reportAny]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SnapshotCorruptError(
                f"Cannot parse {self.state_file_path}: {e}", context=self.state_file_path
            ) from e

        if not isinstance(data, dict):
            raise SnapshotCorruptError(
                f"Snapshot must contain a JSON object, got {type(data).__name__}",
                context=self.state_file_path,
            )

        tree: DocumentTree = {}
        for name, document in data.items():  # pyright: ignore[reportUnknownVariableType]
            if not isinstance(document, dict):
                raise SnapshotCorruptError(
                    f"Snapshot entry {name!r} is not a JSON object",
                    context=self.state_file_path,
                )
            tree[str(name)] = document  # pyright: ignore[reportUnknownArgumentType]
        return tree

    def _backup_corrupted_state(self) -> None:
        """Create a backup of the corrupted snapshot file for debugging."""
        try:
            backup_path = self.state_file_path.with_suffix(
                f".corrupted.{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
            )
            _ = self.state_file_path.rename(backup_path)
            logger.info(f"Corrupted snapshot backed up to: {backup_path}")
        except OSError as e:
            logger.error(f"Failed to backup corrupted snapshot: {e}")

    def delete(self) -> bool:
        """
        Delete the snapshot file.

        Returns:
            True if a snapshot was deleted, False if none existed
        """
        if not self.state_file_path.exists():
            return False
        self.state_file_path.unlink()
        logger.info(f"Snapshot deleted: {self.state_file_path}")
        return True

    def exists(self) -> bool:
        """Check if a snapshot file exists."""
        return self.state_file_path.exists()
