"""
Atomic file replacement.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


def atomic_write_text(path: Path, content: str) -> None:
    """
    Replace ``path`` with ``content`` in one rename.

    The text is written to a hidden temporary file in the destination
    directory first, so readers only ever see the old or the new file.

    Raises:
        OSError: If the temporary file cannot be written or moved into place
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            temp_path = Path(handle.name)
            _ = handle.write(content)

        _ = temp_path.replace(path)
    except OSError:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise
