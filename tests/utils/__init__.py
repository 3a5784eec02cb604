"""
Test utilities package for L10n Sync tests.

### test_helpers.py
- `create_language_tree()`: Write a language tree of JSON documents to disk
- `write_json()` / `read_json()`: JSON file helpers
- `create_temp_config_file()`: Context manager for temporary YAML config files
- `RecordingTranslator`: Translator double recording every request
"""

from __future__ import annotations

from .test_helpers import (
    RecordingTranslator,
    create_language_tree,
    create_temp_config_file,
    read_json,
    write_json,
)

__all__ = [
    "RecordingTranslator",
    "create_language_tree",
    "create_temp_config_file",
    "read_json",
    "write_json",
]
