"""YAML configuration files for L10n Sync.

Files are parsed with PyYAML and validated into ``SyncConfig``. Saving goes
through an atomic replace so an interrupted write never leaves a truncated
configuration behind.
"""

import logging
from pathlib import Path

import yaml

from ..utils.core.atomic import atomic_write_text
from .schema import SyncConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("l10n-sync.yml")


def _read_mapping(path: Path) -> dict[str, object]:
    """Parse a YAML file that must hold a mapping; an empty file is an empty mapping."""
    try:
        data: object = yaml.safe_load(path.read_text(encoding="utf-8"))  # pyright: ignore[reportAny]
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Invalid YAML syntax in {path}: {e}") from e

    match data:
        case None:
            return {}
        case dict():
            return data  # pyright: ignore[reportUnknownVariableType]
        case _:
            raise ValueError(
                f"Configuration file must contain a YAML dictionary, got {type(data).__name__}"
            )


class ConfigManager:
    """Loads, saves and validates ``SyncConfig`` YAML files."""

    @staticmethod
    def load_config(config_path: Path) -> SyncConfig:
        """
        Read and validate a configuration file.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If the top level is not a mapping
            ValidationError: If a value is rejected by the schema
        """
        if not config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        config = SyncConfig.model_validate(_read_mapping(config_path))
        logger.debug(f"Configuration loaded from {config_path}")
        return config

    @staticmethod
    def load_or_default(config_path: Path | None) -> SyncConfig:
        """
        Resolve the configuration for a run.

        An explicit path must exist. Otherwise ``l10n-sync.yml`` in the
        working directory is used when present, and built-in defaults when
        not.
        """
        if config_path is None and DEFAULT_CONFIG_FILE.is_file():
            config_path = DEFAULT_CONFIG_FILE

        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return ConfigManager.get_default_config()

        return ConfigManager.load_config(config_path)

    @staticmethod
    def save_config(config: SyncConfig, config_path: Path) -> None:
        """
        Write a configuration as YAML, keeping the schema's field order.

        Raises:
            OSError: If the file cannot be written
        """
        document = yaml.safe_dump(
            config.model_dump(mode="json"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
        try:
            atomic_write_text(config_path, document)
        except OSError as e:
            raise OSError(f"Failed to save configuration to {config_path}: {e}") from e
        logger.debug(f"Configuration saved to {config_path}")

    @staticmethod
    def get_default_config() -> SyncConfig:
        return SyncConfig()

    @staticmethod
    def validate_config(config: SyncConfig) -> bool:
        """
        Re-run schema validation on an existing configuration object.

        Raises:
            ValidationError: If the configuration no longer validates
        """
        _ = SyncConfig.model_validate(config.model_dump())
        return True


__all__ = ["ConfigManager", "DEFAULT_CONFIG_FILE"]
