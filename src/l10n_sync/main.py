"""
Command-line entry point for L10n Sync.

This module parses arguments, loads configuration, sets up logging and
dispatches to the sync, status, clean and reset-state commands.

Usage Examples:
    Translate whatever changed since the last run:
        l10n-sync sync

    Show what would be translated without calling the provider:
        l10n-sync status

    Simulate translations offline:
        l10n-sync sync --pseudo --targets es,fr
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from .config.manager import ConfigManager
from .config.schema import SyncConfig
from .core.types import DetectionResult
from .pipeline import IncrementalSync, SyncResult
from .storage import SnapshotStore, clean_translations
from .translation import create_translator
from .utils.core.exceptions import ConfigurationError, L10nSyncError

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(
    level: str = "INFO", log_file: Path | None = None, ci_mode: bool = False
) -> None:
    """
    Configure console logging and optional rotating file logging.

    Args:
        level: Console log level name
        log_file: Optional log file path (5MB max, 5 backups)
        ci_mode: Use the CI-friendly ``::LEVEL::message`` format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    if ci_mode:
        simple_formatter = logging.Formatter("::%(levelname)s::%(message)s")
    else:
        simple_formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

    # Keep HTTP client chatter out of the console
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="l10n-sync",
        description="Incrementally translate JSON localization bundles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s sync
  %(prog)s sync --pseudo --targets es,fr
  %(prog)s status --languages-dir locales
  %(prog)s clean --yes
        """,
    )

    common = argparse.ArgumentParser(add_help=False)
    _ = common.add_argument(
        "--config", type=Path, default=None, help="Path to the YAML configuration file"
    )
    _ = common.add_argument(
        "--languages-dir", type=Path, default=None, help="Root of the language tree"
    )
    _ = common.add_argument(
        "--state-dir", type=Path, default=None, help="Directory holding the snapshot"
    )
    _ = common.add_argument(
        "--base-language", default=None, help="Base language directory name"
    )
    _ = common.add_argument(
        "--targets",
        default=None,
        help="Comma-separated target languages (overrides configuration)",
    )
    _ = common.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    _ = common.add_argument(
        "--ci-mode", action="store_true", help="Enable CI-friendly logging format"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser(
        "sync", parents=[common], help="Translate changes since the last run"
    )
    _ = sync_parser.add_argument(
        "--pseudo", action="store_true", help="Use offline pseudo-translation"
    )
    _ = sync_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Detect changes and build the delta without translating or writing",
    )

    _ = subparsers.add_parser(
        "status", parents=[common], help="Show detected changes without translating"
    )

    clean_parser = subparsers.add_parser(
        "clean", parents=[common], help="Reset all target-language documents to {}"
    )
    _ = clean_parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )

    _ = subparsers.add_parser(
        "reset-state",
        parents=[common],
        help="Delete the snapshot so the next run retranslates everything",
    )

    return parser


def load_effective_config(args: argparse.Namespace) -> SyncConfig:
    """
    Load configuration and apply command-line overrides.

    Raises:
        ConfigurationError: If the configuration cannot be loaded or is invalid
    """
    config_path: Path | None = getattr(args, "config", None)
    try:
        config = ConfigManager.load_or_default(config_path)

        data = config.model_dump()
        if getattr(args, "languages_dir", None) is not None:
            data["paths"]["languages_dir"] = args.languages_dir
        if getattr(args, "state_dir", None) is not None:
            data["paths"]["state_dir"] = args.state_dir
        if getattr(args, "base_language", None):
            data["languages"]["base_language"] = args.base_language
        if getattr(args, "targets", None):
            data["languages"]["target_languages"] = [
                code for code in str(args.targets).split(",") if code.strip()
            ]
        if getattr(args, "pseudo", False):
            data["translator"]["provider"] = "pseudo"
        if getattr(args, "verbose", False):
            data["logging"]["level"] = "DEBUG"

        return SyncConfig.model_validate(data)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        # pydantic's ValidationError is a ValueError subclass
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def render_detection(detection: DetectionResult) -> None:
    """Print a per-document table of detected changes."""
    table = Table(title="Detected Changes")
    table.add_column("Document", style="cyan")
    table.add_column("Status")
    table.add_column("New", justify="right", style="green")
    table.add_column("Modified", justify="right", style="yellow")
    table.add_column("Deleted", justify="right", style="red")

    for name, changes in detection.change_sets.items():
        if changes.is_new_document:
            status = "new document"
        elif changes.has_changes:
            status = "modified"
        else:
            status = "unchanged"
        table.add_row(
            name,
            status,
            str(len(changes.new_keys)),
            str(len(changes.modified_keys)),
            str(len(changes.deleted_keys)),
        )

    for name in detection.removed_documents:
        table.add_row(name, "removed from source", "-", "-", "-")

    console.print(table)


def render_summary(result: SyncResult) -> None:
    """Print the incremental update summary."""
    detection = result.detection
    console.print("\n[bold]Incremental Update Summary[/bold]")
    console.print(f"New files: {len(detection.new_documents)}")
    console.print(f"Modified files: {len(detection.modified_documents)}")
    console.print(
        f"Keys: [green]+{result.new_key_count} new[/green], "
        f"[yellow]~{result.modified_key_count} modified[/yellow], "
        f"[red]-{result.deleted_key_count} deleted[/red]"
    )
    if not result.dry_run:
        console.print(f"Files written: {len(result.written_files)}")
        if not result.snapshot_saved:
            console.print(
                "[yellow]Snapshot was not saved - the next run will retranslate affected documents[/yellow]"
            )


def cmd_sync(config: SyncConfig, args: argparse.Namespace) -> int:
    """Run the incremental pipeline."""
    dry_run = bool(getattr(args, "dry_run", False))
    translator = None if dry_run else create_translator(config.translator)

    try:
        result = IncrementalSync(config, translator).run(dry_run=dry_run)
    finally:
        if translator is not None:
            translator.close()

    if not result.has_changes:
        console.print("[green]✓ No changes detected - nothing to translate![/green]")
        return 0

    render_detection(result.detection)
    render_summary(result)
    return 0


def cmd_status(config: SyncConfig, _args: argparse.Namespace) -> int:
    """Show detected changes without translating."""
    _, detection = IncrementalSync(config, None).detect()
    if not detection.has_changes:
        console.print("[green]✓ Translations are up to date[/green]")
        return 0
    render_detection(detection)
    return 0


def cmd_clean(config: SyncConfig, args: argparse.Namespace) -> int:
    """Reset every target-language document to an empty object."""
    languages = config.languages.target_languages
    if not getattr(args, "yes", False):
        console.print("[yellow]This will replace ALL translation files with {}[/yellow]")
        if not Confirm.ask("Continue?", console=console, default=False):
            console.print("Cancelled")
            return 0

    cleaned = clean_translations(config.paths.languages_dir, languages)
    console.print(f"[green]✓ Cleaned {len(cleaned)} files[/green]")
    return 0


def cmd_reset_state(config: SyncConfig, _args: argparse.Namespace) -> int:
    """Delete the snapshot."""
    if SnapshotStore(config.paths.state_file).delete():
        console.print("[green]✓ Snapshot deleted - the next run retranslates everything[/green]")
    else:
        console.print("No snapshot found")
    return 0


COMMANDS = {
    "sync": cmd_sync,
    "status": cmd_status,
    "clean": cmd_clean,
    "reset-state": cmd_reset_state,
}


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command: str = getattr(args, "command", None) or "sync"

    try:
        config = load_effective_config(args)
    except ConfigurationError as e:
        setup_logging(ci_mode=bool(getattr(args, "ci_mode", False)))
        logger.error(f"❌ {e}")
        return 1

    setup_logging(
        config.logging.level,
        config.logging.log_file,
        bool(getattr(args, "ci_mode", False)),
    )

    try:
        return COMMANDS[command](config, args)
    except KeyboardInterrupt:
        logger.info("❌ Operation cancelled by user")
        return 1
    except L10nSyncError as e:
        logger.error(f"❌ {e.user_message}")
        return 1
    except Exception as e:
        logger.error(f"❌ Fatal error: {e}")
        logger.debug("Full traceback:", exc_info=True)
        return 1


__all__ = ["main", "setup_logging", "build_parser", "load_effective_config"]


if __name__ == "__main__":
    sys.exit(main())
