"""
L10n Sync - incremental translation of JSON localization bundles.
"""

import sys

from .main import main as cli_main

__version__ = "1.0.0"


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())


__all__ = ["__version__", "main"]
