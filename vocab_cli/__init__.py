"""
Command-line front end for custom-vocabulary.

Example usage:
    vocab add serendipity -d "A happy accident" -s "It was pure serendipity."
    vocab quiz --size 5
    vocab export --output backups/
"""

from .cli import (
    main as main,
    create_parser as create_parser,
)

from .config import (
    Settings as Settings,
    load_settings as load_settings,
    DEFAULT_CONFIG_PATH as DEFAULT_CONFIG_PATH,
)

__all__ = [
    "main",
    "create_parser",
    "Settings",
    "load_settings",
    "DEFAULT_CONFIG_PATH",
]
