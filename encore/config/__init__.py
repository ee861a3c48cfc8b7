"""
Configuration management for Encore.

This module loads the library configuration (scan roots, database location)
from TOML files.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Path to the config directory
CONFIG_DIR = Path(__file__).parent

DEFAULT_DATABASE_PATH = Path("encore-library.sqlite3")


@dataclass
class LibraryConfig:
    """Loaded library configuration."""

    library_roots: list[Path] = field(default_factory=list)
    database_path: Path = DEFAULT_DATABASE_PATH


def load_library_config(config_path: Path | None = None) -> LibraryConfig:
    """
    Load library configuration from a TOML file.

    Args:
        config_path: Path to a library.toml. If None, uses the packaged default.

    Returns:
        Loaded LibraryConfig instance. Missing keys keep their defaults.
    """
    if config_path is None:
        config_path = CONFIG_DIR / "library.toml"

    logger.debug("Loading library config from %s", config_path)

    with config_path.open("rb") as f:
        data = tomllib.load(f)

    library = data.get("library", {})
    database = data.get("database", {})

    roots = library.get("library_roots", [])
    if not isinstance(roots, list):
        raise ValueError(f"library.library_roots must be a list in {config_path}")

    return LibraryConfig(
        library_roots=[Path(str(r)) for r in roots],
        database_path=Path(str(database.get("path", DEFAULT_DATABASE_PATH))),
    )


# Global singleton instance (lazy loaded)
_library_config: LibraryConfig | None = None


def get_library_config() -> LibraryConfig:
    """
    Get the global library configuration (lazy loaded singleton).
    """
    global _library_config

    if _library_config is None:
        _library_config = load_library_config()

    return _library_config


def reload_library_config(config_path: Path | None = None) -> LibraryConfig:
    """
    Force reload of library configuration.
    """
    global _library_config
    _library_config = load_library_config(config_path)
    return _library_config
