"""Location of the persisted description store.

The store lives in the per-user config directory reported by ``platformdirs``.
``DDIR_CONFIG_DIR`` or an explicit directory overrides it, and the fixed
``~/.config/ddir`` location of older installs is still read when present.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "ddir"
STORE_FILENAME = "config.json"
CONFIG_DIR_ENV = "DDIR_CONFIG_DIR"
LOG_LEVEL_ENV = "DDIR_LOG_LEVEL"
DEFAULT_STORE_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / STORE_FILENAME
LEGACY_STORE_PATH = Path.home() / ".config" / APP_NAME / STORE_FILENAME
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


def configured_store_path(config_dir: str | os.PathLike[str] | None = None) -> Path:
    """Return the store path selected by argument, environment, or default.

    ``config_dir`` wins over ``DDIR_CONFIG_DIR``; an empty environment value
    is treated as unset.
    """
    if config_dir is not None:
        return Path(config_dir).expanduser() / STORE_FILENAME
    env_dir = os.environ.get(CONFIG_DIR_ENV, "").strip()
    if env_dir:
        return Path(env_dir).expanduser() / STORE_FILENAME
    return DEFAULT_STORE_PATH


def store_path(config_dir: str | os.PathLike[str] | None = None) -> Path:
    """Return the store path to read, falling back to the legacy location when needed.

    The legacy file is only considered while the default location is in
    effect and has no store of its own yet. Saving back to the returned path
    keeps a legacy install working in place.
    """
    path = configured_store_path(config_dir)
    if path.exists():
        return path
    if path == DEFAULT_STORE_PATH and LEGACY_STORE_PATH.exists():
        logger.debug("using legacy store at %s", LEGACY_STORE_PATH)
        return LEGACY_STORE_PATH
    return path


def log_level(verbose: bool = False) -> int:
    """Resolve the logging level from ``--verbose`` and ``DDIR_LOG_LEVEL``."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
