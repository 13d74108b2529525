"""Startup and menu actions of the tray app (no GUI code).

This module holds the non-UI logic the tray shell invokes. Keep it free of
toolkit imports so it can be unit-tested headlessly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .home import ensure_home
from .settings import ConfigStore, PlatformDefaults
from .settings.defaults import GENERAL, INITIAL_DIR, PLAYER_DIR, program_files_dir

log = logging.getLogger(__name__)


def open_config(
    home: Optional[Path] = None,
    *,
    defaults: Optional[Callable[[], PlatformDefaults]] = None,
) -> ConfigStore:
    """Create the home directory if needed and read the configuration.

    Errors are not handled here: the shell reports them to the user and
    exits.
    """
    layout = ensure_home(home)
    store = ConfigStore(filename=layout.config_path.name, home=layout.root)
    if defaults is not None:
        store.defaults = defaults

    log.info("Read configuration")
    store.read()
    log.info("    %d sections, %d keys read", store.section_count, store.key_count)
    return store


def player_dir(store: ConfigStore) -> Path:
    """Directory to load the player libraries from."""
    value = store.get(GENERAL, PLAYER_DIR)
    return Path(value) if value else program_files_dir()


def initial_dir(store: ConfigStore) -> Optional[Path]:
    value = store.get(GENERAL, INITIAL_DIR)
    return Path(value) if value else None


def change_initial_dir(store: ConfigStore, directory: str | Path) -> None:
    log.info("Initial directory set to '%s'", directory)
    store.set(GENERAL, INITIAL_DIR, str(directory))


def change_player_dir(store: ConfigStore, directory: str | Path) -> None:
    log.info("Player directory set to '%s'", directory)
    store.set(GENERAL, PLAYER_DIR, str(directory))
