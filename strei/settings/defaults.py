from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

GENERAL = "general"
INITIAL_DIR = "InitialDir"
PLAYER_DIR = "VlcDir"


@dataclass(frozen=True)
class PlatformDefaults:
    """Folder defaults used to seed a fresh configuration file."""

    initial_dir: str
    player_dir: str


def music_dir() -> Path:
    # Honour the XDG user-dirs variable when the session exports it.
    xdg = os.environ.get("XDG_MUSIC_DIR")
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / "Music"


def program_files_dir() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.environ.get("ProgramFiles", r"C:\Program Files"))
    if sys.platform == "darwin":
        return Path("/Applications")
    return Path("/usr/lib")


def player_install_dir() -> Path:
    """Where the VLC libraries normally live on this platform."""
    if sys.platform.startswith("win"):
        return program_files_dir() / "VideoLAN" / "VLC"
    if sys.platform == "darwin":
        return program_files_dir() / "VLC.app" / "Contents" / "MacOS"
    return program_files_dir()


def platform_defaults() -> PlatformDefaults:
    return PlatformDefaults(initial_dir=str(music_dir()), player_dir=str(player_install_dir()))


def default_sections(defaults: PlatformDefaults) -> Dict[str, Dict[str, str]]:
    return {
        GENERAL: {
            INITIAL_DIR: defaults.initial_dir,
            PLAYER_DIR: defaults.player_dir,
        }
    }


__all__ = [
    "GENERAL",
    "INITIAL_DIR",
    "PLAYER_DIR",
    "PlatformDefaults",
    "default_sections",
    "music_dir",
    "platform_defaults",
    "player_install_dir",
    "program_files_dir",
]
