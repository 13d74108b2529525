"""Persistent settings for strei.

Settings live in a single INI file under the user's home folder
(``~/.strei/config.ini``). The store keeps an immutable in-memory snapshot
of that file and rewrites the file as a whole on every change.

Design goals:
  * In-memory and on-disk state derived the same way (the file is re-read
    right after it is first created)
  * One previous generation kept as ``config.ini.bak``
  * No silent schema drift: existing files never gain sections or keys
"""

from .defaults import PlatformDefaults, platform_defaults
from .errors import (
    ConfigError,
    ConfigFormatError,
    DuplicateKeyError,
    DuplicateSectionError,
    InconsistentStateError,
    MissingKeyError,
    MissingSectionError,
    NotReadError,
    OrphanKeyError,
)
from .ini_format import parse, serialize
from .snapshot import Snapshot
from .store import ConfigStore

__all__ = [
    "ConfigError",
    "ConfigFormatError",
    "ConfigStore",
    "DuplicateKeyError",
    "DuplicateSectionError",
    "InconsistentStateError",
    "MissingKeyError",
    "MissingSectionError",
    "NotReadError",
    "OrphanKeyError",
    "PlatformDefaults",
    "Snapshot",
    "parse",
    "platform_defaults",
    "serialize",
]
