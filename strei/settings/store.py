from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from ..home import CONFIG_FILENAME, strei_home
from . import ini_format
from .defaults import PlatformDefaults, default_sections, platform_defaults
from .errors import (
    InconsistentStateError,
    MissingKeyError,
    MissingSectionError,
    NotReadError,
)
from .snapshot import Snapshot

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(eq=False)
class ConfigStore:
    """Keep an immutable snapshot in sync with an INI file on disk.

    The file is always read and written as a whole. ``read`` loads it (creating
    it with defaults on first use), ``get`` answers from memory and ``set``
    replaces the snapshot and rewrites the file, moving the previous file to
    ``<name>.bak``.

    Outside of file creation the store never adds sections or keys: the set
    of keys is fixed by whatever the file contains.

    Not thread-safe; drive it from a single thread.
    """

    filename: str = CONFIG_FILENAME
    home: Path = field(default_factory=strei_home)
    defaults: Callable[[], PlatformDefaults] = platform_defaults
    _snapshot: Optional[Snapshot] = field(default=None, init=False, repr=False)

    def path(self) -> Path:
        return Path(self.home) / self.filename

    def backup_path(self) -> Path:
        path = self.path()
        return path.with_name(path.name + ".bak")

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    @property
    def section_count(self) -> int:
        return self._require_snapshot().section_count

    @property
    def key_count(self) -> int:
        return self._require_snapshot().key_count

    def _require_snapshot(self) -> Snapshot:
        if self._snapshot is None:
            raise NotReadError()
        return self._snapshot

    # Reading ---------------------------------------------------------------
    def read(self) -> None:
        """(Re)load the file into memory, creating it first if missing.

        The directory is expected to exist. On any error the current snapshot
        is kept as it was.
        """
        self._snapshot = self._read_internal()

    def _read_internal(self) -> Snapshot:
        path = self.path()
        log.debug("Reading configuration from %s", path)
        if not path.exists():
            log.info("No configuration file at %s, creating one", path)
            seed = Snapshot.from_dict(default_sections(self.defaults()))
            self.write_full(seed, is_creation=True)

        snapshot = ini_format.parse(path.read_text(encoding="utf-8"))
        log.info("Configuration read: %d sections, %d keys", snapshot.section_count, snapshot.key_count)
        return snapshot

    def get(
        self, section: str, key: str, parse: Optional[Callable[[str], T]] = None
    ) -> Optional[Union[str, T]]:
        """Return the value of ``section/key`` or ``None`` when it is absent.

        With ``parse``, a present value is converted by calling ``parse(value)``.
        """
        snapshot = self._require_snapshot()
        if section not in snapshot:
            log.debug("Configuration section not found: %r", section)
            return None
        value = snapshot[section].get(key)
        if value is None:
            log.debug("Configuration key not found: %r in %r", key, section)
            return None
        if parse is not None:
            return parse(value)
        return value

    # Writing ---------------------------------------------------------------
    def set(
        self,
        section: str,
        key: str,
        value: str,
        *,
        defer_write: bool = False,
        file_creation: bool = False,
    ) -> None:
        """Set ``section/key`` to ``value`` and persist it.

        The section and key must already exist unless ``file_creation`` is
        set, which is only meant for seeding a file that doesn't exist yet.
        With ``defer_write`` only the in-memory snapshot changes and the caller
        is expected to call :meth:`write_full` later. Setting the current value
        again does nothing.

        Values must survive a reload unchanged, so line breaks and trailing
        whitespace (which the whole-line trim on read would drop) are rejected
        with ``ValueError``.
        """
        log.debug(
            "set(): %s/%s to %r, defer write: %s, file creation: %s",
            section, key, value, defer_write, file_creation,
        )
        if ini_format.has_line_break(value):
            raise ValueError(f"Value for '{section}/{key}' must not contain line breaks")
        if value != value.rstrip():
            raise ValueError(f"Value for '{section}/{key}' must not end with whitespace")

        current = self._snapshot
        if current is None:
            if not file_creation:
                raise NotReadError()
            current = Snapshot.empty()

        if section not in current:
            if not file_creation:
                raise MissingSectionError(section)
        elif key not in current[section]:
            if not file_creation:
                raise MissingKeyError(section, key)
        elif current[section][key] == value:
            log.debug("    No change performed.")
            return

        updated = current.with_value(section, key, value)
        if not defer_write:
            self.write_full(updated)
        self._snapshot = updated

    def write_full(self, snapshot: Optional[Snapshot] = None, *, is_creation: bool = False) -> None:
        """Write a whole snapshot (the current one by default) to the file.

        ``is_creation`` must be true exactly when the file does not exist yet.
        On a normal update the old backup is deleted and the live file is
        renamed to ``<name>.bak`` before the new file is written, so the live
        path is briefly absent.
        """
        log.debug("write_full(), is_creation: %s", is_creation)
        if snapshot is None:
            snapshot = self._require_snapshot()

        path = self.path()
        if is_creation == path.exists():
            raise InconsistentStateError(
                f"Configuration file {'already exists' if is_creation else 'is missing'} "
                f"({path}); incorrect file creation flag"
            )

        if not is_creation:
            bak = self.backup_path()
            if bak.exists():
                log.debug("    Remove %s", bak)
                bak.unlink()
            log.debug("    Move %s to %s", path, bak)
            path.rename(bak)

        text = ini_format.serialize(snapshot)
        path.write_text(text, encoding="utf-8")
        log.debug("    %d lines written to %s", text.count("\n"), path)


__all__ = ["ConfigStore"]
