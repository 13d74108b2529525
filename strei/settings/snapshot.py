"""Immutable in-memory view of the configuration file.

A :class:`Snapshot` maps section names to read-only key/value sections. It is
never modified after construction: updates go through :meth:`Snapshot.with_value`,
which returns a new snapshot and leaves the old one valid for anyone still
holding it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterator, Optional

from .errors import DuplicateKeyError, DuplicateSectionError, OrphanKeyError

Section = Mapping[str, str]


class Snapshot(Mapping):
    """Read-only ``section -> (key -> value)`` mapping.

    Iteration follows insertion order, which for parsed text is document order.
    """

    __slots__ = ("_sections",)

    def __init__(self, sections: Optional[Mapping[str, Mapping[str, str]]] = None) -> None:
        # Copy everything: callers keep no handle on our internals.
        self._sections: Dict[str, Section] = {
            name: MappingProxyType(dict(entries)) for name, entries in (sections or {}).items()
        }

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, str]]) -> "Snapshot":
        return cls(data)

    def __getitem__(self, section: str) -> Section:
        return self._sections[section]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"Snapshot({self.to_dict()!r})"

    @property
    def section_count(self) -> int:
        return len(self._sections)

    @property
    def key_count(self) -> int:
        return sum(len(entries) for entries in self._sections.values())

    def value(self, section: str, key: str) -> Optional[str]:
        entries = self._sections.get(section)
        if entries is None:
            return None
        return entries.get(key)

    def with_value(self, section: str, key: str, value: str) -> "Snapshot":
        """Return a copy with ``section/key`` set to ``value``.

        Missing sections and keys are created; checking whether that is
        allowed is the store's job.
        """
        data = {name: dict(entries) for name, entries in self._sections.items()}
        data.setdefault(section, {})[key] = value
        return Snapshot(data)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {name: dict(entries) for name, entries in self._sections.items()}


class SnapshotBuilder:
    """Assemble a :class:`Snapshot` section by section.

    Enforces the structural invariants: section names are unique within the
    snapshot and keys are unique within a section. Any violation raises and
    the partially built data is discarded with the builder.
    """

    def __init__(self) -> None:
        self._done: Dict[str, Dict[str, str]] = {}
        self._name: Optional[str] = None
        self._entries: Dict[str, str] = {}
        self._opened_at: Optional[int] = None

    @property
    def current_section(self) -> Optional[str]:
        return self._name

    def open_section(self, name: str, lineno: Optional[int] = None) -> None:
        self._commit()
        self._name = name
        self._entries = {}
        self._opened_at = lineno

    def add(self, key: str, value: str, lineno: Optional[int] = None) -> None:
        if self._name is None:
            raise OrphanKeyError(key, lineno)
        if key in self._entries:
            raise DuplicateKeyError(self._name, key, lineno)
        self._entries[key] = value

    def build(self) -> Snapshot:
        self._commit()
        return Snapshot(self._done)

    def _commit(self) -> None:
        if self._name is None:
            return
        if self._name in self._done:
            raise DuplicateSectionError(self._name, self._opened_at)
        self._done[self._name] = self._entries
        self._name = None
        self._entries = {}
        self._opened_at = None


__all__ = ["Section", "Snapshot", "SnapshotBuilder"]
