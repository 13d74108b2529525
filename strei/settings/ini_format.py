"""Text codec for the configuration file.

The format is deliberately small::

    [section]
    key=value

Lines are trimmed before they are classified. A line that starts with ``[``
and ends with ``]`` opens a section; otherwise the first ``=`` splits a key
from its value (the value keeps any whitespace after the ``=``). Everything
else, blank lines included, is skipped on read and never produced on write.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from .snapshot import Snapshot, SnapshotBuilder

log = logging.getLogger(__name__)


# The only characters that end a line. Other Unicode separators (\x0b, \x85,
# \u2028, ...) are ordinary value characters.
LINE_BREAKS = ("\r", "\n")


def has_line_break(text: str) -> bool:
    return any(ch in text for ch in LINE_BREAKS)


def _split_lines(text: str) -> List[str]:
    # Normalize CR to NL (including CRLF).
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _is_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def parse(text: str) -> Snapshot:
    """Parse configuration text into a :class:`Snapshot`.

    Raises a :class:`~strei.settings.errors.ConfigFormatError` subclass on a
    duplicate section, a duplicate key within a section, or a key that
    appears before the first section header. Nothing is returned in that case.
    """
    builder = SnapshotBuilder()
    for lineno, raw in enumerate(_split_lines(text), start=1):
        line = raw.strip()
        if _is_header(line):
            name = line[1:-1].strip()
            log.debug("   [%s]", name)
            builder.open_section(name, lineno)
            continue

        eq = line.find("=")
        if eq != -1:
            key, value = line[:eq], line[eq + 1:]
            log.debug("        %r = %r", key, value)
            builder.add(key, value, lineno)
        elif line:
            log.debug("        **IGNORED line %d: %r", lineno, line)

    return builder.build()


def iter_lines(snapshot: Snapshot) -> Iterator[str]:
    for name, entries in snapshot.items():
        yield f"[{name}]"
        for key, value in entries.items():
            yield f"{key}={value}"


def serialize(snapshot: Snapshot) -> str:
    lines = list(iter_lines(snapshot))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


__all__ = ["LINE_BREAKS", "has_line_break", "iter_lines", "parse", "serialize"]
