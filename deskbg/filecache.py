"""A small cache of images, thumbnails and slide shows keyed by file name."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = ["FileKind", "FileCache"]

CACHE_SIZE = 4


class FileKind(Enum):
    """What a cached file was loaded as."""

    IMAGE = "image"
    SLIDESHOW = "slideshow"
    THUMBNAIL = "thumbnail"


@dataclass
class _Entry:
    kind: FileKind
    filename: str
    value: Any


@dataclass
class FileCache:
    """Most recently added entries first; adding trims the oldest.

    After an addition fewer than ``size`` entries remain.
    """

    size: int = CACHE_SIZE
    _entries: list[_Entry] = field(default_factory=list, repr=False)

    def lookup(self, kind: FileKind, filename: str) -> Any | None:
        """Return the value cached for ``filename`` as ``kind``, or None."""
        for entry in self._entries:
            if entry.kind is kind and entry.filename == filename:
                return entry.value
        return None

    def add(self, kind: FileKind, filename: str, value: Any) -> None:
        """Cache ``value``; raises ValueError if the entry already exists."""
        if any(e.kind is kind and e.filename == filename for e in self._entries):
            raise ValueError(f"{filename!r} is already cached as {kind.value}")
        self._entries.insert(0, _Entry(kind, filename, value))
        while len(self._entries) >= self.size and len(self._entries) > 1:
            self._entries.pop()

    def remove_kind(self, kind: FileKind) -> None:
        """Drop every entry of ``kind``."""
        self._entries = [e for e in self._entries if e.kind is not kind]

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)