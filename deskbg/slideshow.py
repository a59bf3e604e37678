"""Slide show files: loading them and finding the slide shown at a given time."""

from __future__ import annotations

import asyncio
import math
import time
from dataclasses import dataclass
from pathlib import Path

from .slides import (
    FileSize,
    Slide,
    SlideShowFormatError,
    find_best_size,
    parse_slideshow,
)

__all__ = ["SlideInfo", "SlideShow", "read_slideshow_file"]


@dataclass(frozen=True)
class SlideInfo:
    """What a slide shows and how far along it is."""

    progress: float
    duration: float
    is_fixed: bool
    file1: str | None
    file2: str | None


def _best(sizes: list[FileSize], width: int, height: int) -> str | None:
    return find_best_size(sizes, width, height) if sizes else None


class SlideShow:
    """A background slide show read from an XML file."""

    def __init__(self, filename: str | Path) -> None:
        self.file = Path(filename)
        self._start_time = 0.0
        self._total_duration = 0.0
        self._slides: list[Slide] = []
        self._has_multiple_sizes = False

    @property
    def start_time(self) -> float:
        """The moment the show starts, as a Unix timestamp."""
        return self._start_time

    @property
    def total_duration(self) -> float:
        """The length of one run through all slides, in seconds."""
        return self._total_duration

    @property
    def has_multiple_sizes(self) -> bool:
        """Whether some slide offers images for several screen sizes."""
        return self._has_multiple_sizes

    @property
    def num_slides(self) -> int:
        """The number of slides, static and transitions alike."""
        return len(self._slides)

    def _apply(self, contents: bytes) -> None:
        parsed = parse_slideshow(contents)
        self._start_time = parsed.start_time
        self._total_duration = parsed.total_duration
        self._slides = parsed.slides
        self._has_multiple_sizes = parsed.has_multiple_sizes

    def load(self) -> None:
        """Read and parse the file.

        Raises :class:`OSError` if the file cannot be read and
        :class:`SlideShowFormatError` if it is not a slide show.
        """
        self._apply(self.file.read_bytes())

    async def load_async(self) -> None:
        """Read and parse the file without blocking the event loop."""
        contents = await asyncio.to_thread(self.file.read_bytes)
        self._apply(contents)

    def _delta(self, now: float | None) -> float:
        if now is None:
            now = time.time()
        try:
            delta = math.fmod(now - self._start_time, self._total_duration)
        except ValueError:
            return math.nan
        if delta < 0:
            delta += self._total_duration
        return delta

    def current_slide(
        self, width: int, height: int, now: float | None = None
    ) -> SlideInfo:
        """Return the slide shown at ``now`` (default: the current time)."""
        delta = self._delta(now)
        elapsed = 0.0
        for slide in self._slides:
            if elapsed + slide.duration > delta:
                return SlideInfo(
                    progress=(delta - elapsed) / slide.duration,
                    duration=slide.duration,
                    is_fixed=slide.fixed,
                    file1=_best(slide.file1, width, height),
                    file2=_best(slide.file2, width, height),
                )
            elapsed += slide.duration
        raise RuntimeError("no slide is current; the slide show is not loaded")

    def slide(
        self,
        frame_number: int,
        width: int,
        height: int,
        now: float | None = None,
    ) -> SlideInfo | None:
        """Return the ``frame_number``-th static slide, or None if there is none."""
        delta = self._delta(now)
        elapsed = 0.0
        index = 0
        found: Slide | None = None
        for candidate in self._slides:
            if not candidate.fixed:
                elapsed += candidate.duration
                continue
            if index == frame_number:
                found = candidate
                break
            index += 1
            elapsed += candidate.duration
        if found is None:
            return None

        if elapsed + found.duration > delta:
            progress = (delta - elapsed) / found.duration
        else:
            progress = 0.0
        return SlideInfo(
            progress=progress,
            duration=found.duration,
            is_fixed=found.fixed,
            file1=_best(found.file1, width, height),
            file2=_best(found.file2, width, height),
        )


def read_slideshow_file(filename: str | Path) -> SlideShow | None:
    """Load a slide show, returning None if the file is unreadable or invalid."""
    show = SlideShow(filename)
    try:
        show.load()
    except (OSError, SlideShowFormatError):
        return None
    return show