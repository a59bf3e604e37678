"""Slide show XML documents: parsing and choosing the best image size."""

from __future__ import annotations

import math
import re
import time
import xml.parsers.expat
from dataclasses import dataclass, field

__all__ = [
    "FileSize",
    "Slide",
    "ParsedSlideShow",
    "SlideShowFormatError",
    "find_best_size",
    "parse_slideshow",
]

# Duration given to the only slide of a one-slide show; means "never changes".
SINGLE_SLIDE_DURATION = float(0xFFFFFFFF)

_ASCII_SPACE = " \t\n\v\f\r"
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_START_FIELDS = {
    ("background", "starttime", "year"): "year",
    ("background", "starttime", "month"): "month",
    ("background", "starttime", "day"): "day",
    ("background", "starttime", "hour"): "hour",
    ("background", "starttime", "minute"): "minute",
    ("background", "starttime", "second"): "second",
}
_DURATION_PATHS = {
    ("background", "static", "duration"),
    ("background", "transition", "duration"),
}
_FIRST_FILE_PATHS = {
    ("background", "static", "file"),
    ("background", "transition", "from"),
}
_FIRST_SIZE_PATHS = {
    ("background", "static", "file", "size"),
    ("background", "transition", "from", "size"),
}
_SECOND_FILE_PATH = ("background", "transition", "to")
_SECOND_SIZE_PATH = ("background", "transition", "to", "size")


class SlideShowFormatError(ValueError):
    """The document is not a well-formed slide show."""


@dataclass
class FileSize:
    """One image of a slide, with the size it was made for (-1 if unknown)."""

    width: int = -1
    height: int = -1
    file: str | None = None


@dataclass
class Slide:
    """A static slide or a transition between two images.

    The image lists hold the most recently declared entry first.
    """

    duration: float = 0.0
    fixed: bool = False
    file1: list[FileSize] = field(default_factory=list)
    file2: list[FileSize] = field(default_factory=list)


@dataclass
class ParsedSlideShow:
    """The content of a slide show document."""

    start_time: float
    total_duration: float
    slides: list[Slide]
    has_multiple_sizes: bool


def _strtol(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _strtod(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _ratio(width: float, height: float) -> float:
    if height == 0:
        if width == 0 or math.isnan(width):
            return math.nan
        return math.copysign(math.inf, width)
    return width / height


def find_best_size(sizes: list[FileSize], width: int, height: int) -> str | None:
    """Return the file whose aspect ratio best matches ``width`` x ``height``.

    Images at least as large as the target are tried first; ties in
    aspect ratio go to the image whose width is closest to ``width``.
    """
    target = _ratio(width, height)
    distance = 10000.0
    best: FileSize | None = None
    for larger_only in (True, False):
        for size in sizes:
            if larger_only and (size.width < width or size.height < height):
                continue
            d = abs(target - _ratio(size.width, size.height))
            if d < distance:
                distance = d
                best = size
            elif d == distance and best is not None:
                if abs(size.width - width) < abs(best.width - width):
                    best = size
        if best is not None:
            break
    if best is None:
        raise ValueError("no image size to choose from")
    return best.file


class _Parser:
    def __init__(self) -> None:
        local = time.localtime(0)
        self.start = {
            "year": local.tm_year,
            "month": local.tm_mon,
            "day": local.tm_mday,
            "hour": local.tm_hour,
            "minute": local.tm_min,
            "second": local.tm_sec,
        }
        self.slides: list[Slide] = []
        self.stack: list[str] = []
        self.total_duration = 0.0
        self.has_multiple_sizes = False

    def start_element(self, name: str, attrs: dict[str, str]) -> None:
        if name in ("static", "transition"):
            self.slides.append(Slide(fixed=name == "static"))
        elif name == "size":
            if not self.slides:
                raise SlideShowFormatError("size element outside of a slide")
            slide = self.slides[-1]
            size = FileSize(width=0, height=0)
            if "width" in attrs:
                size.width = _strtol(attrs["width"])
            if "height" in attrs:
                size.height = _strtol(attrs["height"])
            parent = self.stack[-1] if self.stack else None
            if parent in ("file", "from"):
                slide.file1.insert(0, size)
            elif parent == "to":
                slide.file2.insert(0, size)
        self.stack.append(name)

    def end_element(self, name: str) -> None:
        self.stack.pop()

    def text(self, data: str) -> None:
        path = tuple(self.stack)
        slide = self.slides[-1] if self.slides else None
        if path in _START_FIELDS:
            self.start[_START_FIELDS[path]] = _strtol(data)
        elif path in _DURATION_PATHS:
            assert slide is not None
            slide.duration = _strtod(data)
            self.total_duration += slide.duration
        elif path in _FIRST_FILE_PATHS:
            assert slide is not None
            if data.strip(_ASCII_SPACE):
                slide.file1.insert(0, FileSize(file=data))
                if len(slide.file1) > 1:
                    self.has_multiple_sizes = True
        elif path in _FIRST_SIZE_PATHS:
            assert slide is not None
            slide.file1[0].file = data
            if len(slide.file1) > 1:
                self.has_multiple_sizes = True
        elif path == _SECOND_FILE_PATH:
            assert slide is not None
            if data.strip(_ASCII_SPACE):
                slide.file2.insert(0, FileSize(file=data))
                if len(slide.file2) > 1:
                    self.has_multiple_sizes = True
        elif path == _SECOND_SIZE_PATH:
            assert slide is not None
            slide.file2[0].file = data
            if len(slide.file2) > 1:
                self.has_multiple_sizes = True

    def start_time(self) -> float:
        s = self.start
        try:
            return float(
                time.mktime(
                    (s["year"], s["month"], s["day"], s["hour"], s["minute"],
                     s["second"], 0, 0, -1)
                )
            )
        except (OverflowError, ValueError) as exc:
            raise SlideShowFormatError(f"invalid start time: {exc}") from exc


def parse_slideshow(text: str | bytes) -> ParsedSlideShow:
    """Parse a slide show document.

    Raises :class:`SlideShowFormatError` if the document is malformed or
    holds no slides. A show with one slide gets an effectively infinite
    duration.
    """
    state = _Parser()
    parser = xml.parsers.expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = state.start_element
    parser.EndElementHandler = state.end_element
    parser.CharacterDataHandler = state.text
    try:
        parser.Parse(text, True)
    except xml.parsers.expat.ExpatError as exc:
        raise SlideShowFormatError(str(exc)) from exc

    start_time = state.start_time()
    if not state.slides:
        raise SlideShowFormatError("file is not a slide show since it has no slides")
    total_duration = state.total_duration
    if len(state.slides) == 1:
        state.slides[0].duration = SINGLE_SLIDE_DURATION
        total_duration = SINGLE_SLIDE_DURATION
    return ParsedSlideShow(
        start_time=start_time,
        total_duration=total_duration,
        slides=state.slides,
        has_multiple_sizes=state.has_multiple_sizes,
    )