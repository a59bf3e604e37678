"""Desktop background building blocks: colours, image operations, slide shows and caches."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "datetime_source",
    "filecache",
    "imageops",
    "slides",
    "slideshow",
]