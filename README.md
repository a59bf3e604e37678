# deskbg

Building blocks for desktop backgrounds: colour parsing and gradients,
compositing operations on Pillow images, XML wallpaper slide shows, a small
in-memory file cache and a one-shot wall-clock timer.

## Installation

```
pip install deskbg
```

Images are handled with Pillow.

## Colours and gradients

```python
from deskbg.colors import Color, parse_color, create_gradient

blue = parse_color("#204a87")        # also #rgb, rgb(...), rgba(...), names
print(blue.to_hex())                 # "#204a87"
row = create_gradient(blue, parse_color("black"), 640)  # 640 RGB triplets as bytes
```

`parse_color` falls back to opaque black for `None` or text it cannot read.

## Image operations

`deskbg.imageops` works on Pillow images:

- `average_value(image)` – mean colour, alpha-weighted for RGBA images.
- `fit_factor(...)`, `scale_to_fit(...)` – scale keeping the aspect ratio to fit inside bounds.
- `scale_to_min(...)` – scale to cover the bounds, then crop the centre to exactly that size.
- `clip_to_fit(...)` – crop the centre so the image is no larger than the bounds.
- `draw_gradient(image, horizontal, primary, secondary, rect)` – fill a rectangle `(x, y, width, height)`.
- `blend(...)` – composite a region of one image onto another with an overall opacity.
- `tile(src, dest)` – cover `dest` with copies of `src`.
- `blend_images(first, second, alpha)` – a new image with `second` laid over `first`.

```python
from PIL import Image
from deskbg.colors import parse_color
from deskbg.imageops import draw_gradient, blend

canvas = Image.new("RGB", (800, 600))
draw_gradient(canvas, False, parse_color("navy"), parse_color("black"), (0, 0, 800, 600))
logo = Image.open("logo.png")
blend(logo, canvas, 0, 0, -1, -1, 100, 100, 0.8)
```

## Slide shows

A slide show is an XML file with a `<background>` root, an optional
`<starttime>`, and a series of `<static>` and `<transition>` elements, each
with a `<duration>` in seconds:

```python
from deskbg.slideshow import SlideShow

show = SlideShow("/usr/share/backgrounds/day.xml")
show.load()                          # OSError or SlideShowFormatError on failure
info = show.current_slide(1920, 1080)
print(info.file1, info.file2, info.progress, info.is_fixed)
print(show.num_slides, show.total_duration, show.has_multiple_sizes)
```

`SlideShow.slide(frame_number, width, height)` returns the n-th static slide
or `None`; `await show.load_async()` reads the file off the event loop;
`read_slideshow_file(path)` returns a loaded show or `None`.

For parsing text directly, `deskbg.slides.parse_slideshow` returns a
`ParsedSlideShow`, and `find_best_size` picks, among a slide's `<size>`
variants, the file whose aspect ratio best matches a requested size.

## File cache

`deskbg.filecache.FileCache` keeps a few values keyed by `FileKind`
(`IMAGE`, `SLIDESHOW`, `THUMBNAIL`) and file name, newest first, dropping the
oldest when it fills: `lookup`, `add`, `remove_kind`, `clear`, `len()`.

## Wall-clock timer

`deskbg.datetime_source.DateTimeSource(now, expiry, cancel_on_set, callback)`
fires once when wall-clock time reaches `expiry`. Drive it from your own loop
with `prepare()` (returns `(ready, timeout_ms)`), `check()` and `dispatch()`;
times passed to these are in microseconds.

## What this package does not do

There is no single object that holds a background's settings and renders a
finished wallpaper from them: placing an image by style (centred, tiled,
zoomed and so on) over the colour layer, thumbnailing, caching scaled
wallpapers on disk and reading or writing settings are left to the caller,
built from the pieces above.

## Running the tests

```
pip install deskbg[test]
pytest
```