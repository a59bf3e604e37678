"""Pixel operations on Pillow images used to compose backgrounds."""

from __future__ import annotations

import math
import operator

from PIL import Image

from .colors import Color, create_gradient

__all__ = [
    "average_value",
    "fit_factor",
    "scale_to_fit",
    "scale_to_min",
    "clip_to_fit",
    "draw_gradient",
    "blend",
    "tile",
    "blend_images",
]

Rect = tuple[int, int, int, int]


def _half_trunc(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return int(value / 2)


def _round_size(length: int, factor: float) -> int:
    return max(1, math.floor(length * factor + 0.5))


def average_value(image: Image.Image) -> Color:
    """Return the mean colour of ``image``, weighted by alpha if it has any."""
    width, height = image.size
    count = width * height
    if count == 0:
        raise ValueError("cannot average an empty image")

    if image.mode == "RGBA":
        data = image.tobytes()
        alphas = data[3::4]
        a_total = sum(alphas)
        r_total = sum(map(operator.mul, data[0::4], alphas))
        g_total = sum(map(operator.mul, data[1::4], alphas))
        b_total = sum(map(operator.mul, data[2::4], alphas))
        alpha = a_total / (count * 0xFF)
        scale = count * 0xFF * 0xFF
        return Color(r_total / scale, g_total / scale, b_total / scale, alpha)

    data = image.convert("RGB").tobytes()
    scale = count * 0xFF
    return Color(
        sum(data[0::3]) / scale,
        sum(data[1::3]) / scale,
        sum(data[2::3]) / scale,
        1.0,
    )


def fit_factor(from_width: int, from_height: int, to_width: int, to_height: int) -> float:
    """Return the largest factor that fits the first size inside the second."""
    return min(to_width / from_width, to_height / from_height)


def scale_to_fit(image: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Scale ``image`` keeping its aspect ratio so it fits inside the bounds."""
    factor = fit_factor(image.width, image.height, max_width, max_height)
    size = (_round_size(image.width, factor), _round_size(image.height, factor))
    return image.resize(size, Image.Resampling.BILINEAR)


def scale_to_min(image: Image.Image, min_width: int, min_height: int) -> Image.Image:
    """Scale ``image`` to cover the bounds, then crop it to exactly that size."""
    factor = max(min_width / image.width, min_height / image.height)
    new_width = _round_size(image.width, factor)
    new_height = _round_size(image.height, factor)
    scaled = image.resize((new_width, new_height), Image.Resampling.BILINEAR)
    left = _half_trunc(new_width - min_width)
    top = _half_trunc(new_height - min_height)
    return scaled.crop((left, top, left + min_width, top + min_height))


def clip_to_fit(image: Image.Image, max_width: int, max_height: int) -> Image.Image:
    """Crop the centre of ``image`` so it is no larger than the bounds.

    An image smaller than the bounds in both directions is returned as is.
    """
    if image.width < max_width and image.height < max_height:
        return image
    w = min(image.width, max_width)
    h = min(image.height, max_height)
    left = (image.width - w) // 2
    top = (image.height - h) // 2
    return image.crop((left, top, left + w, top + h))


def draw_gradient(
    image: Image.Image,
    horizontal: bool,
    primary: Color,
    secondary: Color,
    rect: Rect,
) -> None:
    """Fill ``rect`` of ``image`` with a gradient from ``primary`` to ``secondary``."""
    x, y, width, height = rect
    if width <= 0 or height <= 0:
        return
    if horizontal:
        row = create_gradient(primary, secondary, width)
        pixels = row * height
    else:
        column = create_gradient(primary, secondary, height)
        pixels = b"".join(column[3 * i:3 * i + 3] * width for i in range(height))
    image.paste(Image.frombytes("RGB", (width, height), pixels), (x, y))


def blend(
    src: Image.Image,
    dest: Image.Image,
    src_x: int,
    src_y: int,
    width: int,
    height: int,
    dest_x: int,
    dest_y: int,
    alpha: float,
) -> None:
    """Composite a region of ``src`` onto ``dest`` with an overall opacity.

    A negative ``width`` or ``height`` means the whole source extent.
    The region is clipped to both images.
    """
    offset_x = dest_x - src_x
    offset_y = dest_y - src_y
    if width < 0:
        width = src.width
    if height < 0:
        height = src.height
    dest_x = max(dest_x, 0)
    dest_y = max(dest_y, 0)
    if dest_x + width > dest.width:
        width = dest.width - dest_x
    if dest_y + height > dest.height:
        height = dest.height - dest_y

    left = max(dest_x, offset_x)
    top = max(dest_y, offset_y)
    right = min(dest_x + width, offset_x + src.width)
    bottom = min(dest_y + height, offset_y + src.height)
    if right <= left or bottom <= top:
        return

    overall = min(0xFF, max(0, int(alpha * 0xFF + 0.5)))
    if overall == 0:
        return

    patch = src.crop(
        (left - offset_x, top - offset_y, right - offset_x, bottom - offset_y)
    ).convert("RGBA")
    if overall < 0xFF:
        mask = patch.getchannel("A").point(lambda v: (v * overall + 127) // 255)
        patch.putalpha(mask)

    if dest.mode == "RGBA":
        dest.alpha_composite(patch, (left, top))
    else:
        dest.paste(patch.convert(dest.mode), (left, top), patch.getchannel("A"))


def tile(src: Image.Image, dest: Image.Image) -> None:
    """Cover ``dest`` with copies of ``src`` starting at the top-left corner."""
    tile_width, tile_height = src.size
    if tile_width <= 0 or tile_height <= 0:
        return
    for y in range(0, dest.height, tile_height):
        for x in range(0, dest.width, tile_width):
            blend(src, dest, 0, 0, tile_width, tile_height, x, y, 1.0)


def blend_images(first: Image.Image, second: Image.Image, alpha: float) -> Image.Image:
    """Return ``first`` with ``second`` laid over it at opacity ``alpha``.

    ``second`` is rescaled to the size of ``first`` when they differ.
    """
    result = first.copy()
    if second.size != first.size:
        second = second.resize(first.size, Image.Resampling.BILINEAR)
    blend(second, result, 0, 0, -1, -1, 0, 0, alpha)
    return result