import pytest
from PIL import Image

from deskbg.colors import Color, create_gradient
from deskbg.imageops import (
    average_value,
    blend,
    blend_images,
    clip_to_fit,
    draw_gradient,
    fit_factor,
    scale_to_fit,
    scale_to_min,
    tile,
)


def solid(size, color, mode="RGB"):
    return Image.new(mode, size, color)


def test_average_value_of_solid_rgb():
    color = average_value(solid((4, 3), (255, 0, 255)))
    assert color == Color(1.0, 0.0, 1.0, 1.0)


def test_average_value_opaque_rgba_matches_rgb():
    rgb = solid((5, 5), (10, 200, 30))
    rgba = solid((5, 5), (10, 200, 30, 255), "RGBA")
    assert average_value(rgba) == pytest.approx(average_value(rgb))


def test_average_value_transparent_is_zero_alpha():
    color = average_value(solid((3, 3), (255, 255, 255, 0), "RGBA"))
    assert color.alpha == 0.0
    assert color.red == 0.0


def test_average_value_empty_raises():
    with pytest.raises(ValueError):
        average_value(Image.new("RGB", (0, 0)))


def test_fit_factor_identity():
    assert fit_factor(640, 480, 640, 480) == 1.0


def test_fit_factor_picks_tighter_dimension():
    assert fit_factor(100, 50, 300, 100) == fit_factor(100, 50, 200, 100)


def test_scale_to_fit_keeps_within_bounds():
    out = scale_to_fit(solid((100, 50), (1, 2, 3)), 200, 200)
    assert out.size == (200, 100)


def test_scale_to_fit_shrinks():
    out = scale_to_fit(solid((400, 100), (1, 2, 3)), 100, 100)
    assert out.width == 100
    assert out.height <= 100


def test_scale_to_min_exact_size_and_color():
    out = scale_to_min(solid((100, 50), (9, 99, 199)), 60, 60)
    assert out.size == (60, 60)
    assert out.getpixel((30, 30)) == (9, 99, 199)


def test_clip_to_fit_small_image_unchanged():
    image = solid((10, 10), (1, 1, 1))
    assert clip_to_fit(image, 20, 20) is image


def test_clip_to_fit_crops_centre():
    image = solid((10, 10), (0, 0, 0))
    image.putpixel((5, 5), (255, 255, 255))
    out = clip_to_fit(image, 2, 2)
    assert out.size == (2, 2)
    assert out.getpixel((1, 1)) == (255, 255, 255)


def test_draw_gradient_horizontal_rows_match_gradient():
    primary, secondary = Color(1, 0, 0), Color(0, 0, 1)
    image = solid((8, 4), (0, 0, 0))
    draw_gradient(image, True, primary, secondary, (0, 0, 8, 4))
    gradient = create_gradient(primary, secondary, 8)
    for y in range(4):
        row = b"".join(bytes(image.getpixel((x, y))) for x in range(8))
        assert row == gradient


def test_draw_gradient_vertical_columns_match_gradient():
    primary, secondary = Color(0, 1, 0), Color(1, 1, 1)
    image = solid((3, 6), (0, 0, 0))
    draw_gradient(image, False, primary, secondary, (0, 0, 3, 6))
    gradient = create_gradient(primary, secondary, 6)
    for y in range(6):
        for x in range(3):
            assert bytes(image.getpixel((x, y))) == gradient[3 * y:3 * y + 3]


def test_draw_gradient_respects_rect():
    image = solid((6, 6), (7, 7, 7))
    draw_gradient(image, True, Color(1, 1, 1), Color(1, 1, 1), (2, 2, 2, 2))
    assert image.getpixel((0, 0)) == (7, 7, 7)
    assert image.getpixel((3, 3)) == (255, 255, 255)


def test_blend_opaque_replaces():
    dest = solid((4, 4), (0, 0, 0))
    blend(solid((2, 2), (50, 60, 70)), dest, 0, 0, -1, -1, 1, 1, 1.0)
    assert dest.getpixel((1, 1)) == (50, 60, 70)
    assert dest.getpixel((0, 0)) == (0, 0, 0)


def test_blend_zero_alpha_leaves_dest():
    dest = solid((4, 4), (5, 5, 5))
    blend(solid((4, 4), (200, 200, 200)), dest, 0, 0, -1, -1, 0, 0, 0.0)
    assert dest.getpixel((2, 2)) == (5, 5, 5)


def test_blend_clips_past_edges():
    dest = solid((4, 4), (0, 0, 0))
    blend(solid((4, 4), (90, 90, 90)), dest, 0, 0, -1, -1, 2, 2, 1.0)
    assert dest.getpixel((3, 3)) == (90, 90, 90)
    assert dest.getpixel((1, 1)) == (0, 0, 0)


def test_blend_negative_offset_uses_source_interior():
    src = solid((4, 4), (0, 0, 0))
    src.putpixel((2, 2), (255, 0, 0))
    dest = solid((2, 2), (9, 9, 9))
    blend(src, dest, 0, 0, -1, -1, -1, -1, 1.0)
    assert dest.getpixel((1, 1)) == (255, 0, 0)


def test_tile_covers_destination():
    dest = solid((7, 5), (0, 0, 0))
    tile(solid((3, 2), (11, 22, 33)), dest)
    assert set(dest.getdata()) == {(11, 22, 33)}


def test_blend_images_extremes():
    first = solid((4, 4), (10, 10, 10))
    second = solid((4, 4), (240, 240, 240))
    assert blend_images(first, second, 0.0).tobytes() == first.tobytes()
    assert blend_images(first, second, 1.0).tobytes() == second.tobytes()


def test_blend_images_rescales_second():
    first = solid((6, 3), (0, 0, 0))
    out = blend_images(first, solid((2, 2), (100, 100, 100)), 1.0)
    assert out.size == first.size
    assert out.getpixel((5, 2)) == (100, 100, 100)
    assert first.getpixel((0, 0)) == (0, 0, 0)