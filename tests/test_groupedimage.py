import pytest
from PIL import Image

from silentlsb.groupedimage import (
    PIXEL_GROUP_SIZE,
    GroupedImage,
    PixelGroup,
    compact_image,
)
from silentlsb.ycbcr import YCbCr


def gray_image(width, height, value=None):
    img = Image.new("RGB", (width, height))
    img.putdata(
        [
            ((x * 7 + y * 13) % 256,) * 3 if value is None else (value,) * 3
            for y in range(height)
            for x in range(width)
        ]
    )
    return img


def full_group(value):
    group = PixelGroup()
    for y in range(PIXEL_GROUP_SIZE):
        for x in range(PIXEL_GROUP_SIZE):
            group.set_pixel(x, y, YCbCr(value, 128, 128))
    return group


def test_empty_group_has_no_miv():
    group = PixelGroup()
    assert group.miv == -1
    assert group.pixel(0, 0) is None


def test_set_pixel_updates_miv():
    group = PixelGroup()
    group.set_pixel(0, 0, YCbCr(100, 128, 128))
    assert group.miv == 100
    group.set_pixel(1, 0, YCbCr(50, 128, 128))
    assert group.miv == 75


def test_outside_pixels_ignored_in_miv():
    group = PixelGroup()
    group.set_pixel(0, 0, YCbCr(40, 128, 128))
    group.set_pixel(1, 0, YCbCr(-1, -1, -1))
    assert group.miv == 40


@pytest.mark.parametrize("x, y", [(8, 0), (0, 8), (-1, 0)])
def test_pixel_out_of_range(x, y):
    group = PixelGroup()
    with pytest.raises(IndexError):
        group.pixel(x, y)
    with pytest.raises(IndexError):
        group.set_pixel(x, y, YCbCr(1, 1, 1))


def test_update_miv_reaches_target():
    group = full_group(100)
    group.update_miv_to(120)
    assert abs(group.miv - 120) <= 1


def test_update_miv_clamps_luminance():
    group = full_group(250)
    group.update_miv_to(255)
    for y in range(PIXEL_GROUP_SIZE):
        for x in range(PIXEL_GROUP_SIZE):
            assert 0 <= group.pixel(x, y).y <= 255


def test_update_miv_leaves_outside_pixels():
    group = full_group(100)
    group.set_pixel(7, 7, YCbCr(-1, -1, -1))
    group.update_miv_to(90)
    assert group.pixel(7, 7).y == -1


@pytest.mark.parametrize("dest", [-1, 256])
def test_update_miv_rejects_out_of_range(dest):
    group = full_group(100)
    with pytest.raises(ValueError):
        group.update_miv_to(dest)
    assert group.miv == 100


def test_str_of_empty_group():
    text = str(PixelGroup())
    assert text.startswith("[0|null]")
    assert text.endswith("(-1)")


def test_dimensions_rounded_up():
    gi = GroupedImage(gray_image(20, 10), 5)
    assert gi.width == 3
    assert gi.height == 2
    assert gi.initial_width == 20
    assert gi.initial_height == 10


def test_exact_dimensions():
    gi = GroupedImage(gray_image(16, 8), 5)
    assert (gi.width, gi.height) == (2, 1)


def test_outside_pixels_marked():
    gi = GroupedImage(gray_image(10, 10), 5)
    group = gi.pixel_group(1, 1)
    assert group.pixel(0, 0).y != -1
    assert group.pixel(2, 0).y == -1
    assert group.pixel(0, 2).y == -1


def test_group_pixels_match_image():
    img = gray_image(13, 11)
    gi = GroupedImage(img, 5)
    for y in range(gi.height):
        for x in range(gi.width):
            group = gi.pixel_group(x, y)
            assert group.miv >= 0
            for gy in range(PIXEL_GROUP_SIZE):
                for gx in range(PIXEL_GROUP_SIZE):
                    px, py = x * PIXEL_GROUP_SIZE + gx, y * PIXEL_GROUP_SIZE + gy
                    pixel = group.pixel(gx, gy)
                    if px < gi.initial_width and py < gi.initial_height:
                        assert pixel.to_rgb() == img.getpixel((px, py))
                    else:
                        assert pixel.y == -1


def test_uniform_image_miv():
    gi = GroupedImage(gray_image(8, 8, 100), 5)
    assert gi.pixel_group(0, 0).miv == pytest.approx(100)


def test_pixel_group_out_of_range():
    gi = GroupedImage(gray_image(8, 8), 5)
    with pytest.raises(IndexError):
        gi.pixel_group(1, 0)


def test_to_image_round_trip():
    img = gray_image(21, 14)
    result = GroupedImage(img, 5).to_image()
    assert result.size == img.size
    assert list(result.getdata()) == list(img.getdata())


def test_to_image_keeps_rgba_mode():
    img = gray_image(9, 9).convert("RGBA")
    result = GroupedImage(img, 5).to_image()
    assert result.mode == "RGBA"
    assert result.getpixel((8, 8)) == img.getpixel((8, 8))


def test_to_image_reflects_changes():
    img = gray_image(8, 8, 100)
    gi = GroupedImage(img, 5)
    gi.pixel_group(0, 0).pixel(3, 3).y = 200
    result = gi.to_image()
    assert result.getpixel((3, 3)) == (200, 200, 200)
    assert result.getpixel((0, 0)) == (100, 100, 100)


def test_regroup_preserves_miv():
    img = gray_image(17, 9)
    gi = GroupedImage(img, 5)
    gi2 = GroupedImage(gi.to_image(), 5)
    for y in range(gi.height):
        for x in range(gi.width):
            assert gi.pixel_group(x, y).miv == gi2.pixel_group(x, y).miv


def test_compact_black_becomes_k():
    img = gray_image(4, 4, 0)
    compact_image(img, 5)
    assert set(img.getdata()) == {(5, 5, 5)}


@pytest.mark.parametrize("k", [5, 20])
def test_compact_range(k):
    img = gray_image(16, 16)
    compact_image(img, k)
    for r, g, b in img.getdata():
        assert k <= r <= 255 - k
        assert r == g == b


def test_compact_rejects_unsupported_mode():
    img = Image.new("L", (2, 2))
    with pytest.raises(ValueError):
        compact_image(img, 5)