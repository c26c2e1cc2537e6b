"""Images cut into square blocks of YCbCr pixels."""

from __future__ import annotations

import logging
import math
from typing import Optional

from PIL import Image

from silentlsb.ycbcr import YCbCr

PIXEL_GROUP_SIZE = 8

_log = logging.getLogger(__name__)


def _outside() -> YCbCr:
    return YCbCr(-1, -1, -1)


class PixelGroup:
    """A square block of pixels (8x8, as in JPEG), stored row by row.

    Pixels outside the image carry a luminance of -1 and are left out of
    the mean intensity value.
    """

    width = PIXEL_GROUP_SIZE
    height = PIXEL_GROUP_SIZE

    def __init__(self):
        self._pixels: list[Optional[YCbCr]] = [None] * (PIXEL_GROUP_SIZE * PIXEL_GROUP_SIZE)
        self._miv = -1.0

    @staticmethod
    def _index(x: int, y: int) -> int:
        if not (0 <= x < PIXEL_GROUP_SIZE and 0 <= y < PIXEL_GROUP_SIZE):
            raise IndexError(f"position is out of range (x:{x},y:{y})")
        return y * PIXEL_GROUP_SIZE + x

    def pixel(self, x: int, y: int) -> Optional[YCbCr]:
        """Pixel at column ``x`` and row ``y``, or None if never set."""
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, pixel: Optional[YCbCr]) -> None:
        """Replace the pixel at ``(x, y)`` and recompute the mean intensity."""
        self._pixels[self._index(x, y)] = pixel
        self._compute_miv()

    @property
    def miv(self) -> float:
        """Mean luminance of the pixels inside the image, or -1 if there are none."""
        return self._miv

    def update_miv_to(self, dest_miv: float) -> None:
        """Shift pixel luminances so the mean intensity approaches ``dest_miv``.

        Pixels near the centre of the block move more than those at its edges.
        """
        if dest_miv == self._miv:
            return
        if dest_miv < 0 or dest_miv > 255:
            raise ValueError(
                f"MIV destination out of range: dest {dest_miv:g}, current {self._miv:g}"
            )

        tries = 0
        distance = dest_miv - self._miv
        while True:
            for y in range(self.height):
                qy = y + 1 if y < self.height / 2.0 else self.height - y
                for x in range(self.width):
                    qx = x + 1 if x < self.width / 2.0 else self.width - x
                    weight = min(qx, qy) / (self.width / 4.0)
                    self._shift_pixel(self.pixel(x, y), weight * distance)
            self._compute_miv()
            tries += 1
            distance = dest_miv - self._miv
            if not (abs(distance) > 0.1 and tries < 4):
                break

        if abs(self._miv - dest_miv) > 1:
            _log.warning("MIV destination not reached: dest %g, new %g", dest_miv, self._miv)

    @staticmethod
    def _shift_pixel(pixel: Optional[YCbCr], distance: float) -> None:
        if pixel is None or pixel.y == -1:
            return
        pixel.y = min(255.0, max(0.0, pixel.y + distance))

    def _compute_miv(self) -> None:
        values = [p.y for p in self._pixels if p is not None and 0 <= p.y <= 255]
        self._miv = sum(values) / len(values) if values else -1.0

    def __str__(self) -> str:
        cells = "".join(
            f"[{i}|{'null' if p is None else p}]" for i, p in enumerate(self._pixels)
        )
        return f"{cells}({self._miv:g})"


class GroupedImage:
    """An image whose pixels are grouped into square :class:`PixelGroup` blocks."""

    def __init__(self, image: Image.Image, k: int):
        self._k = k
        self._initial_width, self._initial_height = image.size
        self._initial_mode = image.mode
        self._width = math.ceil(self._initial_width / PixelGroup.width)
        self._height = math.ceil(self._initial_height / PixelGroup.height)
        self._groups = self._group(image)

    @property
    def width(self) -> int:
        """Number of pixel groups in a row."""
        return self._width

    @property
    def height(self) -> int:
        """Number of pixel groups in a column."""
        return self._height

    @property
    def initial_width(self) -> int:
        """Width of the source image in pixels."""
        return self._initial_width

    @property
    def initial_height(self) -> int:
        """Height of the source image in pixels."""
        return self._initial_height

    def pixel_group(self, x: int, y: int) -> PixelGroup:
        """Group at block column ``x`` and block row ``y``."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel group position is out of range (x:{x},y:{y})")
        return self._groups[x + y * self._width]

    def _group(self, image: Image.Image) -> list[PixelGroup]:
        _log.debug("Grouping image...")
        rgb = image.convert("RGB")
        data = list(rgb.getdata())
        w, h = self._initial_width, self._initial_height
        groups = []
        for top in range(0, self._height * PixelGroup.height, PixelGroup.height):
            for left in range(0, self._width * PixelGroup.width, PixelGroup.width):
                group = PixelGroup()
                for gy in range(PixelGroup.height):
                    for gx in range(PixelGroup.width):
                        px, py = left + gx, top + gy
                        if px >= w or py >= h:
                            colour = _outside()
                        else:
                            colour = YCbCr.from_rgb(data[py * w + px])
                        group.set_pixel(gx, gy, colour)
                groups.append(group)
        _log.debug("Grouped image created")
        return groups

    def to_image(self) -> Image.Image:
        """Rebuild a picture of the original size from the groups."""
        _log.debug("Converting grouped image to rgb image...")
        w, h = self._initial_width, self._initial_height
        img = Image.new("RGB", (w, h))
        access = img.load()
        for i, group in enumerate(self._groups):
            left = (i % self._width) * PixelGroup.width
            top = (i // self._width) * PixelGroup.height
            for gy in range(group.height):
                for gx in range(group.width):
                    pixel = group.pixel(gx, gy)
                    if pixel is None or pixel.y == -1:
                        continue
                    px, py = left + gx, top + gy
                    if px < w and py < h:
                        access[px, py] = pixel.to_rgb()
        _log.debug("Grouped image converted.")
        if self._initial_mode == "RGBA":
            return img.convert("RGBA")
        return img


def compact_image(image: Image.Image, k: int) -> None:
    """Squeeze every pixel's luminance into ``k .. 255 - k``, in place."""
    if image.mode not in ("RGB", "RGBA"):
        raise ValueError(f"unsupported image mode: {image.mode}")
    result = []
    for rgb in image.convert("RGB").getdata():
        colour = YCbCr.from_rgb(rgb)
        colour.y = k + colour.y * (128 - k) / 128.0
        result.append(colour.to_rgb())
    if image.mode == "RGBA":
        result = [(r, g, b, 255) for r, g, b in result]
    image.putdata(result)