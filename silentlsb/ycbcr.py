"""YCbCr colour representation of a single pixel."""

from __future__ import annotations

import math
from dataclasses import dataclass

KR = 0.299
KB = 0.114


def c_round(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _clamp(value: int) -> int:
    return max(0, min(255, value))


@dataclass(eq=False)
class YCbCr:
    """A colour as luminance (y), blue difference (cb) and red difference (cr).

    A luminance of -1 marks a pixel that lies outside the image.
    """

    y: float
    cb: float
    cr: float

    @classmethod
    def from_rgb(cls, rgb) -> YCbCr:
        """Build from an ``(r, g, b)`` sequence; an alpha component is ignored."""
        r, g, b = rgb[:3]
        y = KR * r + (1 - KR - KB) * g + KB * b
        cb = 128 - 0.1687 * r - 0.3313 * g + 0.5 * b
        cr = 128 + 0.5 * r - 0.4187 * g - 0.0813 * b
        return cls(y, cb, cr)

    def to_rgb(self) -> tuple[int, int, int]:
        """Convert to an ``(r, g, b)`` tuple, clamping each channel to 0..255."""
        red = c_round(self.y + 1.402 * (self.cr - 128))
        green = c_round(self.y - 0.34414 * (self.cb - 128) - 0.71414 * (self.cr - 128))
        blue = c_round(self.y + 1.772 * (self.cb - 128))
        return _clamp(red), _clamp(green), _clamp(blue)

    def __str__(self) -> str:
        return f"Y:{self.y:g},Cb:{self.cb:g},Cr:{self.cr:g}"

    def __eq__(self, other):
        """Two colours are equal when their rounded luminances match."""
        if not isinstance(other, YCbCr):
            return NotImplemented
        return c_round(other.y) == c_round(self.y)

    def __hash__(self):
        return hash(c_round(self.y))