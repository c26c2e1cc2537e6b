"""Encoding settings for the JPEG format."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

from silentlsb.stegotable import DEFAULT_K
from silentlsb.wavoptions import parse_choice


class JpegHeaderPosition(Enum):
    """Where the data size is hidden in the image."""

    TOP = 1
    BOTTOM = 2
    SIGNATURE = 3


def _checked_range(bounds: Tuple[int, int], what: str) -> Tuple[int, int]:
    low, high = bounds
    if low > high:
        raise ValueError(f"invalid {what} range: {bounds}")
    return low, high


class JpegOptions:
    """Interval length, passphrase, compression quality and header position."""

    def __init__(self, k_range: Tuple[int, int] = (5, 20), quality_range: Tuple[int, int] = (1, 100)):
        self._k_range = _checked_range(k_range, "k")
        self._quality_range = _checked_range(quality_range, "quality")
        low, high = self._k_range
        self._k = min(max(DEFAULT_K, low), high)
        self._quality = self._quality_range[1]
        self._header_position = JpegHeaderPosition.SIGNATURE
        self.passphrase = ""

    @property
    def k_range(self) -> Tuple[int, int]:
        return self._k_range

    @property
    def quality_range(self) -> Tuple[int, int]:
        return self._quality_range

    @property
    def k(self) -> int:
        """Luminance interval length used by the stego tables."""
        return self._k

    @k.setter
    def k(self, value: int) -> None:
        low, high = self._k_range
        if not low <= value <= high:
            raise ValueError(f"invalid value for k: {value}")
        self._k = value

    @property
    def quality(self) -> int:
        """JPEG compression quality."""
        return self._quality

    @quality.setter
    def quality(self, value: int) -> None:
        low, high = self._quality_range
        if not low <= value <= high:
            raise ValueError(f"invalid value for quality: {value}")
        self._quality = value

    @property
    def header_position(self) -> JpegHeaderPosition:
        return self._header_position

    @header_position.setter
    def header_position(self, value: Union[JpegHeaderPosition, str]) -> None:
        self._header_position = parse_choice(JpegHeaderPosition, value, "header position")