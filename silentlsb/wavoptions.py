"""Encoding settings for the WAVE format."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Union

from silentlsb.audiowav import DataDistribution, HeaderPosition

NB_BITS_RANGE = (1, 8)


class QualityLevel(Enum):
    """Audio quality left after hiding data, from most to least altered."""

    LOW = 0
    NORMAL = 1
    HIGH = 2


# channels, bits per sample, header position
_PRESETS = {
    QualityLevel.LOW: (2, 5, HeaderPosition.BEGINNING),
    QualityLevel.NORMAL: (2, 3, HeaderPosition.ENDING),
    QualityLevel.HIGH: (1, 1, HeaderPosition.ENDING),
}


def parse_choice(enum_cls, value, what):
    """Return ``value`` as a member of ``enum_cls``, accepting its name in any case."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            pass
    raise ValueError(f"unhandled {what} value: {value!r}")


class WavOptions:
    """How data is spread over the samples of a WAVE file.

    Every change is reported to the callbacks given to :meth:`subscribe`.
    """

    def __init__(self, max_channels: int = 2):
        if max_channels < 1:
            raise ValueError(f"max_channels must be positive, got {max_channels}")
        self._max_channels = max_channels
        self._nb_bits = 2
        self._channels = max_channels
        self._distribution = DataDistribution.EQUI
        self._header_position = HeaderPosition.ENDING
        self._subscribers: List[Callable[[], None]] = []

    @property
    def max_channels(self) -> int:
        """Largest number of channels that may be selected."""
        return self._max_channels

    @property
    def nb_bits(self) -> int:
        """Number of low bits of each sample that carry data."""
        return self._nb_bits

    @nb_bits.setter
    def nb_bits(self, value: int) -> None:
        low, high = NB_BITS_RANGE
        if not low <= value <= high:
            raise ValueError(f"invalid value for nb_bits: {value}")
        self._nb_bits = value
        self._notify()

    @property
    def channels(self) -> int:
        """Number of channels of each frame that carry data."""
        return self._channels

    @channels.setter
    def channels(self, value: int) -> None:
        if not 0 < value <= self._max_channels:
            raise ValueError(f"invalid value for channels: {value}")
        self._channels = value
        self._notify()

    @property
    def distribution(self) -> DataDistribution:
        return self._distribution

    @distribution.setter
    def distribution(self, value: Union[DataDistribution, str]) -> None:
        self._distribution = parse_choice(DataDistribution, value, "distribution")
        self._notify()

    @property
    def header_position(self) -> HeaderPosition:
        return self._header_position

    @header_position.setter
    def header_position(self, value: Union[HeaderPosition, str]) -> None:
        self._header_position = parse_choice(HeaderPosition, value, "header position")
        self._notify()

    @property
    def quality_percent(self) -> float:
        """Estimated share of the sound left untouched, in percent."""
        return (1 - (2 ** self._nb_bits * self._channels) / 256.0) * 100.0

    @property
    def quality_level(self) -> QualityLevel:
        """Quality level matching the current settings."""
        quality = self.quality_percent
        if quality > 95:
            return QualityLevel.HIGH
        if quality > 85:
            return QualityLevel.NORMAL
        return QualityLevel.LOW

    def set_quality_level(self, level: Union[QualityLevel, int, str]) -> None:
        """Apply the preset settings of a quality level."""
        if isinstance(level, int) and not isinstance(level, QualityLevel):
            try:
                level = QualityLevel(level)
            except ValueError:
                raise ValueError(f"unhandled quality level: {level!r}") from None
        level = parse_choice(QualityLevel, level, "quality level")
        channels, nb_bits, header = _PRESETS[level]
        self._channels = min(channels, self._max_channels)
        self._nb_bits = nb_bits
        self._header_position = header
        self._notify()

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` with no arguments whenever a setting changes."""
        self._subscribers.append(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback()