"""The WAVE/PCM steganography format: options and configured audio files."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Union

from silentlsb.audiowav import AudioWav
from silentlsb.wavoptions import WavOptions

_CHANNEL_CHOICES = 2


class WavFormat:
    """Hides data in the low bits of WAVE/PCM samples.

    Encoding and decoding each have their own :class:`WavOptions`; changes
    to the encoding options are passed on to the callbacks given to
    :meth:`subscribe`.
    """

    def __init__(self):
        self._encode_options: Optional[WavOptions] = None
        self._decode_options: Optional[WavOptions] = None
        self._subscribers: List[Callable[[], None]] = []

    def name(self) -> str:
        return "Silent Eye Audio Format WAVE"

    def version(self) -> str:
        return "1.2"

    def type_supported(self) -> str:
        return "WAVE"

    def encode_options(self) -> WavOptions:
        """Settings used when hiding data."""
        if self._encode_options is None:
            self._encode_options = WavOptions(_CHANNEL_CHOICES)
            self._encode_options.subscribe(self._option_changed)
        return self._encode_options

    def decode_options(self) -> WavOptions:
        """Settings used when recovering data."""
        if self._decode_options is None:
            self._decode_options = WavOptions(_CHANNEL_CHOICES)
        return self._decode_options

    def encode_audio(self, file_path: Union[str, Path]) -> AudioWav:
        """Open ``file_path`` configured with the encoding settings."""
        return self._configure(AudioWav(file_path), self.encode_options())

    def decode_audio(self, file_path: Union[str, Path]) -> AudioWav:
        """Open ``file_path`` configured with the decoding settings."""
        return self._configure(AudioWav(file_path), self.decode_options())

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` with no arguments whenever an encoding option changes."""
        self._subscribers.append(callback)

    @staticmethod
    def _configure(audio: AudioWav, options: WavOptions) -> AudioWav:
        audio.nb_bits_used = options.nb_bits
        audio.nb_channel_used = options.channels
        audio.distribution = options.distribution
        audio.header_position = options.header_position
        return audio

    def _option_changed(self) -> None:
        for callback in list(self._subscribers):
            callback()