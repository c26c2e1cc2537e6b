"""Hiding data in the low bits of WAVE/PCM samples."""

from __future__ import annotations

import logging
import math
import struct
import wave
from collections import deque
from enum import Enum
from itertools import chain
from pathlib import Path
from typing import Deque, Union

from silentlsb.errors import ModuleError

_log = logging.getLogger(__name__)

_HEADER_BITS = 32
_STRUCT_CODES = {1: "B", 2: "H", 4: "I"}


class HeaderPosition(Enum):
    """Where the 32-bit data size is hidden."""

    BEGINNING = 1
    ENDING = 2


class DataDistribution(Enum):
    """How the hidden bits are spread over the samples."""

    INLINE = 1
    EQUI = 2


def _to_chunks(data: bytes, nb_bits: int) -> list[int]:
    """Split ``data`` into ``nb_bits``-wide values, most significant bit first."""
    bits = "".join(f"{byte:08b}" for byte in data)
    bits += "0" * (-len(bits) % nb_bits)
    return [int(bits[i:i + nb_bits], 2) for i in range(0, len(bits), nb_bits)]


def _from_chunks(chunks: list[int], nb_bits: int, nb_bytes: int) -> bytes:
    """Join ``nb_bits``-wide values back into at most ``nb_bytes`` bytes."""
    bits = "".join(f"{chunk:0{nb_bits}b}" for chunk in chunks)
    usable = min(nb_bytes * 8, len(bits) // 8 * 8)
    return bytes(int(bits[i:i + 8], 2) for i in range(0, usable, 8))


class AudioWav:
    """A PCM ``.wav`` file able to carry hidden data in its samples' low bits.

    Each sample frame lends ``nb_bits_used`` bits from each of its first
    ``nb_channel_used`` channels. The payload length is stored as a 32-bit
    header at the beginning or at the end of the file.
    """

    def __init__(self, file_path: Union[str, Path]):
        self._file_path = Path(file_path)
        try:
            with wave.open(str(self._file_path), "rb") as wav:
                params = wav.getparams()
        except (OSError, EOFError, wave.Error) as exc:
            raise ModuleError(
                "Technical error during file reading",
                f"Cannot read source file! ({self._file_path}): {exc}",
            ) from exc

        if params.sampwidth not in _STRUCT_CODES:
            raise ModuleError(
                "Unsupported wave format",
                f"bits per sample: {params.sampwidth * 8}",
            )

        self._num_channels = params.nchannels
        self._sample_width = params.sampwidth
        self._frame_rate = params.framerate
        self._sample_count = params.nframes
        self.short_name = self._file_path.with_suffix(".wav").name

        self._nb_bits_used = 2
        self._nb_channel_used = self._num_channels
        self.header_position = HeaderPosition.ENDING
        self.distribution = DataDistribution.EQUI
        self.data = b""

    @property
    def file_path(self) -> Path:
        """Path of the file currently read from."""
        return self._file_path

    @property
    def num_channels(self) -> int:
        return self._num_channels

    @property
    def bits_per_sample(self) -> int:
        return self._sample_width * 8

    @property
    def frame_rate(self) -> int:
        return self._frame_rate

    @property
    def sample_count(self) -> int:
        """Number of sample frames in the file."""
        return self._sample_count

    @property
    def nb_bits_used(self) -> int:
        """Number of low bits of each sample that carry data."""
        return self._nb_bits_used

    @nb_bits_used.setter
    def nb_bits_used(self, value: int) -> None:
        if not 1 <= value <= 8:
            raise ValueError(f"number of bits used must be within 1..8, got {value}")
        self._nb_bits_used = value

    @property
    def nb_channel_used(self) -> int:
        """Number of channels of each frame that carry data."""
        return self._nb_channel_used

    @nb_channel_used.setter
    def nb_channel_used(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"number of channels used must be positive, got {value}")
        self._nb_channel_used = min(value, self._num_channels)

    @property
    def capacity(self) -> int:
        """Number of bytes the file can hide with the current settings."""
        return self._sample_count * self._nb_channel_used * self._nb_bits_used // 8

    def load_data(self) -> bytes:
        """Recover the hidden bytes; an empty result means nothing was hidden."""
        frames = self._read_frames()
        head_nb = self._header_sample_count()

        start = 0
        if self.header_position is HeaderPosition.ENDING:
            start = max(0, len(frames) - head_nb)

        header: list[int] = []
        for frame in frames[start:]:
            if len(header) * self._nb_bits_used >= _HEADER_BITS:
                break
            header.extend(self._extract(frame))
        if len(header) * self._nb_bits_used < _HEADER_BITS:
            raise ModuleError("No hidden data found", "file too short for the size header")

        size = int.from_bytes(_from_chunks(header, self._nb_bits_used, 4), "big")
        _log.debug("loaded size: %d", size)
        if size > self.capacity:
            raise ModuleError(
                "No hidden data found",
                f"loaded size {size} exceeds capacity {self.capacity}",
            )

        start = head_nb if self.header_position is HeaderPosition.BEGINNING else 0
        step = self._distribution_step(size)
        needed = size * 8
        chunks: list[int] = []
        for frame in frames[start::step]:
            if len(chunks) * self._nb_bits_used >= needed:
                break
            chunks.extend(self._extract(frame))

        self.data = _from_chunks(chunks, self._nb_bits_used, size)
        return self.data

    def save_to_dir(self, output_dir: Union[str, Path], data: Union[bytes, str]) -> Path:
        """Write a copy of the file holding ``data`` into ``output_dir``.

        The copy becomes the file this object reads from; its path is returned.
        """
        if data is None:
            raise ModuleError(
                "Technical error during encoding process",
                "Cannot insert null data into wave",
            )
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if len(data) > self.capacity:
            raise ModuleError(
                "Selected media doesn't have enough space",
                f"data size {len(data)} exceeds capacity {self.capacity}",
            )

        frames = self._read_frames()
        output_dir = Path(output_dir)
        target = output_dir / self.short_name
        if target.exists():
            target = output_dir / f"_{self.short_name}"

        bits = self._nb_bits_used
        header: Deque[int] = deque(_to_chunks(len(data).to_bytes(4, "big"), bits))
        payload: Deque[int] = deque(_to_chunks(data, bits))

        n = len(frames)
        out = list(frames)
        index = 0
        if self.header_position is HeaderPosition.BEGINNING:
            while index < n and header:
                out[index] = self._embed(frames[index], header)
                index += 1

        head_nb = self._header_sample_count()
        step = self._distribution_step(len(data))
        while index < n and payload:
            out[index] = self._embed(frames[index], payload)
            index += 1
            if index + step < n - head_nb:
                index = min(n, index + step - 1)
        _log.debug("Last data pos: %d", index)

        if self.header_position is HeaderPosition.ENDING:
            for position in range(max(index, n - head_nb), n):
                out[position] = self._embed(frames[position], header)

        self._write_frames(target, out)
        self._file_path = target
        self.data = data
        return target

    def _header_sample_count(self) -> int:
        return math.ceil(_HEADER_BITS / (self._nb_channel_used * self._nb_bits_used))

    def _distribution_step(self, size: int) -> int:
        if self.distribution is not DataDistribution.EQUI:
            return 1
        needed = math.ceil(size * 8 / (self._nb_channel_used * self._nb_bits_used))
        if needed == 0:
            return 1
        step = self._sample_count // needed
        _log.debug("computed step: %d, size: %d", step, size)
        return max(step, 1)

    def _mask(self) -> int:
        return (1 << self._nb_bits_used) - 1

    def _extract(self, frame: tuple[int, ...]) -> list[int]:
        mask = self._mask()
        return [sample & mask for sample in frame[: self._nb_channel_used]]

    def _embed(self, frame: tuple[int, ...], chunks: Deque[int]) -> tuple[int, ...]:
        keep = ((1 << (8 * self._sample_width)) - 1) ^ self._mask()
        out = []
        for channel, sample in enumerate(frame):
            if channel < self._nb_channel_used and chunks:
                sample = (sample & keep) | chunks.popleft()
            out.append(sample)
        return tuple(out)

    def _frame_format(self) -> str:
        return "<" + _STRUCT_CODES[self._sample_width] * self._num_channels

    def _read_frames(self) -> list[tuple[int, ...]]:
        try:
            with wave.open(str(self._file_path), "rb") as wav:
                raw = wav.readframes(wav.getnframes())
        except (OSError, EOFError, wave.Error) as exc:
            raise ModuleError(
                "Technical error during file reading",
                f"Cannot read source file! ({self._file_path}): {exc}",
            ) from exc
        return list(struct.iter_unpack(self._frame_format(), raw))

    def _write_frames(self, path: Path, frames: list[tuple[int, ...]]) -> None:
        flat = list(chain.from_iterable(frames))
        raw = struct.pack(f"<{len(flat)}{_STRUCT_CODES[self._sample_width]}", *flat)
        try:
            with wave.open(str(path), "wb") as wav:
                wav.setnchannels(self._num_channels)
                wav.setsampwidth(self._sample_width)
                wav.setframerate(self._frame_rate)
                wav.writeframes(raw)
        except (OSError, wave.Error) as exc:
            raise ModuleError(
                "Technical error during file writing",
                f"Cannot create destination file! ({path}): {exc}",
            ) from exc