"""Stego tables mapping mean intensity values to hidden bits."""

from __future__ import annotations

import hashlib
import math
from itertools import chain

from silentlsb.errors import ModuleError

DEFAULT_K = 20
_DEFAULT_KEY = "SilentEye"


class StegoTable:
    """The ``k`` stego tables and the index table derived from a passphrase.

    Intensities 0..255 are cut into intervals of length ``k``; each table
    gives the bit carried by every interval. The index table decides which
    stego table is used for each successive bit.
    """

    def __init__(self, passphrase: str, k: int = DEFAULT_K):
        if not 1 <= k <= 255:
            raise ValueError(f"interval length must be within 1..255, got {k}")
        self._k = k
        key = passphrase.strip() or _DEFAULT_KEY
        self._md5 = hashlib.md5(key.encode("utf-8")).hexdigest()
        self._current = 0
        self._tables = self._build_tables()
        self._index_table = self._build_index_table()

    @property
    def k(self) -> int:
        """Intensity interval length, which is also the number of tables."""
        return self._k

    def compute_new_miv(self, old_miv: float, value: bool) -> float:
        """Move to the next table and return the intensity closest to
        ``old_miv`` whose interval carries ``value``."""
        value = bool(value)
        self._next_table()
        if self.compute_value(old_miv, False) == value:
            return self._checked(self._middle(old_miv), value)

        for step in (1, 2):
            for candidate in (old_miv - step * self._k, old_miv + step * self._k):
                if 0 <= candidate <= 255 and self.compute_value(candidate, False) == value:
                    return self._checked(min(self._middle(candidate), 255), value)

        raise ModuleError("Cannot find interval in stgeoTable", f"MIV : {old_miv:g}")

    def compute_value(self, miv: float, next_table: bool = True) -> bool:
        """Bit hidden by ``miv``, reading the next table unless told otherwise."""
        table = self._next_table() if next_table else self._current_table()
        index = math.floor(miv / self._k)
        if not 0 <= index < len(table):
            raise ValueError(f"intensity {miv:g} lies outside the stego table")
        return table[index]

    def __str__(self) -> str:
        lines = ["> Stego tables"]
        for number, table in enumerate(self._tables):
            lines.append(f"{number}: " + "".join(f"{int(bit)}," for bit in table))
        lines.append("> Index Table:")
        lines.append("".join(str(index) for index in self._index_table))
        return "\n".join(lines)

    def _current_table(self) -> tuple[bool, ...]:
        return self._tables[self._index_table[self._current]]

    def _next_table(self) -> tuple[bool, ...]:
        self._current += 1
        if self._current >= len(self._index_table):
            self._current = 0
        return self._current_table()

    def _middle(self, miv: float) -> float:
        lower = math.floor(miv / self._k) * self._k
        return lower + self._k / 2.0

    def _checked(self, miv: float, value: bool) -> float:
        if self.compute_value(miv, False) != value:
            raise ModuleError("Invalid new miv value!", f"{miv:g}")
        return miv

    def _build_tables(self) -> list[tuple[bool, ...]]:
        md5 = self._md5
        position = 0
        first = md5[0]
        value = -48 + (int(first) if first.isdigit() else -1)

        size = math.ceil(255 / self._k)
        if size % 2:
            size += 1

        tables = []
        for number in range(self._k):
            table: list[bool] = []
            while len(table) < size:
                bit = (value & 1) == 1
                table.append(bit)
                # neighbouring intervals always carry opposite bits
                if len(table) < size:
                    table.append(not bit)

                if (number * size + len(table)) % 5 != 0:
                    value >>= 1
                elif position + 1 < len(md5):
                    position += 1
                    value = ord(md5[position]) - 48
                else:
                    position = 0
                    value = ord(md5[0]) - 48
            tables.append(tuple(table))
        return tables

    def _build_index_table(self) -> list[int]:
        total = len(self._tables[0]) * self._k
        index_table = [0] * (total // 8)
        value = 0
        position = 0
        for offset, bit in enumerate(chain.from_iterable(self._tables)):
            value = (value << 1) + int(bit)
            if offset and offset % 8 == 0 and position != len(index_table):
                index_table[position] = value % self._k
                position += 1
                value = 0
        return index_table