"""A growable bitmap backed by a byte array."""

from __future__ import annotations

from collections.abc import Iterator


def _to_byte_size(bit_size: int) -> int:
    return (bit_size + 7) // 8


class BitMap:
    """Bits addressed by offset, stored least-significant bit first in each byte.

    A ``bytearray`` passed in is used in place, so changes to the bitmap are
    visible through it.
    """

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        if isinstance(data, bytearray):
            self._data = data
        else:
            self._data = bytearray(data or b"")

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | None) -> BitMap:
        """Wrap ``data``; a ``bytearray`` is shared rather than copied."""
        return cls(data)

    def to_bytes(self) -> bytes:
        """Return the bitmap's contents."""
        return bytes(self._data)

    def bit_size(self) -> int:
        """Return the number of bits the bitmap currently holds."""
        return len(self._data) * 8

    def __len__(self) -> int:
        """Return the number of bytes the bitmap currently holds."""
        return len(self._data)

    def _grow(self, bit_size: int) -> None:
        gap = _to_byte_size(bit_size) - len(self._data)
        if gap > 0:
            self._data.extend(bytes(gap))

    @staticmethod
    def _check_offset(offset: int) -> None:
        if offset < 0:
            raise ValueError("bit offset must not be negative")

    def set_bit(self, offset: int, val: int) -> None:
        """Set the bit at ``offset`` to 1 if ``val`` is positive, else clear it."""
        self._check_offset(offset)
        byte_index, bit_offset = divmod(offset, 8)
        mask = 1 << bit_offset
        self._grow(offset + 1)
        if val > 0:
            self._data[byte_index] |= mask
        else:
            self._data[byte_index] &= ~mask & 0xFF

    def get_bit(self, offset: int) -> int:
        """Return the bit at ``offset``; bits beyond the end read as 0."""
        self._check_offset(offset)
        byte_index, bit_offset = divmod(offset, 8)
        if byte_index >= len(self._data):
            return 0
        return (self._data[byte_index] >> bit_offset) & 1

    def iter_bits(self, begin: int, end: int) -> Iterator[tuple[int, int]]:
        """Yield ``(offset, bit)`` from ``begin`` up to ``end`` (exclusive).

        An ``end`` of 0 or less means the end of the bitmap. The bit at
        ``begin`` is always yielded if it lies within the bitmap.
        """
        self._check_offset(begin)
        offset = begin
        total = self.bit_size()
        while offset < total:
            byte_index, bit_offset = divmod(offset, 8)
            yield offset, (self._data[byte_index] >> bit_offset) & 1
            offset += 1
            if end > 0 and offset >= end:
                break

    def iter_bytes(self, begin: int, end: int) -> Iterator[tuple[int, int]]:
        """Yield ``(index, byte)`` from ``begin`` up to ``end`` (exclusive).

        An ``end`` of 0, or one past the last byte, means the end of the bitmap.
        """
        if end == 0 or end > len(self._data):
            end = len(self._data)
        for index in range(begin, end):
            yield index, self._data[index]