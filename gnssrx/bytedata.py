"""A growable byte buffer consumed from the left."""

from __future__ import annotations

_INVERT_TABLE = bytes(255 - value for value in range(256))


class ByteData:
    """Bytes that can be appended to, inverted, and consumed from the front."""

    def __init__(self, data: bytes | bytearray | ByteData = b"") -> None:
        self._data = bytearray(self._as_bytes(data))

    @staticmethod
    def _as_bytes(data: object) -> bytes:
        if isinstance(data, ByteData):
            return bytes(data._data)
        return bytes(memoryview(data))  # type: ignore[arg-type]

    def append(self, data: bytes | bytearray | ByteData) -> None:
        """Append raw bytes or another buffer's contents."""
        self._data += self._as_bytes(data)

    def remove_left(self, size: int) -> None:
        """Drop ``size`` bytes from the front; raise ValueError if too few remain."""
        if size > len(self._data):
            raise ValueError(f"cannot remove {size} bytes from {len(self._data)}")
        del self._data[:size]

    def invert(self) -> None:
        """Flip every bit of the remaining bytes."""
        self._data = bytearray(self._data.translate(_INVERT_TABLE))

    def clear(self) -> None:
        """Drop all contents."""
        self._data.clear()

    def peek(self, size: int) -> bytes:
        """Return the first ``size`` bytes without consuming them."""
        if size > len(self._data):
            raise ValueError(f"need {size} bytes, only {len(self._data)} available")
        return bytes(self._data[:size])

    def take(self, size: int) -> bytes:
        """Return and consume the first ``size`` bytes."""
        chunk = self.peek(size)
        del self._data[:size]
        return chunk

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteData):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray)):
            return self._data == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ByteData({bytes(self._data)!r})"