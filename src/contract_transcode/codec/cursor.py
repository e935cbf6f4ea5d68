# Copyright 2026 Contract Transcode Contributors
# SPDX-License-Identifier: Apache-2.0

"""Bounds-checked read position over an immutable byte buffer."""

from contract_transcode.errors import DecodeError, DecodeErrorKind


class Cursor:
    """Reads consecutive slices of a byte buffer.

    Every read checks the remaining length first, so a cursor never reads past
    the end of its buffer. After a :class:`DecodeError` the cursor position is
    unspecified and the cursor should be discarded.
    """

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def read(self, count: int) -> bytes:
        """Consume and return the next *count* bytes.

        Raises:
            DecodeError: ``UNEXPECTED_END`` if fewer than *count* bytes remain.
        """
        if count > self.remaining:
            raise DecodeError(
                DecodeErrorKind.UNEXPECTED_END,
                f"needed {count} byte(s), {self.remaining} remaining",
                offset=self._offset,
            )
        chunk = self._data[self._offset : self._offset + count]
        self._offset += count
        return chunk

    def read_byte(self) -> int:
        return self.read(1)[0]
