"""
Byte Cursor
===========

Position-tracking reader over an instruction image with one byte of
lookahead and a consumption counter.

The decoder calls reset_count() before each instruction and get_count()
after it; the difference is the instruction's encoded size. Every byte
taken with next()/try_next() counts exactly once, peek() never counts.

Copyright (c) 2026 sim8086 Contributors
"""

from typing import Iterator, Optional, Tuple

from sim8086.errors import EndOfInstructionStreamError

# (address, byte) pair as yielded by the cursor
AddressedByte = Tuple[int, int]


class ByteCursor:
    """
    Reader over (address, byte) pairs of an instruction image.

    The image is held by reference (a memoryview), never copied. Addresses
    are zero-based offsets into the image, so a cursor started part way
    through reports the same addresses the disassembler would.

    Example:
        >>> cursor = ByteCursor(bytes([0x89, 0xD9]))
        >>> cursor.peek()
        (0, 137)
        >>> cursor.try_next()
        (0, 137)
        >>> cursor.get_count()
        1
    """

    def __init__(self, data: bytes, position: int = 0):
        """
        Args:
            data: The instruction image
            position: Offset of the first byte to read
        """
        self._data = memoryview(data)
        self._position = position
        self._count = 0

    @property
    def position(self) -> int:
        """Address of the next byte to be read."""
        return self._position

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def peek(self) -> Optional[AddressedByte]:
        """Return the next (address, byte) without consuming it."""
        if self.at_end:
            return None
        return self._position, self._data[self._position]

    def next(self) -> Optional[AddressedByte]:
        """Consume and return the next (address, byte), or None at the end."""
        item = self.peek()
        if item is not None:
            self._position += 1
            self._count += 1
        return item

    def try_next(self) -> AddressedByte:
        """
        Consume the next byte, failing if the image is exhausted.

        Raises:
            EndOfInstructionStreamError: No byte remains
        """
        item = self.next()
        if item is None:
            raise EndOfInstructionStreamError(self._position)
        return item

    def try_next_byte(self) -> int:
        """Consume the next byte and return only its value."""
        return self.try_next()[1]

    def try_next_word(self) -> int:
        """Consume two bytes and return them as a little-endian word."""
        lo = self.try_next_byte()
        hi = self.try_next_byte()
        return (hi << 8) | lo

    def reset_count(self) -> None:
        """Zero the consumption counter (start of an instruction)."""
        self._count = 0

    def get_count(self) -> int:
        """Bytes consumed since the last reset_count()."""
        return self._count

    def __iter__(self) -> Iterator[AddressedByte]:
        while (item := self.next()) is not None:
            yield item
