# bitmap.py

import logging

from errors import BitmapOverflowError, BloomAllocationError

logger = logging.getLogger(__name__)

UINT64_MAX = (1 << 64) - 1

# bit offsets are 64-bit: byte_size * 8 must stay below UINT64_MAX
MAX_BYTE_SIZE = UINT64_MAX // 8


def check_byte_size(byte_size: int) -> int:
    """Validate a bitmap byte size and return its bit count. Allocates nothing."""
    if byte_size < 0:
        raise ValueError(f"bitmap size must be >= 0 bytes, got {byte_size}")
    if byte_size >= MAX_BYTE_SIZE:
        raise BitmapOverflowError(
            f"bitmap of {byte_size} bytes overflows a 64-bit bit count "
            f"(max {MAX_BYTE_SIZE - 1} bytes)"
        )
    return byte_size * 8


class Bitmap:
    """Fixed-length, zero-initialised bit array. Bits only ever go 0 -> 1."""

    __slots__ = ("bits", "bit_count")

    def __init__(self, byte_size: int):
        self.bit_count = check_byte_size(byte_size)
        try:
            self.bits = bytearray(byte_size)
        except (MemoryError, OverflowError) as e:
            raise BloomAllocationError(f"cannot allocate a {byte_size}-byte bitmap") from e

    def set_bit(self, pos: int) -> None:
        self.bits[pos // 8] |= (1 << (pos % 8))

    def test_bit(self, pos: int) -> bool:
        return bool(self.bits[pos // 8] & (1 << (pos % 8)))

    def test_and_set_bit(self, pos: int) -> bool:
        """Return the bit as it was before this call, then set it."""
        i, mask = pos // 8, 1 << (pos % 8)
        was_set = bool(self.bits[i] & mask)
        self.bits[i] |= mask
        return was_set

    def count_set(self) -> int:
        return sum(bin(b).count("1") for b in self.bits)

    def release(self) -> None:
        logger.debug("releasing %d-byte bitmap", len(self.bits))
        self.bits = bytearray()
        self.bit_count = 0
