# tinybloom.py

from __future__ import annotations

import logging
import secrets

from typing import List, Optional

from pydantic import BaseModel, Field

import settings

from bitmap import Bitmap
from bloom_params import compute_bitmap_size, estimated_fp_rate, optimal_k
from errors import BloomDestroyedError, BloomError
from keyed_hash import HashFn, Item, RandomBytes, as_bytes, keyed_hash64, new_key, positions

logger = logging.getLogger(__name__)


class BloomInfo(BaseModel):
    bitmap_bytes: int
    bit_count: int
    k: int = Field(..., ge=1)
    expected_items: int
    bits_set: int
    fill_ratio: float
    design_fp_rate: float = Field(..., description="FP rate once expected_items are inserted")
    current_fp_rate: float = Field(..., description="FP rate estimated from the bits set so far")


class TinyBloom:
    """
    Keyed bloom filter.

    No false negatives; false positives bounded by the sizing chosen at
    construction. Two secret keys are drawn per instance so inputs cannot be
    crafted offline to pile onto the same bits.

    Not thread-safe: serialise writers (insert / query_and_insert) with one
    lock per filter. Readers alone need no lock.
    """

    def __init__(
        self,
        bitmap_byte_size: int,
        expected_items: int,
        *,
        hash_fn: Optional[HashFn] = None,
        random_bytes: Optional[RandomBytes] = None,
    ):
        if expected_items < 0:
            logger.warning("bloom construction rejected: expected_items=%d", expected_items)
            raise ValueError(f"expected_items must be >= 0, got {expected_items}")
        try:
            bitmap = Bitmap(bitmap_byte_size)
        except (BloomError, ValueError) as e:
            logger.warning("bloom construction rejected: %s", e)
            raise

        bit_count = bitmap.bit_count
        self._bitmap: Optional[Bitmap] = bitmap
        self.k = optimal_k(bit_count, expected_items)
        self.expected_items = expected_items
        self._hash = hash_fn or keyed_hash64
        rnd = random_bytes or secrets.token_bytes
        self._key_a = new_key(rnd)
        self._key_b = new_key(rnd)

        logger.debug(
            "bloom created: bytes=%d bits=%d k=%d expected_items=%d",
            bitmap_byte_size, bit_count, self.k, expected_items,
        )

    @classmethod
    def for_capacity(cls, expected_items: int, fp_rate: Optional[float] = None, **kwargs) -> "TinyBloom":
        """Size a filter for `expected_items` at `fp_rate` (default BLOOM_FP_RATE)."""
        p = settings.DEFAULT_FP_RATE if fp_rate is None else fp_rate
        return cls(compute_bitmap_size(expected_items, p), expected_items, **kwargs)

    # ---- lifecycle ----
    def destroy(self) -> None:
        if self._bitmap is None:
            return
        self._bitmap.release()
        self._bitmap = None
        logger.debug("bloom destroyed")

    def __enter__(self) -> "TinyBloom":
        return self

    def __exit__(self, *exc) -> None:
        self.destroy()

    @property
    def destroyed(self) -> bool:
        return self._bitmap is None

    @property
    def bit_count(self) -> int:
        return self._live().bit_count

    def _live(self) -> Bitmap:
        if self._bitmap is None:
            raise BloomDestroyedError("bloom filter used after destroy()")
        return self._bitmap

    def _positions(self, bitmap: Bitmap, item: Item) -> List[int]:
        return positions(as_bytes(item), self.k, bitmap.bit_count, self._key_a, self._key_b, self._hash)

    # ---- membership ----
    def insert(self, item: Item) -> None:
        bm = self._live()
        if not bm.bit_count:
            return
        for pos in self._positions(bm, item):
            bm.set_bit(pos)

    add = insert

    def query(self, item: Item) -> bool:
        """False: never inserted. True: probably inserted."""
        bm = self._live()
        if not bm.bit_count:
            return True
        for pos in self._positions(bm, item):
            if not bm.test_bit(pos):
                return False
        return True

    def __contains__(self, item: Item) -> bool:
        return self.query(item)

    def query_and_insert(self, item: Item) -> bool:
        """
        Insert `item` and report whether it was (probably) a member BEFORE
        this call. Every probed bit is set on return regardless of the result,
        so a False here means "new item, now recorded".
        """
        bm = self._live()
        if not bm.bit_count:
            return True
        found = True
        for pos in self._positions(bm, item):
            # no short-circuit: all k bits must end up set
            found &= bm.test_and_set_bit(pos)
        return found

    # ---- introspection ----
    def info(self) -> BloomInfo:
        bm = self._live()
        bits_set = bm.count_set()
        fill = bits_set / bm.bit_count if bm.bit_count else 0.0
        return BloomInfo(
            bitmap_bytes=bm.bit_count // 8,
            bit_count=bm.bit_count,
            k=self.k,
            expected_items=self.expected_items,
            bits_set=bits_set,
            fill_ratio=round(fill, 6),
            design_fp_rate=estimated_fp_rate(bm.bit_count, self.k, self.expected_items),
            current_fp_rate=fill ** self.k if bm.bit_count else 1.0,
        )

    def __repr__(self) -> str:
        if self._bitmap is None:
            return "TinyBloom(destroyed)"
        return f"TinyBloom(bits={self._bitmap.bit_count}, k={self.k}, expected_items={self.expected_items})"
