# keyed_hash.py

import hashlib
import secrets

from typing import Callable, Iterator, List, Optional, Union

import settings

# largest prime below 2**64
PRIME_MODULUS = 0xFFFFFFFFFFFFFFC5

HASH_BYTES = 8

Item = Union[bytes, bytearray, memoryview, str]
HashFn = Callable[[bytes, bytes], int]
RandomBytes = Callable[[int], bytes]


def new_key(random_bytes: RandomBytes = secrets.token_bytes, size: Optional[int] = None) -> bytes:
    """Draw one secret key from a CSPRNG. Each call is independent."""
    n = settings.KEY_BYTES if size is None else size
    if not settings.KEY_BYTES_MIN <= n <= settings.KEY_BYTES_MAX:
        raise ValueError(
            f"key size must be {settings.KEY_BYTES_MIN}..{settings.KEY_BYTES_MAX} bytes, got {n}"
        )
    key = bytes(random_bytes(n))
    if len(key) != n:
        raise ValueError(f"random source returned {len(key)} bytes, expected {n}")
    return key


def keyed_hash64(key: bytes, data: bytes) -> int:
    """
    Keyed 64-bit hash of `data`.
    BLAKE2b in keyed (MAC) mode, truncated to 8 bytes, read little-endian.
    Without the key an attacker cannot steer items onto chosen bits.
    """
    digest = hashlib.blake2b(data, digest_size=HASH_BYTES, key=key).digest()
    return int.from_bytes(digest, "little")


def as_bytes(item: Item) -> bytes:
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(f"bloom items must be bytes or str, not {type(item).__name__}")


def probe_values(
    data: bytes,
    k: int,
    key_a: bytes,
    key_b: bytes,
    hash_fn: HashFn = keyed_hash64,
) -> Iterator[int]:
    """
    Yield k probe values for `data` using enhanced double hashing:

      h[0] = H(key_a, data)
      h[1] = H(key_b, data)
      h[i] = (h[0] + i * h[1]) mod (2**64 - 59)   for i >= 2

    The hash provider is called at most twice, whatever k is.
    """
    h0 = hash_fn(key_a, data)
    yield h0
    if k < 2:
        return
    h1 = hash_fn(key_b, data)
    yield h1
    for i in range(2, k):
        yield (h0 + i * h1) % PRIME_MODULUS


def positions(
    data: bytes,
    k: int,
    bit_count: int,
    key_a: bytes,
    key_b: bytes,
    hash_fn: HashFn = keyed_hash64,
) -> List[int]:
    """Map the k probe values of `data` onto bit offsets in [0, bit_count)."""
    return [h % bit_count for h in probe_values(data, k, key_a, key_b, hash_fn)]
