"""Per-argument storage hasher transforms.

Each HasherKind maps encoded argument bytes to the bytes appended to a
storage key. Concat hashers append the raw argument after its digest so
the argument stays recoverable during prefix scans.
"""

from __future__ import annotations

import hashlib

from core.constants import (
    BLAKE2_128_DIGEST_SIZE,
    BLAKE2_256_DIGEST_SIZE,
    TWOX_64_BITS,
    TWOX_128_BITS,
    TWOX_256_BITS,
)
from core.errors import UnknownHasherKindError
from core.types import HasherKind, parse_hasher_kind
from hashing.twox import twox_hash

_DIGEST_SIZES: dict[HasherKind, int] = {
    HasherKind.IDENTITY: 0,
    HasherKind.BLAKE2_128: BLAKE2_128_DIGEST_SIZE,
    HasherKind.BLAKE2_256: BLAKE2_256_DIGEST_SIZE,
    HasherKind.BLAKE2_128_CONCAT: BLAKE2_128_DIGEST_SIZE,
    HasherKind.TWOX_128: TWOX_128_BITS // 8,
    HasherKind.TWOX_256: TWOX_256_BITS // 8,
    HasherKind.TWOX_64_CONCAT: TWOX_64_BITS // 8,
}
_TRANSPARENT_HASHERS = frozenset(
    {HasherKind.IDENTITY, HasherKind.BLAKE2_128_CONCAT, HasherKind.TWOX_64_CONCAT}
)


def apply_hasher(kind: HasherKind | str, data: bytes) -> bytes:
    """Transform one encoded argument for appending to a storage key.

    Args:
        kind: Hasher declared for the argument position.
        data: Encoded argument bytes.

    Returns:
        Bytes to append after the key prefix.
    """
    kind = parse_hasher_kind(kind)
    raw = bytes(data)
    if kind is HasherKind.IDENTITY:
        return raw
    if kind is HasherKind.BLAKE2_128:
        return _blake2(raw, BLAKE2_128_DIGEST_SIZE)
    if kind is HasherKind.BLAKE2_256:
        return _blake2(raw, BLAKE2_256_DIGEST_SIZE)
    if kind is HasherKind.BLAKE2_128_CONCAT:
        return _blake2(raw, BLAKE2_128_DIGEST_SIZE) + raw
    if kind is HasherKind.TWOX_128:
        return twox_hash(raw, TWOX_128_BITS)
    if kind is HasherKind.TWOX_256:
        return twox_hash(raw, TWOX_256_BITS)
    if kind is HasherKind.TWOX_64_CONCAT:
        return twox_hash(raw, TWOX_64_BITS) + raw
    raise UnknownHasherKindError(f"Unhandled hasher kind {kind!r}.")


def hasher_digest_size(kind: HasherKind | str) -> int:
    """Return the fixed digest length a hasher writes before any raw suffix."""
    return _DIGEST_SIZES[parse_hasher_kind(kind)]


def is_transparent(kind: HasherKind | str) -> bool:
    """Return True when raw argument bytes are recoverable from the key."""
    return parse_hasher_kind(kind) in _TRANSPARENT_HASHERS


def _blake2(data: bytes, digest_size: int) -> bytes:
    return hashlib.blake2b(data, digest_size=digest_size).digest()
