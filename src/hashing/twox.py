"""Seeded multi-lane xxHash64 digests.

The twox digest of ``bits`` width runs ``bits // 64`` independent
xxHash64 passes over the same input, seeded 0, 1, 2, and so on. Each
64-bit lane is written little-endian and the lanes are concatenated.
"""

from __future__ import annotations

import xxhash

from core.constants import HASH_LANE_BITS, IDENTIFIER_ENCODING, IDENTIFIER_HASH_BITS
from core.errors import InvalidIdentifierError, InvalidWidthError

_LANE_BYTES = HASH_LANE_BITS // 8


def twox_hash(data: bytes, bits: int) -> bytes:
    """Hash raw bytes into a ``bits``-wide twox digest.

    Args:
        data: Input bytes. Empty input is allowed.
        bits: Output width in bits.

    Returns:
        Digest of exactly ``bits // 8`` bytes.

    Raises:
        InvalidWidthError: If bits is not a positive multiple of 64.
    """
    lane_count = _lane_count(bits)
    lanes = bytearray()
    for seed in range(lane_count):
        lane_value = xxhash.xxh64(data, seed=seed).intdigest()
        lanes.extend(lane_value.to_bytes(_LANE_BYTES, "little"))
    return bytes(lanes)


def hash_identifier(name: str, bits: int = IDENTIFIER_HASH_BITS) -> bytes:
    """Hash a pallet or storage item name.

    The name is hashed as UTF-8 exactly as given. No case folding or
    whitespace normalization is applied.

    Args:
        name: Non-empty identifier string.
        bits: Output width in bits, 128 for storage keys.

    Returns:
        Digest of exactly ``bits // 8`` bytes.

    Raises:
        InvalidIdentifierError: If name is empty or not a string.
        InvalidWidthError: If bits is not a positive multiple of 64.
    """
    validate_identifier(name)
    return twox_hash(name.encode(IDENTIFIER_ENCODING), bits)


def validate_identifier(name: object) -> str:
    """Ensure an identifier is a non-empty string.

    Args:
        name: Candidate identifier.

    Returns:
        The identifier unchanged.

    Raises:
        InvalidIdentifierError: If name is empty or not a string.
    """
    if not isinstance(name, str):
        raise InvalidIdentifierError(
            f"Identifier must be a string, got {type(name).__name__}."
        )
    if not name:
        raise InvalidIdentifierError(
            "Identifier must be non-empty. Use the exact pallet or item name from metadata."
        )
    return name


def _lane_count(bits: object) -> int:
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidWidthError(f"Hash width must be an integer, got {type(bits).__name__}.")
    if bits <= 0 or bits % HASH_LANE_BITS != 0:
        raise InvalidWidthError(
            f"Hash width {bits} is invalid: expected a positive multiple of {HASH_LANE_BITS}."
        )
    return bits // HASH_LANE_BITS
