"""Storage key decoding for prefix scans.

Keys returned by a prefix enumeration can be walked back into their
arguments when the hashers are transparent. Identity and Concat hashers
keep raw argument bytes in the key, while hash-only hashers do not.
"""

from __future__ import annotations

from typing import Optional, Sequence

from core.errors import StorageKeyDecodeError
from core.types import HasherKind, StorageItemLayout
from hashing.hashers import apply_hasher, hasher_digest_size, is_transparent
from keys.key_derivation import key_prefix


def decode_key_arguments(
    key: bytes,
    layout: StorageItemLayout,
    argument_sizes: Sequence[Optional[int]],
) -> tuple[bytes | None, ...]:
    """Recover raw argument bytes from a full storage key.

    Args:
        key: Full storage key for one entry of ``layout``.
        layout: Declared item layout.
        argument_sizes: Raw byte length of each argument. Entries for
            hash-only hashers are ignored. The last entry may be None to
            take the rest of the key.

    Returns:
        One entry per argument: raw bytes for transparent hashers and
        None for hash-only hashers.

    Raises:
        StorageKeyDecodeError: If the key does not fit the layout.
    """
    if len(argument_sizes) != layout.arity:
        raise StorageKeyDecodeError(
            f"{layout.qualified_name} has {layout.arity} key argument(s), "
            f"got {len(argument_sizes)} size hint(s)."
        )
    raw_key = bytes(key)
    prefix = key_prefix(layout.pallet, layout.item)
    if not raw_key.startswith(prefix):
        raise StorageKeyDecodeError(
            f"Key does not start with the {layout.qualified_name} prefix."
        )
    offset = len(prefix)
    decoded: list[bytes | None] = []
    last_index = layout.arity - 1
    for index, hasher in enumerate(layout.hashers):
        size_hint = argument_sizes[index]
        value, offset = _take_argument(
            raw_key, offset, hasher, size_hint, index == last_index, layout
        )
        decoded.append(value)
    if offset != len(raw_key):
        raise StorageKeyDecodeError(
            f"Key for {layout.qualified_name} has {len(raw_key) - offset} trailing byte(s)."
        )
    return tuple(decoded)


def _take_argument(
    raw_key: bytes,
    offset: int,
    hasher: HasherKind,
    size_hint: Optional[int],
    is_last: bool,
    layout: StorageItemLayout,
) -> tuple[bytes | None, int]:
    digest_size = hasher_digest_size(hasher)
    digest = _take(raw_key, offset, digest_size, layout)
    offset += digest_size
    if not is_transparent(hasher):
        return None, offset
    if size_hint is None:
        if not is_last:
            raise StorageKeyDecodeError(
                f"{layout.qualified_name}: only the last transparent argument may omit its size."
            )
        size_hint = len(raw_key) - offset
    if size_hint < 0:
        raise StorageKeyDecodeError(f"{layout.qualified_name}: argument sizes must be >= 0.")
    value = _take(raw_key, offset, size_hint, layout)
    if digest_size and apply_hasher(hasher, value)[:digest_size] != digest:
        raise StorageKeyDecodeError(
            f"{layout.qualified_name}: {hasher.value} digest does not match its argument bytes."
        )
    return value, offset + size_hint


def _take(raw_key: bytes, offset: int, size: int, layout: StorageItemLayout) -> bytes:
    end = offset + size
    if end > len(raw_key):
        raise StorageKeyDecodeError(
            f"Key for {layout.qualified_name} is truncated: needed {end} bytes, "
            f"got {len(raw_key)}."
        )
    return raw_key[offset:end]
