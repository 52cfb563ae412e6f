"""Unit tests for storage key decoding."""

from __future__ import annotations

import pytest

from core.errors import StorageKeyDecodeError
from core.types import HasherKind, StorageItemLayout
from keys.key_decoding import decode_key_arguments
from keys.key_derivation import storage_key_for

ACCOUNT_ID = bytes(range(32))
SYSTEM_ACCOUNT = StorageItemLayout("System", "Account", (HasherKind.BLAKE2_128_CONCAT,))


def test_decode_recovers_concat_argument() -> None:
    """Blake2_128Concat keys should yield the original account bytes."""
    key = storage_key_for(SYSTEM_ACCOUNT, [ACCOUNT_ID])

    assert decode_key_arguments(key, SYSTEM_ACCOUNT, [None]) == (ACCOUNT_ID,)


def test_decode_mixed_double_map_returns_none_for_opaque_hasher() -> None:
    """Hash-only arguments should be skipped and reported as None."""
    layout = StorageItemLayout(
        "Pallet", "Double", (HasherKind.BLAKE2_256, HasherKind.IDENTITY)
    )
    key = storage_key_for(layout, [b"secret", b"\x2a\x00"])

    assert decode_key_arguments(key, layout, [6, 2]) == (None, b"\x2a\x00")


def test_decode_uses_sizes_for_leading_transparent_argument() -> None:
    """Explicit sizes should split consecutive transparent arguments."""
    layout = StorageItemLayout(
        "Staking", "ErasStakers", (HasherKind.TWOX_64_CONCAT, HasherKind.TWOX_64_CONCAT)
    )
    era = (9).to_bytes(4, "little")
    key = storage_key_for(layout, [era, ACCOUNT_ID])

    assert decode_key_arguments(key, layout, [4, None]) == (era, ACCOUNT_ID)


def test_decode_rejects_key_from_other_item() -> None:
    """Keys with a foreign prefix should be rejected."""
    other = StorageItemLayout("Assets", "Account", (HasherKind.BLAKE2_128_CONCAT,))
    key = storage_key_for(other, [ACCOUNT_ID])

    with pytest.raises(StorageKeyDecodeError):
        decode_key_arguments(key, SYSTEM_ACCOUNT, [None])


def test_decode_rejects_tampered_concat_digest() -> None:
    """A Concat digest that does not match its payload should be rejected."""
    key = bytearray(storage_key_for(SYSTEM_ACCOUNT, [ACCOUNT_ID]))
    key[-1] ^= 0xFF

    with pytest.raises(StorageKeyDecodeError):
        decode_key_arguments(bytes(key), SYSTEM_ACCOUNT, [None])


def test_decode_rejects_truncated_key() -> None:
    """Sizes larger than the remaining key should be rejected."""
    key = storage_key_for(SYSTEM_ACCOUNT, [ACCOUNT_ID])

    with pytest.raises(StorageKeyDecodeError):
        decode_key_arguments(key, SYSTEM_ACCOUNT, [64])


def test_decode_rejects_trailing_bytes() -> None:
    """Sizes smaller than the payload should leave trailing bytes and fail."""
    key = storage_key_for(SYSTEM_ACCOUNT, [ACCOUNT_ID])

    with pytest.raises(StorageKeyDecodeError):
        decode_key_arguments(key, SYSTEM_ACCOUNT, [16])


def test_decode_accepts_layout_with_metadata_hasher_names() -> None:
    """String hasher names in a layout should decode like enum members."""
    layout = StorageItemLayout("Staking", "ErasStakers", ("Twox64Concat", "Twox64Concat"))
    era = (9).to_bytes(4, "little")
    key = storage_key_for(layout, [era, ACCOUNT_ID])

    assert decode_key_arguments(key, layout, [4, None]) == (era, ACCOUNT_ID)
