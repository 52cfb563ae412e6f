"""Unit tests for storage key derivation."""

from __future__ import annotations

import hashlib

import pytest

from core.errors import ArityMismatchError, InvalidIdentifierError, UnknownHasherKindError
from core.types import HasherKind, StorageArgument, StorageItemLayout
from hashing.twox import hash_identifier, twox_hash
from keys.key_derivation import key_prefix, partial_key_prefix, storage_key, storage_key_for

ALICE_ACCOUNT_ID = bytes.fromhex(
    "d43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
)
SYSTEM_ACCOUNT_PREFIX = (
    "26aa394eea5630e07c48ae0c9558cef7b99d880ec681799c0cf30e8886371da9"
)


def test_key_prefix_concatenates_identifier_hashes() -> None:
    """Timestamp.Now prefix should be the two identifier digests back to back."""
    prefix = key_prefix("Timestamp", "Now")

    assert prefix == hash_identifier("Timestamp", 128) + hash_identifier("Now", 128)
    assert prefix.hex() == (
        "f0c365c3cf59d671eb72da0e7a4113c49f1f0515f462cdcf84e0f1d6045dfcbb"
    )


def test_plain_value_key_equals_prefix() -> None:
    """A zero-arity item should derive exactly its 32-byte prefix."""
    key = storage_key("System", "Events", [], expected_arity=0)

    assert key.hex() == "26aa394eea5630e07c48ae0c9558cef780d41e5e16056765bc8461851072c9d7"


def test_system_account_key_for_alice_matches_chain_vector() -> None:
    """Single-map key should append blake2_128(account) followed by the account."""
    key = storage_key(
        "System",
        "Account",
        [(ALICE_ACCOUNT_ID, HasherKind.BLAKE2_128_CONCAT)],
        expected_arity=1,
    )

    assert key.hex() == (
        SYSTEM_ACCOUNT_PREFIX
        + "de1e86a9a8c739864cf3cc5ec2bea59f"
        + ALICE_ACCOUNT_ID.hex()
    )


def test_key_prefix_is_strict_prefix_of_full_key() -> None:
    """Every full key should start with the item's prefix and be longer."""
    prefix = key_prefix("System", "Account")
    key = storage_key(
        "System", "Account", [StorageArgument(b"\x01\x02", HasherKind.TWOX_128)], 1
    )

    assert key.startswith(prefix) and len(key) > len(prefix)


def test_storage_key_is_idempotent() -> None:
    """Identical inputs should always derive identical bytes."""
    args = [(b"\x05", "Twox64Concat"), (ALICE_ACCOUNT_ID, "Blake2_128Concat")]

    assert storage_key("Staking", "ErasStakers", args, 2) == storage_key(
        "Staking", "ErasStakers", args, 2
    )


def test_identity_argument_ends_key_unchanged() -> None:
    """Identity hasher should append raw bytes with no transformation."""
    raw = b"\xde\xad\xbe\xef"

    key = storage_key("Pallet", "Item", [(raw, HasherKind.IDENTITY)], 1)

    assert key.endswith(raw) and len(key) == 32 + len(raw)


def test_blake2_128_concat_argument_layout() -> None:
    """Blake2_128Concat suffix should be hash(raw) ++ raw."""
    raw = b"payload"

    key = storage_key("Pallet", "Item", [(raw, HasherKind.BLAKE2_128_CONCAT)], 1)
    suffix = key[32:]

    assert len(suffix) == 16 + len(raw)
    assert suffix[:16] == hashlib.blake2b(raw, digest_size=16).digest()
    assert suffix[16:] == raw


def test_double_map_appends_arguments_in_declaration_order() -> None:
    """Double-map keys should hash each argument in order after the prefix."""
    era = (7).to_bytes(4, "little")

    key = storage_key(
        "Staking",
        "ErasStakers",
        [(era, HasherKind.TWOX_64_CONCAT), (ALICE_ACCOUNT_ID, HasherKind.TWOX_64_CONCAT)],
        expected_arity=2,
    )

    assert key == (
        key_prefix("Staking", "ErasStakers")
        + twox_hash(era, 64)
        + era
        + twox_hash(ALICE_ACCOUNT_ID, 64)
        + ALICE_ACCOUNT_ID
    )


def test_storage_key_without_arguments_for_map_raises_arity_mismatch() -> None:
    """System.Account requires one argument."""
    with pytest.raises(ArityMismatchError):
        storage_key("System", "Account", [], expected_arity=1)


def test_storage_key_with_extra_argument_raises_arity_mismatch() -> None:
    """Supplying arguments to a plain value should fail."""
    with pytest.raises(ArityMismatchError):
        storage_key("Timestamp", "Now", [(b"\x00", HasherKind.IDENTITY)], expected_arity=0)


def test_storage_key_rejects_unknown_hasher_tag() -> None:
    """Unsupported hasher names should fail before any key is produced."""
    with pytest.raises(UnknownHasherKindError):
        storage_key("System", "Account", [(ALICE_ACCOUNT_ID, "Keccak256")], expected_arity=1)


def test_storage_key_rejects_empty_pallet() -> None:
    """Empty pallet names are invalid identifiers."""
    with pytest.raises(InvalidIdentifierError):
        storage_key("", "Now", [], expected_arity=0)


def test_storage_key_for_uses_layout_hashers() -> None:
    """Layout-driven derivation should match explicit hasher pairing."""
    layout = StorageItemLayout("System", "Account", (HasherKind.BLAKE2_128_CONCAT,))

    assert storage_key_for(layout, [ALICE_ACCOUNT_ID]) == storage_key(
        "System", "Account", [(ALICE_ACCOUNT_ID, HasherKind.BLAKE2_128_CONCAT)], 1
    )


def test_storage_key_for_checks_layout_arity() -> None:
    """Layout arity should be enforced for full keys."""
    layout = StorageItemLayout("System", "Account", (HasherKind.BLAKE2_128_CONCAT,))

    with pytest.raises(ArityMismatchError):
        storage_key_for(layout, [])


def test_partial_key_prefix_fixes_leading_double_map_argument() -> None:
    """Fixing the first argument should yield a prefix of every matching key."""
    layout = StorageItemLayout(
        "Staking", "ErasStakers", (HasherKind.TWOX_64_CONCAT, HasherKind.TWOX_64_CONCAT)
    )
    era = (3).to_bytes(4, "little")

    partial = partial_key_prefix(layout, [era])
    full = storage_key_for(layout, [era, ALICE_ACCOUNT_ID])

    assert full.startswith(partial) and len(partial) == 32 + 8 + len(era)
    assert partial_key_prefix(layout, []) == key_prefix("Staking", "ErasStakers")


def test_partial_key_prefix_rejects_full_argument_list() -> None:
    """A partial prefix must leave at least one argument open."""
    layout = StorageItemLayout("System", "Account", (HasherKind.BLAKE2_128_CONCAT,))

    with pytest.raises(ArityMismatchError):
        partial_key_prefix(layout, [ALICE_ACCOUNT_ID])


def test_partial_key_prefix_accepts_metadata_hasher_names() -> None:
    """Layouts built from metadata name strings should derive the same prefix."""
    tagged = StorageItemLayout("Staking", "ErasStakers", ("Twox64Concat", "Twox64Concat"))
    typed = StorageItemLayout(
        "Staking", "ErasStakers", (HasherKind.TWOX_64_CONCAT, HasherKind.TWOX_64_CONCAT)
    )
    era = (3).to_bytes(4, "little")

    assert tagged.hashers == typed.hashers
    assert partial_key_prefix(tagged, [era]) == partial_key_prefix(typed, [era])


def test_layout_rejects_unknown_hasher_name() -> None:
    """Unknown hasher names should fail when the layout is built."""
    with pytest.raises(UnknownHasherKindError):
        StorageItemLayout("System", "Account", ("Sha3_256",))
