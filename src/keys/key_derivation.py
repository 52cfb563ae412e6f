"""Storage key derivation.

A storage key is ``twox128(pallet) ++ twox128(item)`` followed by each
encoded argument transformed by its declared hasher, in declaration
order. The first 32 bytes form the key prefix shared by every entry of
the same storage item, which is what prefix scans enumerate.

All functions here are pure: they read no global state and perform no I/O.
"""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from core.constants import IDENTIFIER_HASH_BITS
from core.errors import ArityMismatchError, StoreKeyCodecError
from core.types import HasherKind, StorageArgument, StorageItemLayout
from hashing.hashers import apply_hasher, parse_hasher_kind
from hashing.twox import hash_identifier

ArgumentInput = Union[StorageArgument, Tuple[bytes, Union[HasherKind, str]]]


def key_prefix(pallet: str, item: str) -> bytes:
    """Build the 32-byte prefix shared by all entries of a storage item.

    Args:
        pallet: Pallet name, e.g. ``System``.
        item: Storage item name, e.g. ``Account``.

    Returns:
        ``hash_identifier(pallet) ++ hash_identifier(item)``.

    Raises:
        InvalidIdentifierError: If either name is empty or not a string.
    """
    return hash_identifier(pallet, IDENTIFIER_HASH_BITS) + hash_identifier(
        item, IDENTIFIER_HASH_BITS
    )


def storage_key(
    pallet: str,
    item: str,
    args: Sequence[ArgumentInput],
    expected_arity: int,
) -> bytes:
    """Build the full storage key for one entry.

    Args:
        pallet: Pallet name.
        item: Storage item name.
        args: Ordered encoded arguments paired with their hashers.
        expected_arity: Declared key arity of the item: 0 for a plain
            value, 1 for a map, 2 for a double map.

    Returns:
        Key prefix followed by every hashed argument.

    Raises:
        ArityMismatchError: If len(args) differs from expected_arity.
        UnknownHasherKindError: If a hasher tag is not supported.
        InvalidIdentifierError: If pallet or item is invalid.
    """
    _check_arity(len(args), expected_arity, pallet, item)
    normalized_args = [_normalize_argument(argument) for argument in args]
    prefix = key_prefix(pallet, item)
    return prefix + _hash_arguments(normalized_args)


def storage_key_for(layout: StorageItemLayout, encoded_args: Sequence[bytes]) -> bytes:
    """Build a storage key using the hashers declared by a layout.

    Args:
        layout: Declared item layout, usually from a layout catalog.
        encoded_args: Encoded arguments in declaration order.

    Returns:
        Full storage key.

    Raises:
        ArityMismatchError: If argument count differs from layout arity.
    """
    _check_arity(len(encoded_args), layout.arity, layout.pallet, layout.item)
    arguments = [
        StorageArgument(encoded=_as_bytes(encoded), hasher=hasher)
        for encoded, hasher in zip(encoded_args, layout.hashers)
    ]
    return storage_key(layout.pallet, layout.item, arguments, layout.arity)


def partial_key_prefix(layout: StorageItemLayout, encoded_args: Sequence[bytes]) -> bytes:
    """Build an iteration prefix with the leading arguments fixed.

    For a double map keyed by ``(era, account)`` this yields the prefix of
    every entry in one era. With no arguments it equals key_prefix.

    Args:
        layout: Declared item layout.
        encoded_args: Encoded values for the first ``k`` arguments.

    Returns:
        Key prefix followed by the first ``k`` hashed arguments.

    Raises:
        ArityMismatchError: If k is not smaller than the layout arity.
    """
    fixed_count = len(encoded_args)
    if fixed_count > 0 and fixed_count >= layout.arity:
        raise ArityMismatchError(
            f"Partial prefix for {layout.qualified_name} accepts fewer than "
            f"{layout.arity} arguments, got {fixed_count}. Use storage_key_for for full keys."
        )
    arguments = [
        StorageArgument(encoded=_as_bytes(encoded), hasher=hasher)
        for encoded, hasher in zip(encoded_args, layout.hashers)
    ]
    return key_prefix(layout.pallet, layout.item) + _hash_arguments(arguments)


def _hash_arguments(arguments: Sequence[StorageArgument]) -> bytes:
    return b"".join(apply_hasher(argument.hasher, argument.encoded) for argument in arguments)


def _normalize_argument(argument: ArgumentInput) -> StorageArgument:
    if isinstance(argument, StorageArgument):
        return StorageArgument(
            encoded=_as_bytes(argument.encoded),
            hasher=parse_hasher_kind(argument.hasher),
        )
    encoded, hasher = argument
    return StorageArgument(encoded=_as_bytes(encoded), hasher=parse_hasher_kind(hasher))


def _as_bytes(encoded: object) -> bytes:
    if isinstance(encoded, (bytes, bytearray, memoryview)):
        return bytes(encoded)
    raise StoreKeyCodecError(
        f"Storage key arguments must be encoded bytes, got {type(encoded).__name__}."
    )


def _check_arity(actual: int, expected: int, pallet: str, item: str) -> None:
    if isinstance(expected, bool) or not isinstance(expected, int) or expected < 0:
        raise ArityMismatchError(
            f"Expected arity for {pallet}.{item} must be a non-negative integer, got {expected!r}."
        )
    if actual != expected:
        raise ArityMismatchError(
            f"{pallet}.{item} takes {expected} key argument(s), got {actual}."
        )
