"""Public SDK surface for storekey.

This module provides a stable import path for key derivation users.
It re-exports the primary client, pure derivation functions, and models.
"""

from __future__ import annotations

from codec.argument_encoding import (
    encode_account_id,
    encode_bool,
    encode_bytes,
    encode_compact,
    encode_text,
    encode_typed_argument,
    encode_unsigned,
)
from core.config import StoreKeyConfig
from core.errors import (
    ArityMismatchError,
    InvalidIdentifierError,
    InvalidWidthError,
    StorageKeyDecodeError,
    StorageLayoutError,
    StoreKeyCodecError,
    StoreKeyError,
    UnknownHasherKindError,
)
from core.types import HasherKind, StorageArgument, StorageItemLayout
from hashing.hashers import apply_hasher, parse_hasher_kind
from hashing.twox import hash_identifier, twox_hash
from keys.hex_format import from_hex, to_hex
from keys.key_client import StorageKeyClient
from keys.key_decoding import decode_key_arguments
from keys.key_derivation import key_prefix, partial_key_prefix, storage_key, storage_key_for
from keys.storage_layout import (
    StorageLayoutCatalog,
    default_storage_layouts,
    load_storage_layouts,
)

__all__ = [
    "ArityMismatchError",
    "HasherKind",
    "InvalidIdentifierError",
    "InvalidWidthError",
    "StorageArgument",
    "StorageItemLayout",
    "StorageKeyClient",
    "StorageKeyDecodeError",
    "StorageLayoutCatalog",
    "StorageLayoutError",
    "StoreKeyCodecError",
    "StoreKeyConfig",
    "StoreKeyError",
    "UnknownHasherKindError",
    "apply_hasher",
    "decode_key_arguments",
    "default_storage_layouts",
    "encode_account_id",
    "encode_bool",
    "encode_bytes",
    "encode_compact",
    "encode_text",
    "encode_typed_argument",
    "encode_unsigned",
    "from_hex",
    "hash_identifier",
    "key_prefix",
    "load_storage_layouts",
    "parse_hasher_kind",
    "partial_key_prefix",
    "storage_key",
    "storage_key_for",
    "to_hex",
    "twox_hash",
]
