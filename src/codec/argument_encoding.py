"""SCALE-style encoders for storage key arguments.

This module produces the opaque argument bytes that key derivation
hashes. It covers the primitive shapes storage maps are keyed by:
account ids, fixed-width unsigned integers, compact integers, booleans,
byte strings, and text. SCALE encoding and SS58 address decoding are
delegated to scalecodec.
"""

from __future__ import annotations

from typing import Callable

from scalecodec.base import RuntimeConfiguration
from scalecodec.type_registry import load_type_registry_preset
from scalecodec.utils.ss58 import ss58_decode

from core.constants import (
    ACCOUNT_ID_LENGTH,
    HEX_PREFIX,
    SUPPORTED_UNSIGNED_BITS,
)
from core.errors import StoreKeyCodecError
from keys.hex_format import from_hex

_TRUE_WORDS = frozenset({"true", "1", "yes"})
_FALSE_WORDS = frozenset({"false", "0", "no"})

_RUNTIME_CONFIG = RuntimeConfiguration()
_RUNTIME_CONFIG.update_type_registry(load_type_registry_preset("legacy"))


def encode_account_id(value: str, ss58_format: int | None = None) -> bytes:
    """Encode a 32-byte account id from an SS58 address or hex public key.

    Args:
        value: SS58 address or ``0x``-prefixed 32-byte hex.
        ss58_format: Optional network prefix the address must carry.

    Returns:
        Raw 32-byte account id.

    Raises:
        StoreKeyCodecError: If value is not a valid address or key.
    """
    text = value.strip()
    if text.lower().startswith(HEX_PREFIX):
        account_id = from_hex(text)
    else:
        try:
            account_id = bytes.fromhex(ss58_decode(text, valid_ss58_format=ss58_format))
        except ValueError as error:
            raise StoreKeyCodecError(f"Invalid SS58 address '{value}': {error}") from error
    if len(account_id) != ACCOUNT_ID_LENGTH:
        raise StoreKeyCodecError(
            f"Account id must be {ACCOUNT_ID_LENGTH} bytes, got {len(account_id)}."
        )
    return account_id


def encode_unsigned(value: int, bits: int) -> bytes:
    """Encode an unsigned integer as fixed-width little-endian.

    Args:
        value: Non-negative integer.
        bits: Integer width, one of 8, 16, 32, 64, 128, 256.

    Returns:
        ``bits // 8`` little-endian bytes.

    Raises:
        StoreKeyCodecError: If width is unsupported or value is out of range.
    """
    if bits not in SUPPORTED_UNSIGNED_BITS:
        supported_rows = ", ".join(str(width) for width in SUPPORTED_UNSIGNED_BITS)
        raise StoreKeyCodecError(f"Unsupported integer width u{bits}. Use one of: {supported_rows}.")
    _require_non_negative_int(value)
    if value >= 1 << bits:
        raise StoreKeyCodecError(f"Value {value} does not fit in u{bits}.")
    return _scale_encode(f"u{bits}", value)


def encode_compact(value: int) -> bytes:
    """Encode a non-negative integer in SCALE compact form.

    Raises:
        StoreKeyCodecError: If value is negative or not an integer.
    """
    _require_non_negative_int(value)
    return _scale_encode("Compact<u128>", value)


def encode_bool(value: bool) -> bytes:
    return _scale_encode("bool", bool(value))


def encode_bytes(value: bytes) -> bytes:
    """Encode a byte string with its compact length prefix."""
    return _scale_encode("Bytes", bytes(value))


def encode_text(value: str) -> bytes:
    """Encode UTF-8 text with its compact byte-length prefix."""
    return _scale_encode("Bytes", value.encode("utf-8"))


def _scale_encode(type_string: str, value: object) -> bytes:
    try:
        scale_object = _RUNTIME_CONFIG.create_scale_object(type_string)
        return bytes(scale_object.encode(value).data)
    except (ValueError, TypeError, OverflowError) as error:
        raise StoreKeyCodecError(f"Cannot encode {value!r} as {type_string}: {error}") from error


def encode_typed_argument(argument: str, ss58_format: int | None = None) -> bytes:
    """Encode a ``type:value`` argument as used on the command line.

    Supported types are ``account``, ``u8`` through ``u256``, ``compact``,
    ``bool``, ``hex`` (raw bytes, no length prefix), and ``str``.

    Args:
        argument: Typed argument text, e.g. ``u32:7`` or ``account:5Grw...``.
        ss58_format: Optional network prefix enforced for account values.

    Returns:
        Encoded argument bytes.

    Raises:
        StoreKeyCodecError: If the type is unknown or the value is invalid.
    """
    type_name, separator, raw_value = argument.partition(":")
    if not separator:
        raise StoreKeyCodecError(
            f"Argument '{argument}' must use the form type:value, e.g. u32:7."
        )
    type_name = type_name.strip().lower()
    if type_name == "account":
        return encode_account_id(raw_value, ss58_format)
    encoder = _SIMPLE_ENCODERS.get(type_name)
    if encoder is not None:
        return encoder(raw_value)
    if type_name.startswith("u") and type_name[1:].isdigit():
        return encode_unsigned(_parse_int(raw_value), int(type_name[1:]))
    supported_rows = ", ".join(
        ["account", *(f"u{width}" for width in SUPPORTED_UNSIGNED_BITS), *_SIMPLE_ENCODERS]
    )
    raise StoreKeyCodecError(f"Unknown argument type '{type_name}'. Use one of: {supported_rows}.")


def _parse_int(raw_value: str) -> int:
    text = raw_value.strip()
    try:
        return int(text, 0)
    except ValueError as error:
        raise StoreKeyCodecError(f"Invalid integer value '{raw_value}'.") from error


def _parse_bool(raw_value: str) -> bytes:
    word = raw_value.strip().lower()
    if word in _TRUE_WORDS:
        return encode_bool(True)
    if word in _FALSE_WORDS:
        return encode_bool(False)
    raise StoreKeyCodecError(f"Invalid boolean value '{raw_value}'. Use true or false.")


def _require_non_negative_int(value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise StoreKeyCodecError(f"Expected an integer, got {type(value).__name__}.")
    if value < 0:
        raise StoreKeyCodecError(f"Expected a non-negative integer, got {value}.")


_SIMPLE_ENCODERS: dict[str, Callable[[str], bytes]] = {
    "compact": lambda raw_value: encode_compact(_parse_int(raw_value)),
    "bool": _parse_bool,
    "hex": from_hex,
    "str": encode_text,
}
