"""Textual hex form for storage keys and digests."""

from __future__ import annotations

from core.constants import HEX_PREFIX
from core.errors import StoreKeyCodecError


def to_hex(data: bytes) -> str:
    """Render bytes as lowercase hex with a ``0x`` prefix."""
    return HEX_PREFIX + bytes(data).hex()


def from_hex(text: str) -> bytes:
    """Parse hex text with or without a ``0x`` prefix.

    Args:
        text: Hex string in either case.

    Returns:
        Decoded bytes.

    Raises:
        StoreKeyCodecError: If text is not valid even-length hex.
    """
    body = text.strip()
    if body[:2].lower() == HEX_PREFIX:
        body = body[2:]
    try:
        return bytes.fromhex(body)
    except ValueError as error:
        raise StoreKeyCodecError(
            f"Invalid hex value '{text}': expected an even number of hex digits."
        ) from error
