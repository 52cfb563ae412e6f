"""Unit tests for hex rendering helpers."""

from __future__ import annotations

import pytest

from core.errors import StoreKeyCodecError
from keys.hex_format import from_hex, to_hex


def test_to_hex_is_lowercase_with_prefix() -> None:
    """Hex output should be lowercase and 0x-prefixed."""
    assert to_hex(b"\xab\xcd") == "0xabcd"


def test_from_hex_accepts_optional_prefix_and_case() -> None:
    """Hex input should parse with or without prefix in either case."""
    assert from_hex("0XABcd") == from_hex("abcd") == b"\xab\xcd"


def test_from_hex_rejects_odd_length() -> None:
    """Odd-length hex should raise a codec error."""
    with pytest.raises(StoreKeyCodecError):
        from_hex("0xabc")
