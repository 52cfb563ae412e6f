"""Core constants used across storekey modules.

This module centralizes hashing widths, codec limits, and defaults.
Keeping values here avoids magic literals in derivation logic.
"""

from __future__ import annotations

HASH_LANE_BITS = 64
IDENTIFIER_HASH_BITS = 128
IDENTIFIER_ENCODING = "utf-8"
KEY_PREFIX_LENGTH = 2 * IDENTIFIER_HASH_BITS // 8
BLAKE2_128_DIGEST_SIZE = 16
BLAKE2_256_DIGEST_SIZE = 32
TWOX_64_BITS = 64
TWOX_128_BITS = 128
TWOX_256_BITS = 256
HEX_PREFIX = "0x"
ACCOUNT_ID_LENGTH = 32
DEFAULT_SS58_FORMAT = 42
MAX_SS58_FORMAT = 16383
SUPPORTED_UNSIGNED_BITS = (8, 16, 32, 64, 128, 256)
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LAYOUT_SCHEMA_VERSION = 1
