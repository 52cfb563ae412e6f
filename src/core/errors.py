"""Storekey exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Every failure is a local validation error with no partial effects.
"""

from __future__ import annotations


class StoreKeyError(Exception):
    """Base exception for all storekey failures."""


class StoreKeyConfigError(StoreKeyError):
    """Raised for invalid runtime configuration."""


class StoreKeyDependencyError(StoreKeyError):
    """Raised when an optional runtime dependency is missing."""


class InvalidWidthError(StoreKeyError):
    """Raised when a hash output width is not a positive multiple of 64 bits."""


class InvalidIdentifierError(StoreKeyError):
    """Raised for empty or non-string pallet and storage item names."""


class ArityMismatchError(StoreKeyError):
    """Raised when argument count disagrees with the declared key arity."""


class UnknownHasherKindError(StoreKeyError):
    """Raised for hasher tags outside the supported enumeration."""


class StorageKeyDecodeError(StoreKeyError):
    """Raised when a storage key does not fit the expected item layout."""


class StorageLayoutError(StoreKeyError):
    """Raised for invalid layout catalogs and unknown storage items."""


class StoreKeyCodecError(StoreKeyError):
    """Raised when an argument value cannot be encoded."""
