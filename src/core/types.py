"""Shared typed models.

This module defines immutable data models used by hashing, key
derivation, layout catalog, and client layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.errors import UnknownHasherKindError


class HasherKind(str, Enum):
    """Closed set of per-argument storage hashers.

    Values match the hasher names declared in chain metadata.
    """

    IDENTITY = "Identity"
    BLAKE2_128 = "Blake2_128"
    BLAKE2_256 = "Blake2_256"
    BLAKE2_128_CONCAT = "Blake2_128Concat"
    TWOX_128 = "Twox128"
    TWOX_256 = "Twox256"
    TWOX_64_CONCAT = "Twox64Concat"


def parse_hasher_kind(tag: HasherKind | str) -> HasherKind:
    """Resolve a hasher tag into a HasherKind.

    Args:
        tag: Enum member or its exact metadata name, e.g. ``Blake2_128Concat``.

    Returns:
        Matching hasher kind.

    Raises:
        UnknownHasherKindError: If tag is not a supported hasher.
    """
    if isinstance(tag, HasherKind):
        return tag
    if isinstance(tag, str):
        try:
            return HasherKind(tag)
        except ValueError:
            pass
    supported_rows = ", ".join(kind.value for kind in HasherKind)
    raise UnknownHasherKindError(
        f"Unknown hasher kind {tag!r}. Use one of: {supported_rows}."
    )


@dataclass(frozen=True)
class StorageArgument:
    """One encoded storage key argument and the hasher applied to it.

    Attributes:
        encoded: Opaque codec output for the argument.
        hasher: Transform applied before appending to the key.
    """

    encoded: bytes
    hasher: HasherKind


@dataclass(frozen=True)
class StorageItemLayout:
    """Declared key shape of one storage item.

    Attributes:
        pallet: Pallet name, exactly as declared in metadata.
        item: Storage item name, exactly as declared in metadata.
        hashers: Ordered hasher per key argument. Empty for plain values.
            Metadata names such as ``"Twox64Concat"`` are converted to
            HasherKind members on construction.
    """

    pallet: str
    item: str
    hashers: tuple[HasherKind, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "hashers", tuple(parse_hasher_kind(tag) for tag in self.hashers)
        )

    @property
    def arity(self) -> int:
        """Number of key arguments the item expects."""
        return len(self.hashers)

    @property
    def qualified_name(self) -> str:
        """Dotted ``Pallet.Item`` name used in logs and listings."""
        return f"{self.pallet}.{self.item}"
