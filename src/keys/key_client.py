"""Python SDK for storage key derivation.

This module exposes a client bound to a storage layout catalog, so
callers pass only pallet, item, and encoded arguments while hashers and
arity come from the catalog.
"""

from __future__ import annotations

from typing import Optional, Sequence

from core.config import StoreKeyConfig
from core.logging_config import get_logger
from core.types import StorageItemLayout
from keys.hex_format import to_hex
from keys.key_decoding import decode_key_arguments
from keys.key_derivation import partial_key_prefix, storage_key_for
from keys.storage_layout import (
    StorageLayoutCatalog,
    default_storage_layouts,
    load_storage_layouts,
)

_LOGGER = get_logger(__name__)


class StorageKeyClient:
    """Primary SDK entry point for catalog-driven key derivation."""

    def __init__(
        self,
        config: StoreKeyConfig | None = None,
        catalog: StorageLayoutCatalog | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            catalog: Optional layout catalog overriding the configured one.
        """
        self._config = config or StoreKeyConfig.from_env()
        self._catalog = catalog or _load_catalog(self._config)

    @property
    def config(self) -> StoreKeyConfig:
        return self._config

    @property
    def catalog(self) -> StorageLayoutCatalog:
        return self._catalog

    def layout(self, pallet: str, item: str) -> StorageItemLayout:
        """Return the catalog layout for one storage item.

        Raises:
            StorageLayoutError: If the item is not in the catalog.
        """
        return self._catalog.lookup(pallet, item)

    def key(self, pallet: str, item: str, *encoded_args: bytes) -> bytes:
        """Derive the full storage key for one entry.

        Args:
            pallet: Pallet name.
            item: Storage item name.
            encoded_args: Encoded arguments in declaration order.

        Returns:
            Storage key bytes.

        Raises:
            StorageLayoutError: If the item is not in the catalog.
            ArityMismatchError: If argument count differs from the layout.
        """
        layout = self.layout(pallet, item)
        derived_key = storage_key_for(layout, encoded_args)
        _LOGGER.debug(
            "storage_key_derived",
            item=layout.qualified_name,
            argument_count=len(encoded_args),
            key=to_hex(derived_key),
        )
        return derived_key

    def key_prefix(self, pallet: str, item: str, *encoded_args: bytes) -> bytes:
        """Derive an iteration prefix, optionally with leading arguments fixed.

        Raises:
            StorageLayoutError: If the item is not in the catalog.
            ArityMismatchError: If all arguments are supplied.
        """
        layout = self.layout(pallet, item)
        prefix = partial_key_prefix(layout, encoded_args)
        _LOGGER.debug(
            "storage_key_prefix_derived",
            item=layout.qualified_name,
            fixed_argument_count=len(encoded_args),
            prefix=to_hex(prefix),
        )
        return prefix

    def decode(
        self,
        key: bytes,
        pallet: str,
        item: str,
        argument_sizes: Sequence[Optional[int]],
    ) -> tuple[bytes | None, ...]:
        """Recover transparent argument bytes from a key of a catalog item."""
        return decode_key_arguments(key, self.layout(pallet, item), argument_sizes)


def _load_catalog(config: StoreKeyConfig) -> StorageLayoutCatalog:
    if config.layout_path is None:
        return default_storage_layouts()
    return load_storage_layouts(config.layout_path)
