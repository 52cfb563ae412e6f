"""Storage layout catalog.

This module loads and validates YAML layout files that declare the key
hashers of storage items, standing in for on-chain metadata. A built-in
catalog covers the common items queried by node tooling.

Example layout file::

    version: 1
    items:
      - pallet: System
        item: Account
        hashers: [Blake2_128Concat]
      - pallet: Timestamp
        item: Now
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence, cast

from core.constants import LAYOUT_SCHEMA_VERSION
from core.errors import (
    InvalidIdentifierError,
    StoreKeyDependencyError,
    StorageLayoutError,
    UnknownHasherKindError,
)
from core.logging_config import get_logger
from core.types import HasherKind, StorageItemLayout
from hashing.hashers import parse_hasher_kind
from hashing.twox import validate_identifier

_LOGGER = get_logger(__name__)

_DEFAULT_LAYOUTS: tuple[StorageItemLayout, ...] = (
    StorageItemLayout("Timestamp", "Now"),
    StorageItemLayout("System", "Account", (HasherKind.BLAKE2_128_CONCAT,)),
    StorageItemLayout("System", "Events"),
    StorageItemLayout("System", "Number"),
    StorageItemLayout("System", "BlockHash", (HasherKind.TWOX_64_CONCAT,)),
    StorageItemLayout("Balances", "TotalIssuance"),
    StorageItemLayout(
        "Staking", "ErasStakers", (HasherKind.TWOX_64_CONCAT, HasherKind.TWOX_64_CONCAT)
    ),
    StorageItemLayout("TemplateModule", "Something"),
)


@dataclass(frozen=True)
class StorageLayoutCatalog:
    """Immutable lookup of storage item layouts by pallet and item name."""

    entries: Mapping[tuple[str, str], StorageItemLayout] = field(default_factory=dict)

    @classmethod
    def from_layouts(cls, layouts: Sequence[StorageItemLayout]) -> "StorageLayoutCatalog":
        """Build a catalog, rejecting duplicate pallet/item pairs.

        Raises:
            StorageLayoutError: If the same item is declared twice.
        """
        entries: dict[tuple[str, str], StorageItemLayout] = {}
        for layout in layouts:
            lookup_key = (layout.pallet, layout.item)
            if lookup_key in entries:
                raise StorageLayoutError(
                    f"Storage item {layout.qualified_name} is declared more than once."
                )
            entries[lookup_key] = layout
        return cls(entries=entries)

    def lookup(self, pallet: str, item: str) -> StorageItemLayout:
        """Return the declared layout of one storage item.

        Raises:
            StorageLayoutError: If the item is not in the catalog.
        """
        layout = self.entries.get((pallet, item))
        if layout is None:
            raise StorageLayoutError(
                f"Unknown storage item {pallet}.{item}. Names are case-sensitive; "
                "add it to the layout file or check the metadata spelling."
            )
        return layout

    def layouts(self) -> tuple[StorageItemLayout, ...]:
        """Return all layouts sorted by qualified name."""
        return tuple(sorted(self.entries.values(), key=lambda layout: layout.qualified_name))


def default_storage_layouts() -> StorageLayoutCatalog:
    """Return the built-in catalog of common storage items."""
    return StorageLayoutCatalog.from_layouts(_DEFAULT_LAYOUTS)


def load_storage_layouts(layout_path: str | Path) -> StorageLayoutCatalog:
    """Load and validate a YAML layout catalog from disk.

    Args:
        layout_path: File path to a YAML layout file.

    Returns:
        Validated layout catalog.

    Raises:
        StoreKeyDependencyError: If PyYAML is unavailable.
        StorageLayoutError: If file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(layout_path)
    root_mapping = _expect_mapping(payload, "layout root")
    _validate_keys(root_mapping, {"version", "items"}, "layout root")
    _parse_version(root_mapping)
    layouts = _parse_items(root_mapping)
    catalog = StorageLayoutCatalog.from_layouts(layouts)
    _LOGGER.info("storage_layouts_loaded", path=str(layout_path), item_count=len(layouts))
    return catalog


def _load_yaml_payload(layout_path: str | Path) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise StoreKeyDependencyError(
            "YAML layout support requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    layout_file = Path(layout_path).expanduser().resolve()
    if not layout_file.exists():
        raise StorageLayoutError(
            f"Layout file does not exist at {layout_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(layout_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise StorageLayoutError(
            f"Failed to read layout file at {layout_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise StorageLayoutError(
            f"Failed to parse YAML layout at {layout_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise StorageLayoutError(f"Layout file at {layout_file} is empty. Define 'version' and 'items'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise StorageLayoutError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise StorageLayoutError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise StorageLayoutError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if isinstance(raw_version, bool) or not isinstance(raw_version, int):
        raise StorageLayoutError(
            f"Layout field 'version' must be an integer. Set version: {LAYOUT_SCHEMA_VERSION}."
        )
    if raw_version != LAYOUT_SCHEMA_VERSION:
        raise StorageLayoutError(
            f"Unsupported layout version {raw_version}. Use version: {LAYOUT_SCHEMA_VERSION}."
        )
    return raw_version


def _parse_items(root_mapping: Mapping[str, object]) -> list[StorageItemLayout]:
    raw_items = root_mapping.get("items")
    if raw_items is None:
        raise StorageLayoutError("Layout missing required field 'items'. Add a list of items.")
    item_rows = _expect_sequence(raw_items, "layout items")
    return [_parse_item(item_value, index) for index, item_value in enumerate(item_rows)]


def _parse_item(item_value: object, item_index: int) -> StorageItemLayout:
    context = f"layout item #{item_index + 1}"
    item_mapping = _expect_mapping(item_value, context)
    _validate_keys(item_mapping, {"pallet", "item", "hashers"}, context)
    pallet = _required_identifier(item_mapping, "pallet", context)
    item = _required_identifier(item_mapping, "item", context)
    raw_hashers = item_mapping.get("hashers")
    hashers: tuple[HasherKind, ...] = ()
    if raw_hashers is not None:
        hasher_rows = _expect_sequence(raw_hashers, f"{context} hashers")
        try:
            hashers = tuple(parse_hasher_kind(cast(str, tag)) for tag in hasher_rows)
        except UnknownHasherKindError as error:
            raise StorageLayoutError(f"Invalid {context}: {error}") from error
    return StorageItemLayout(pallet=pallet, item=item, hashers=hashers)


def _required_identifier(mapping: Mapping[str, object], field_name: str, context: str) -> str:
    raw_value = mapping.get(field_name)
    try:
        return validate_identifier(raw_value)
    except InvalidIdentifierError as error:
        raise StorageLayoutError(f"Invalid {context} field '{field_name}': {error}") from error


def _validate_keys(mapping: Mapping[str, object], allowed_keys: set[str], context: str) -> None:
    unknown_keys = sorted(set(mapping) - allowed_keys)
    if unknown_keys:
        raise StorageLayoutError(f"Invalid {context}: unknown fields {', '.join(unknown_keys)}.")
