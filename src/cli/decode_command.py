"""Decode command wiring for storekey CLI."""

from __future__ import annotations

import argparse
from typing import Any

from keys.hex_format import from_hex, to_hex
from keys.key_client import StorageKeyClient


def add_decode_command(subparsers: Any) -> None:
    """Register decode subcommand."""
    parser = subparsers.add_parser(
        "decode",
        help="Recover transparent key arguments from a full storage key",
    )
    parser.add_argument("pallet", help="Pallet name, e.g. System")
    parser.add_argument("item", help="Storage item name, e.g. Account")
    parser.add_argument("key", help="Full storage key as hex")
    parser.add_argument(
        "--size",
        action="append",
        type=int,
        help="Raw byte size per argument in order; omit the last to take the rest",
    )


def run_decode_command(client: StorageKeyClient, args: argparse.Namespace) -> int:
    """Print one line per key argument: hex bytes, or '-' when hash-only."""
    layout = client.layout(args.pallet, args.item)
    sizes: list[int | None] = list(args.size or ())
    while len(sizes) < layout.arity:
        sizes.append(None)
    decoded = client.decode(from_hex(args.key), args.pallet, args.item, sizes)
    for hasher, value in zip(layout.hashers, decoded):
        print(f"{hasher.value}\t{to_hex(value) if value is not None else '-'}")
    return 0
