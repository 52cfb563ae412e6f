"""Storekey CLI entry points.
This module exposes commands for hashing identifiers and deriving keys.
It maps argparse commands onto SDK calls and prints ``0x`` hex.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from cli.decode_command import add_decode_command, run_decode_command
from codec.argument_encoding import encode_typed_argument
from core.config import StoreKeyConfig
from core.constants import IDENTIFIER_HASH_BITS
from core.errors import StoreKeyError
from core.logging_config import configure_logging, get_logger
from hashing.twox import hash_identifier
from keys.hex_format import to_hex
from keys.key_client import StorageKeyClient

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="storekey",
        description="Derive storage keys for Substrate-style state tries",
    )
    parser.add_argument("--layout-file", help="Override STOREKEY_LAYOUT_PATH for this command")
    parser.add_argument("--ss58-format", help="Override STOREKEY_SS58_FORMAT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_hash_command(subparsers)
    _add_prefix_command(subparsers)
    _add_key_command(subparsers)
    add_decode_command(subparsers)
    _add_layouts_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the storekey CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return _dispatch(parser, args)
    except StoreKeyError as error:
        _LOGGER.warning("command_failed", command=args.command, error=str(error))
        print(f"error: {error}", file=sys.stderr)
        return 1


def _dispatch(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.command == "hash":
        return _run_hash_command(args)
    client = _build_client(args.layout_file, args.ss58_format)
    if args.command == "prefix":
        return _run_prefix_command(client, args)
    if args.command == "key":
        return _run_key_command(client, args)
    if args.command == "decode":
        return run_decode_command(client, args)
    if args.command == "layouts":
        return _run_layouts_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(layout_file: str | None, ss58_format: str | None) -> StorageKeyClient:
    """Build SDK client with optional overrides.

    Args:
        layout_file: Optional layout catalog path.
        ss58_format: Optional SS58 network prefix.

    Returns:
        Configured SDK client.
    """
    config = StoreKeyConfig.from_env(layout_path=layout_file, ss58_format=ss58_format)
    configure_logging(config.log_level)
    return StorageKeyClient(config)


def _run_hash_command(args: argparse.Namespace) -> int:
    """Handle hash command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    print(to_hex(hash_identifier(args.name, args.bits)))
    return 0


def _run_prefix_command(client: StorageKeyClient, args: argparse.Namespace) -> int:
    """Handle prefix command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    encoded_args = _encode_arguments(args.arg, client.config.ss58_format)
    print(to_hex(client.key_prefix(args.pallet, args.item, *encoded_args)))
    return 0


def _run_key_command(client: StorageKeyClient, args: argparse.Namespace) -> int:
    """Handle key command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    encoded_args = _encode_arguments(args.arg, client.config.ss58_format)
    print(to_hex(client.key(args.pallet, args.item, *encoded_args)))
    return 0


def _run_layouts_command(client: StorageKeyClient) -> int:
    """Print every catalog item with its hasher list."""
    for layout in client.catalog.layouts():
        hasher_names = ",".join(hasher.value for hasher in layout.hashers)
        print(f"{layout.qualified_name}\t{layout.arity}\t{hasher_names or '-'}")
    return 0


def _encode_arguments(raw_arguments: Sequence[str] | None, ss58_format: int) -> list[bytes]:
    return [encode_typed_argument(argument, ss58_format) for argument in raw_arguments or ()]


def _add_hash_command(subparsers: Any) -> None:
    """Register hash subcommand."""
    parser = subparsers.add_parser("hash", help="Hash one pallet or storage item name")
    parser.add_argument("name", help="Identifier, exactly as declared in metadata")
    parser.add_argument(
        "--bits",
        type=int,
        default=IDENTIFIER_HASH_BITS,
        help="Output width in bits, a positive multiple of 64",
    )


def _add_prefix_command(subparsers: Any) -> None:
    """Register prefix subcommand."""
    parser = subparsers.add_parser(
        "prefix",
        help="Derive the iteration prefix of a storage item",
    )
    parser.add_argument("pallet", help="Pallet name, e.g. System")
    parser.add_argument("item", help="Storage item name, e.g. Account")
    parser.add_argument(
        "--arg",
        action="append",
        help="Leading key argument as type:value, repeatable",
    )


def _add_key_command(subparsers: Any) -> None:
    """Register key subcommand."""
    parser = subparsers.add_parser("key", help="Derive the full storage key of one entry")
    parser.add_argument("pallet", help="Pallet name, e.g. System")
    parser.add_argument("item", help="Storage item name, e.g. Account")
    parser.add_argument(
        "--arg",
        action="append",
        help="Key argument as type:value (account, u8..u256, compact, bool, hex, str)",
    )


def _add_layouts_command(subparsers: Any) -> None:
    """Register layouts subcommand."""
    subparsers.add_parser("layouts", help="List storage items in the layout catalog")
