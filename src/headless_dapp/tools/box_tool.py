#!/usr/bin/env python3
"""Box Tool — inspect spendable boxes through the Ergo Explorer.

A standalone CLI utility:

    # List boxes at an address holding at least 1,000,000 nanoERG
    python -m headless_dapp.tools.box_tool unspent <address> [min_erg]

    # Print the Explorer URL a spec for that address would query
    python -m headless_dapp.tools.box_tool endpoint <address> [min_erg]

    # Convert between ERG and nanoERG
    python -m headless_dapp.tools.box_tool convert <erg>

    # Show the miner fee output for a creation height
    python -m headless_dapp.tools.box_tool fee <height>

The Explorer URL and limits come from ``HEADLESS_DAPP_EXPLORER__*`` settings,
the network from ``HEADLESS_DAPP_NETWORK`` and the fee from ``HEADLESS_DAPP_TX__*``.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING

from headless_dapp.box_spec.matchers import ValueRange
from headless_dapp.box_spec.standard_boxes import MIN_ERGS_BOX_VALUE, ErgsBox
from headless_dapp.config.settings import AppConfig
from headless_dapp.ergo.units import erg_to_nano_erg, nano_erg_to_erg
from headless_dapp.tx.builder import TxBuilder

if TYPE_CHECKING:
    from headless_dapp.box_spec.spec import BoxSpec


def _ergs_spec(address: str, min_erg: str | None) -> BoxSpec:
    """The ``ErgsBox`` spec narrowed to *address* and an optional minimum."""
    minimum = erg_to_nano_erg(min_erg) if min_erg is not None else MIN_ERGS_BOX_VALUE
    return (
        ErgsBox.box_spec()
        .modified_address(address)
        .modified_value_range(ValueRange.at_least(max(minimum, MIN_ERGS_BOX_VALUE)))
    )


def _cmd_unspent(config: AppConfig, address: str, min_erg: str | None) -> None:
    """List boxes at *address* that satisfy the narrowed ErgsBox spec."""
    from headless_dapp.clients.explorer.client import ExplorerClient

    spec = _ergs_spec(address, min_erg)

    async def _run() -> None:
        explorer = ExplorerClient(config.explorer, network=config.network.address_prefix)
        await explorer.connect()
        try:
            boxes = await explorer.find_boxes(spec)
        finally:
            await explorer.close()

        if not boxes:
            print(f"No matching boxes found for {address}")
            return
        print(f"Boxes for {address}:")
        print("-" * 80)
        total = 0
        for b in boxes:
            print(f"  {b.box_id}  {b.value:>16,} nanoERG  tokens={len(b.tokens)}")
            total += b.value
        print("-" * 80)
        erg = nano_erg_to_erg(total)
        print(f"  Total: {total:>16,} nanoERG  ({erg} ERG)  [{len(boxes)} boxes]")

    asyncio.run(_run())


def _cmd_endpoint(config: AppConfig, address: str, min_erg: str | None) -> None:
    spec = _ergs_spec(address, min_erg)
    print(
        spec.explorer_endpoint(
            config.explorer.url,
            address_limit=config.explorer.address_limit,
            token_limit=config.explorer.token_limit,
        )
    )


def _cmd_convert(erg: str) -> None:
    try:
        nano_ergs = erg_to_nano_erg(erg)
    except ValueError as exc:
        print(f"Invalid amount: {exc}")
        sys.exit(1)
    print(f"{erg} ERG = {nano_ergs:,} nanoERG")


def _cmd_fee(config: AppConfig, height: str) -> None:
    """Print the node JSON of the configured miner fee output."""
    if not height.isdigit():
        print(f"Invalid height: {height}")
        sys.exit(1)
    fee = TxBuilder(config.tx).fee_output(int(height))
    print(json.dumps(fee.to_dict(), indent=2))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(__doc__)
        sys.exit(1)

    cmd = args[0].lower()
    config = AppConfig()

    if cmd in ("unspent", "endpoint"):
        if len(args) < 2:
            print(f"Usage: box_tool {cmd} <address> [min_erg]")
            sys.exit(1)
        min_erg = args[2] if len(args) > 2 else None
        if cmd == "unspent":
            _cmd_unspent(config, args[1], min_erg)
        else:
            _cmd_endpoint(config, args[1], min_erg)
    elif cmd == "convert":
        if len(args) < 2:
            print("Usage: box_tool convert <erg>")
            sys.exit(1)
        _cmd_convert(args[1])
    elif cmd == "fee":
        if len(args) < 2:
            print("Usage: box_tool fee <height>")
            sys.exit(1)
        _cmd_fee(config, args[1])
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
