"""Shared test fixtures for the headless dApp test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from headless_dapp.ergo.address import AddressType, ErgoAddress, Network, encode_address
from headless_dapp.ergo.box import Box, Token
from headless_dapp.ergo.constant import Constant

USER_PUBKEY = bytes.fromhex("02" + "11" * 32)
OTHER_PUBKEY = bytes.fromhex("03" + "22" * 32)


def p2pk_address(pubkey: bytes, network: Network = Network.MAINNET) -> str:
    return encode_address(ErgoAddress(network, AddressType.P2PK, pubkey))


@pytest.fixture
def user_pubkey() -> bytes:
    return USER_PUBKEY


@pytest.fixture
def user_address() -> str:
    """A valid mainnet P2PK address."""
    return p2pk_address(USER_PUBKEY)


@pytest.fixture
def other_address() -> str:
    return p2pk_address(OTHER_PUBKEY)


@pytest.fixture
def make_box(user_address: str) -> Callable[..., Box]:
    """Factory for boxes with unique ids, guarded by ``user_address`` by default."""
    counter = itertools.count(1)

    def _make(
        value: int = 1_000_000,
        address: str | None = None,
        registers: Sequence[Constant] = (),
        tokens: Sequence[Token] = (),
        box_id: str | None = None,
        creation_height: int = 100,
    ) -> Box:
        return Box(
            box_id=box_id or f"{next(counter):064x}",
            value=value,
            address=address or user_address,
            registers=tuple(registers),
            tokens=tuple(tokens),
            creation_height=creation_height,
        )

    return _make


@pytest.fixture
def explorer_item(user_address: str) -> Callable[..., dict[str, Any]]:
    """Factory for box JSON objects as served by ``/v1/boxes/unspent/...``."""

    def _item(
        box_id: str,
        value: int = 1_000_000,
        address: str | None = None,
        registers: dict[str, str] | None = None,
        assets: Sequence[tuple[str, int]] = (),
    ) -> dict[str, Any]:
        return {
            "boxId": box_id,
            "transactionId": "ab" * 32,
            "index": 0,
            "value": value,
            "creationHeight": 500_000,
            "address": address or user_address,
            "ergoTree": "0008cd" + USER_PUBKEY.hex(),
            "additionalRegisters": {
                name: {"serializedValue": hex_value}
                for name, hex_value in (registers or {}).items()
            },
            "assets": [
                {"tokenId": tid, "amount": amount, "index": i}
                for i, (tid, amount) in enumerate(assets)
            ],
        }

    return _item
