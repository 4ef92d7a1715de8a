"""Box model — the immutable ledger record verified and spent by dApps.

Also decodes Explorer API responses (``/v1/boxes/unspent/...``) into ordered
lists of :class:`Box`. Node-style JSON (registers as bare hex strings, no
``address`` field) is accepted as well.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Self

from headless_dapp.ergo.address import Network, ergo_tree_to_address
from headless_dapp.ergo.constant import Constant
from headless_dapp.errors.chain_errors import ExplorerResponseError
from headless_dapp.errors.dapp_errors import HeadlessDappError

logger = logging.getLogger(__name__)

REGISTER_NAMES = ("R4", "R5", "R6", "R7", "R8", "R9")
MAX_REGISTERS = len(REGISTER_NAMES)


@dataclass(frozen=True)
class Token:
    """A quantity of a token held in a box."""

    token_id: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"tokenId": self.token_id, "amount": self.amount}


@dataclass(frozen=True)
class Box:
    """An unspent box as seen on chain.

    Attributes:
        box_id: Hex box identifier.
        value: nanoERGs held.
        address: Base58 address of the guarding script.
        ergo_tree: Hex ErgoTree of the guarding script.
        registers: Non-mandatory registers, first element is R4.
        tokens: Tokens in on-chain order.
        creation_height: Height declared by the creating transaction.
        transaction_id: Id of the creating transaction.
        index: Output index within the creating transaction.
    """

    box_id: str
    value: int
    address: str
    ergo_tree: str = ""
    registers: tuple[Constant, ...] = field(default_factory=tuple)
    tokens: tuple[Token, ...] = field(default_factory=tuple)
    creation_height: int = 0
    transaction_id: str = ""
    index: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "registers", tuple(self.registers))
        object.__setattr__(self, "tokens", tuple(self.tokens))

    def register(self, slot: int) -> Constant | None:
        """Register at zero-based *slot* (0 is R4), or None if absent."""
        return self.registers[slot] if 0 <= slot < len(self.registers) else None

    def token(self, slot: int) -> Token | None:
        return self.tokens[slot] if 0 <= slot < len(self.tokens) else None

    @classmethod
    def from_explorer_json(
        cls, item: dict[str, Any], *, network: Network = Network.MAINNET
    ) -> Self:
        """Build a Box from one Explorer (or node) box JSON object.

        Node JSON carries no ``address``; it is derived from ``ergoTree``
        for *network*.

        Raises:
            KeyError / TypeError / ValueError: If required fields are missing
                or malformed.
        """
        if not isinstance(item, dict):
            msg = f"box json must be an object, got {type(item).__name__}"
            raise TypeError(msg)
        ergo_tree = item.get("ergoTree", "")
        address = item.get("address") or ergo_tree_to_address(item["ergoTree"], network=network)
        return cls(
            box_id=item["boxId"],
            value=int(item["value"]),
            address=address,
            ergo_tree=ergo_tree,
            registers=_decode_registers(item.get("additionalRegisters") or {}),
            tokens=tuple(
                Token(token_id=asset["tokenId"], amount=int(asset["amount"]))
                for asset in item.get("assets") or []
            ),
            creation_height=int(item.get("creationHeight", 0)),
            transaction_id=item.get("transactionId", ""),
            index=int(item.get("index", 0)),
        )


def _decode_registers(raw: dict[str, Any]) -> tuple[Constant, ...]:
    if not isinstance(raw, dict):
        msg = f"additionalRegisters must be an object, got {type(raw).__name__}"
        raise TypeError(msg)
    registers: list[Constant] = []
    for name in REGISTER_NAMES:
        entry = raw.get(name)
        if entry is None:
            break
        if isinstance(entry, str):
            registers.append(Constant.from_hex(entry))
        elif not isinstance(entry, dict):
            msg = f"register {name} must be a string or an object"
            raise TypeError(msg)
        else:
            registers.append(
                Constant.from_hex(entry["serializedValue"], stype=entry.get("sigmaType") or None)
            )
    skipped = [name for name in REGISTER_NAMES[len(registers) :] if name in raw]
    if skipped:
        logger.warning("Ignoring non-contiguous registers %s", ", ".join(skipped))
    return tuple(registers)


def decode_explorer_response(
    body: str | bytes | dict[str, Any] | list[Any],
    *,
    network: Network = Network.MAINNET,
) -> list[Box]:
    """Decode an Explorer box listing into Boxes, preserving order.

    Accepts the raw response body or already-parsed JSON. Either an object
    with an ``items`` list or a bare list of boxes is understood. *network*
    is used for boxes whose address has to be derived from the ErgoTree.

    Raises:
        ExplorerResponseError: If the body or any box in it fails to decode.
    """
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except ValueError as exc:
            msg = "Failed to extract json from Explorer API response"
            raise ExplorerResponseError(msg) from exc
    else:
        data = body

    if isinstance(data, dict):
        items = data.get("items")
    else:
        items = data
    if not isinstance(items, list):
        msg = "Explorer API response has no box list"
        raise ExplorerResponseError(msg)

    boxes: list[Box] = []
    for position, item in enumerate(items):
        try:
            boxes.append(Box.from_explorer_json(item, network=network))
        except (KeyError, TypeError, ValueError, HeadlessDappError) as exc:
            msg = f"Box json at position {position} failed to decode: {exc!r}"
            raise ExplorerResponseError(msg) from exc
    return boxes
