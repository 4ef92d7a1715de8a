"""Output candidates — forward descriptions of boxes a transaction creates.

A candidate has no box id: ids are derived from the final serialized
transaction. Construction validates everything that can be checked locally
and never yields a partially valid candidate:

- value is an integer in ``[0, 2**63 - 1]`` nanoERGs
- at most six registers (R4..R9)
- token ids are unique and amounts positive
- the address decodes to an ErgoTree (P2PK or P2S; P2SH carries only a hash)
- creation height is nonnegative
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from headless_dapp.box_spec.specified import WrappedBox
from headless_dapp.ergo.address import address_to_ergo_tree
from headless_dapp.ergo.box import MAX_REGISTERS, REGISTER_NAMES, Box, Token
from headless_dapp.ergo.constant import Constant
from headless_dapp.errors.build_errors import (
    DuplicateTokenError,
    InvalidBoxValueError,
    InvalidCreationHeightError,
    InvalidTokenAmountError,
    TooManyRegistersError,
)

logger = logging.getLogger(__name__)

MAX_BOX_VALUE = 2**63 - 1

# Mainnet miner fee contract; boxes paid here are collectable by the block miner.
MINER_FEE_ADDRESS = (
    "2iHkR7CWvD1R4j1yZg5bkeDRQavjAaVPeTDFGGLZduHyfWMuYpmhHocX8GJoaieTx78FntzJbCBVL6rf96"
    "ocJoZdmWBL2fci7NqWgAirppPQmZ7fN9V6z13Ay6brPriBKYqLp1bT2Fk4FkFLCfdPpe"
)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class OutputCandidate:
    """A box to be created by a transaction.

    Attributes:
        value: nanoERGs to lock in the box.
        address: Base58 address of the guarding script.
        tokens: Tokens to place in the box, in order.
        registers: Register values, first element is R4.
        creation_height: Height recorded in the box.
    """

    value: int
    address: str
    tokens: tuple[Token, ...] = field(default_factory=tuple)
    registers: tuple[Constant, ...] = field(default_factory=tuple)
    creation_height: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "registers", tuple(self.registers))

        if not _is_int(self.value) or not 0 <= self.value <= MAX_BOX_VALUE:
            raise InvalidBoxValueError(self.value)
        if len(self.registers) > MAX_REGISTERS:
            raise TooManyRegistersError(len(self.registers), MAX_REGISTERS)

        seen: set[str] = set()
        for token in self.tokens:
            if token.token_id in seen:
                raise DuplicateTokenError(token.token_id)
            if not _is_int(token.amount) or token.amount <= 0:
                raise InvalidTokenAmountError(token.token_id, token.amount)
            seen.add(token.token_id)

        address_to_ergo_tree(self.address)
        if not _is_int(self.creation_height) or self.creation_height < 0:
            raise InvalidCreationHeightError(self.creation_height)

    @property
    def ergo_tree(self) -> str:
        return address_to_ergo_tree(self.address)

    def to_dict(self) -> dict[str, Any]:
        """Node JSON representation of the candidate."""
        return {
            "value": self.value,
            "ergoTree": self.ergo_tree,
            "assets": [t.to_dict() for t in self.tokens],
            "additionalRegisters": {
                name: c.serialized for name, c in zip(REGISTER_NAMES, self.registers, strict=False)
            },
            "creationHeight": self.creation_height,
        }


def build_candidate(
    value: int,
    address: str,
    tokens: Sequence[Token] = (),
    registers: Sequence[Constant] = (),
    creation_height: int = 0,
) -> OutputCandidate:
    """Build a validated output candidate.

    Raises:
        CandidateBuildError: If the value, registers or tokens are invalid.
        InvalidAddressError: If *address* does not decode or is P2SH.
    """
    return OutputCandidate(
        value=value,
        address=address,
        tokens=tuple(tokens),
        registers=tuple(registers),
        creation_height=creation_height,
    )


def fee_candidate(
    fee: int,
    creation_height: int,
    *,
    fee_address: str = MINER_FEE_ADDRESS,
) -> OutputCandidate:
    """Candidate paying *fee* nanoERGs to the miner fee contract."""
    return build_candidate(fee, fee_address, creation_height=creation_height)


def change_candidate(
    value: int,
    user_address: str,
    creation_height: int,
    tokens: Sequence[Token] = (),
) -> OutputCandidate:
    """Candidate returning leftover nanoERGs and tokens to the user."""
    return build_candidate(value, user_address, tokens, creation_height=creation_height)


def find_and_sum_other_tokens(
    exclude_tokens: Iterable[Token | str],
    input_boxes: Iterable[Box | WrappedBox],
) -> list[Token]:
    """Sum every token held by *input_boxes* except the excluded ids.

    Tokens are returned in the order they are first seen.
    """
    excluded = {t if isinstance(t, str) else t.token_id for t in exclude_tokens}
    totals: dict[str, int] = {}
    for b in input_boxes:
        box = b.box if isinstance(b, WrappedBox) else b
        for token in box.tokens:
            if token.token_id in excluded:
                continue
            totals[token.token_id] = totals.get(token.token_id, 0) + token.amount
    return [Token(token_id=tid, amount=amount) for tid, amount in totals.items()]


def tokens_change_candidate(
    input_boxes: Iterable[Box | WrappedBox],
    value: int,
    user_address: str,
    creation_height: int,
    *,
    exclude_tokens: Iterable[Token | str] = (),
    registers: Sequence[Constant] = (),
) -> OutputCandidate:
    """Change candidate holding the tokens of *input_boxes* not used by the protocol."""
    tokens = find_and_sum_other_tokens(exclude_tokens, input_boxes)
    logger.debug("Tokens change box carries %d token ids", len(tokens))
    return build_candidate(value, user_address, tokens, registers, creation_height)
