"""BoxSpec — a declarative specification of a class of boxes.

A ``BoxSpec`` is the source of truth used both to verify a single box and to
narrow an Explorer listing down to the boxes usable in an action. It is often
declared once per protocol stage and then honed per call site with the
``modified_*`` methods, which return new specs and never touch the original.

Verification order is fixed: address, value range, registers (slot order),
tokens (slot order), then the predicate. The first failing attribute is the
one reported.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self

from headless_dapp.box_spec.filtering import filter_boxes
from headless_dapp.box_spec.matchers import (
    BoxPredicate,
    RegisterSpec,
    TokenSpec,
    ValueRange,
    match_address,
    match_register,
    match_token,
    match_value,
)
from headless_dapp.box_spec.results import VerificationResult
from headless_dapp.ergo.address import Network
from headless_dapp.ergo.box import MAX_REGISTERS, decode_explorer_response
from headless_dapp.errors.chain_errors import ExplorerEndpointError
from headless_dapp.errors.verification_errors import (
    AddressMismatchError,
    PredicateFailedError,
    RegisterMismatchError,
    TokenMismatchError,
    ValueRangeError,
)

if TYPE_CHECKING:
    from headless_dapp.ergo.box import Box

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS_LIMIT = 500
DEFAULT_TOKEN_LIMIT = 100


@dataclass(frozen=True)
class BoxSpec:
    """Specification of the attributes a box must have.

    Every field is optional; an unconstrained field matches any box.

    Attributes:
        address: Exact address the box must be guarded by.
        value_range: Allowed nanoERG range.
        registers: Ordered register constraints; slot ``i`` is ``R(4+i)``.
        tokens: Ordered token constraints; slot ``i`` is the box's token ``i``.
        predicate: Custom check evaluated after all other constraints.
    """

    address: str | None = None
    value_range: ValueRange | None = None
    registers: Sequence[RegisterSpec | None] = field(default_factory=tuple)
    tokens: Sequence[TokenSpec | None] = field(default_factory=tuple)
    predicate: BoxPredicate | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "registers", tuple(self.registers))
        object.__setattr__(self, "tokens", tuple(self.tokens))
        if len(self.registers) > MAX_REGISTERS:
            msg = f"A box has at most {MAX_REGISTERS} registers, spec has {len(self.registers)}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify(self, box: Box) -> VerificationResult:
        """Check *box* against every constraint, stopping at the first failure."""
        if not match_address(self.address, box):
            return VerificationResult.failure(AddressMismatchError(self.address or "", box.address))

        if not match_value(self.value_range, box):
            return VerificationResult.failure(ValueRangeError(box.value))

        for slot, register_spec in enumerate(self.registers):
            if not match_register(register_spec, box.register(slot)):
                return VerificationResult.failure(RegisterMismatchError(slot))

        for slot, token_spec in enumerate(self.tokens):
            if not match_token(token_spec, box.token(slot)):
                return VerificationResult.failure(TokenMismatchError(slot))

        if self.predicate is not None and not self.predicate(box):
            return VerificationResult.failure(PredicateFailedError())

        return VerificationResult.success()

    def verify_box(self, box: Box) -> None:
        """Verify *box*, raising the matching ``BoxVerificationError`` on failure."""
        self.verify(box).raise_for_failure()

    def matches(self, box: Box) -> bool:
        return self.verify(box).ok

    # ------------------------------------------------------------------
    # Modification
    # ------------------------------------------------------------------

    def modified_address(self, address: str | None) -> Self:
        """Copy of this spec with the address constraint replaced.

        Typically used to narrow a generic spec to one user's wallet address.
        """
        return dataclasses.replace(self, address=address)

    def modified_value_range(self, value_range: ValueRange | None) -> Self:
        return dataclasses.replace(self, value_range=value_range)

    def modified_registers(self, registers: Sequence[RegisterSpec | None]) -> Self:
        return dataclasses.replace(self, registers=registers)

    def modified_tokens(self, tokens: Sequence[TokenSpec | None]) -> Self:
        return dataclasses.replace(self, tokens=tokens)

    def modified_predicate(self, predicate: BoxPredicate | None) -> Self:
        return dataclasses.replace(self, predicate=predicate)

    # ------------------------------------------------------------------
    # Explorer integration
    # ------------------------------------------------------------------

    def explorer_endpoint(
        self,
        explorer_api_url: str,
        *,
        address_limit: int = DEFAULT_ADDRESS_LIMIT,
        token_limit: int = DEFAULT_TOKEN_LIMIT,
    ) -> str:
        """URL of the Explorer listing that may hold boxes matching this spec.

        A token required in a quantity of exactly one (an NFT or protocol
        participant token) identifies boxes more precisely than the address,
        so it is preferred. Otherwise the address is used, then the first
        constrained token.

        Args:
            explorer_api_url: Explorer API root, e.g. ``https://api.ergoplatform.com/api``.

        Raises:
            ExplorerEndpointError: If this BoxSpec has neither address nor tokens.
        """
        base = explorer_api_url.rstrip("/")
        constrained = [t for t in self.tokens if t is not None]

        singular = next((t for t in constrained if t.amount_range.max_value == 1), None)
        if singular is not None:
            return f"{base}/v1/boxes/unspent/byTokenId/{singular.token_id}?limit={token_limit}"
        if self.address is not None:
            return f"{base}/v1/boxes/unspent/byAddress/{self.address}?limit={address_limit}"
        if constrained:
            token_id = constrained[0].token_id
            return f"{base}/v1/boxes/unspent/byTokenId/{token_id}?limit={token_limit}"

        msg = (
            "A BoxSpec must define either an address or tokens "
            "to generate an Explorer endpoint"
        )
        raise ExplorerEndpointError(msg)

    def process_explorer_response(
        self,
        explorer_response_body: str | bytes | Any,
        *,
        network: Network = Network.MAINNET,
    ) -> list[Box]:
        """Decode an Explorer listing and keep the boxes matching this spec.

        *network* is used for boxes whose address is derived from the ErgoTree.

        Raises:
            ExplorerResponseError: If the body fails to decode. Nothing is
                filtered in that case.
        """
        boxes = decode_explorer_response(explorer_response_body, network=network)
        return filter_boxes(self, boxes)
