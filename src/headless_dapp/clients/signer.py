"""Signing/submission contract consumed by dApp actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from headless_dapp.tx.draft import UnsignedTransaction


@runtime_checkable
class TransactionSigner(Protocol):
    """Anything that can sign a draft and submit it, returning the tx id."""

    async def sign_and_submit(self, unsigned_tx: UnsignedTransaction) -> str: ...
