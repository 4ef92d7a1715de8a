"""Config-driven transaction assembly.

Applies the ``HEADLESS_DAPP_TX__*`` settings to drafts: the miner fee output
is appended last, and value balance is checked when configured::

    builder = TxBuilder(AppConfig().tx)
    draft = builder.assemble([bounty_box, fee_box], [], [payout], creation_height=height)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from headless_dapp.tx.assembler_spec import TxAssemblerSpecBuilder
from headless_dapp.tx.candidate import fee_candidate
from headless_dapp.tx.draft import assemble

if TYPE_CHECKING:
    from headless_dapp.config.settings import TxConfig
    from headless_dapp.tx.candidate import OutputCandidate
    from headless_dapp.tx.draft import DataInputLike, InputLike, UnsignedTransaction

logger = logging.getLogger(__name__)


class TxBuilder:
    """Assemble drafts using the configured fee and balance policy."""

    def __init__(self, config: TxConfig) -> None:
        self._config = config

    @property
    def fee(self) -> int:
        return self._config.fee

    def fee_output(self, creation_height: int) -> OutputCandidate:
        """The miner fee candidate for the configured fee and fee address."""
        return fee_candidate(
            self._config.fee,
            creation_height,
            fee_address=self._config.fee_address,
        )

    def assemble(
        self,
        inputs: Iterable[InputLike],
        data_inputs: Iterable[DataInputLike],
        outputs: Iterable[OutputCandidate],
        *,
        creation_height: int,
    ) -> UnsignedTransaction:
        """Assemble a draft whose last output pays the configured fee.

        Raises:
            ValueImbalanceError: If ``enforce_value_balance`` is set and the
                outputs, fee included, exceed the inputs.
        """
        all_outputs = [*outputs, self.fee_output(creation_height)]
        logger.debug("Appending %d nanoErg fee output", self._config.fee)
        return assemble(
            inputs,
            data_inputs,
            all_outputs,
            enforce_value_balance=self._config.enforce_value_balance,
        )

    def assembler_spec(self, unsigned_tx: UnsignedTransaction) -> str:
        """Assembler service JSON for *unsigned_tx* at the configured fee."""
        return TxAssemblerSpecBuilder(unsigned_tx).build_assembler_spec(self._config.fee)
