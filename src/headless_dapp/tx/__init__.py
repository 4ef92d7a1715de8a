"""Transaction creation — output candidates and unsigned drafts."""

from headless_dapp.tx.assembler_spec import TxAssemblerSpecBuilder, create_placeholder_ergs_box
from headless_dapp.tx.builder import TxBuilder
from headless_dapp.tx.candidate import (
    MINER_FEE_ADDRESS,
    OutputCandidate,
    build_candidate,
    change_candidate,
    fee_candidate,
    find_and_sum_other_tokens,
    tokens_change_candidate,
)
from headless_dapp.tx.draft import UnsignedTransaction, assemble

__all__ = [
    "MINER_FEE_ADDRESS",
    "OutputCandidate",
    "TxAssemblerSpecBuilder",
    "TxBuilder",
    "UnsignedTransaction",
    "assemble",
    "build_candidate",
    "change_candidate",
    "create_placeholder_ergs_box",
    "fee_candidate",
    "find_and_sum_other_tokens",
    "tokens_change_candidate",
]
