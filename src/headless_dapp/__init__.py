"""Headless dApp framework — declare, find and spend boxes on Ergo.

Typical flow::

    spec = ErgsBox.box_spec().modified_address(user_address)
    boxes = spec.process_explorer_response(explorer_body)
    fee = fee_candidate(1_000_000, height)
    change = change_candidate(boxes[0].value - 1_000_000, user_address, height)
    draft = assemble([boxes[0]], [], [change, fee])
"""

from headless_dapp.box_spec import (
    AdaUsdOraclePoolBox,
    BoxPredicate,
    BoxSpec,
    ErgsBox,
    ErgUsdOraclePoolBox,
    MismatchCause,
    RegisterSpec,
    SpecifiedBox,
    TokenSpec,
    ValueRange,
    VerificationResult,
    WrappedBox,
    filter_boxes,
    select_distinct,
)
from headless_dapp.ergo import (
    Box,
    Constant,
    DataInput,
    SType,
    Token,
    UnsignedInput,
    decode_explorer_response,
    erg_to_nano_erg,
    nano_erg_to_erg,
)
from headless_dapp.errors import HeadlessDappError
from headless_dapp.tx import (
    MINER_FEE_ADDRESS,
    OutputCandidate,
    TxAssemblerSpecBuilder,
    TxBuilder,
    UnsignedTransaction,
    assemble,
    build_candidate,
    change_candidate,
    fee_candidate,
    find_and_sum_other_tokens,
    tokens_change_candidate,
)

__version__ = "0.1.0"

__all__ = [
    "MINER_FEE_ADDRESS",
    "AdaUsdOraclePoolBox",
    "Box",
    "BoxPredicate",
    "BoxSpec",
    "Constant",
    "DataInput",
    "ErgUsdOraclePoolBox",
    "ErgsBox",
    "HeadlessDappError",
    "MismatchCause",
    "OutputCandidate",
    "RegisterSpec",
    "SType",
    "SpecifiedBox",
    "Token",
    "TokenSpec",
    "TxAssemblerSpecBuilder",
    "TxBuilder",
    "UnsignedInput",
    "UnsignedTransaction",
    "ValueRange",
    "VerificationResult",
    "WrappedBox",
    "assemble",
    "build_candidate",
    "change_candidate",
    "decode_explorer_response",
    "erg_to_nano_erg",
    "fee_candidate",
    "filter_boxes",
    "find_and_sum_other_tokens",
    "nano_erg_to_erg",
    "select_distinct",
    "tokens_change_candidate",
]
