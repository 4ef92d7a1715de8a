"""Error hierarchy for headless dApp operations."""

from headless_dapp.errors.assembly_errors import (
    AssemblyError,
    DuplicateInputError,
    EmptyInputsError,
    EmptyOutputsError,
    ValueImbalanceError,
)
from headless_dapp.errors.build_errors import (
    CandidateBuildError,
    DuplicateTokenError,
    InvalidBoxValueError,
    InvalidCreationHeightError,
    InvalidTokenAmountError,
    TooManyRegistersError,
)
from headless_dapp.errors.chain_errors import (
    ExplorerEndpointError,
    ExplorerError,
    ExplorerResponseError,
    NodeError,
    NotEnoughBoxesError,
)
from headless_dapp.errors.dapp_errors import EncodingError, HeadlessDappError, InvalidAddressError
from headless_dapp.errors.verification_errors import (
    AddressMismatchError,
    BoxVerificationError,
    MismatchCause,
    PredicateFailedError,
    RegisterMismatchError,
    TokenMismatchError,
    ValueRangeError,
)

__all__ = [
    "AddressMismatchError",
    "AssemblyError",
    "BoxVerificationError",
    "CandidateBuildError",
    "DuplicateInputError",
    "DuplicateTokenError",
    "EmptyInputsError",
    "EmptyOutputsError",
    "EncodingError",
    "ExplorerEndpointError",
    "ExplorerError",
    "ExplorerResponseError",
    "HeadlessDappError",
    "InvalidAddressError",
    "InvalidBoxValueError",
    "InvalidCreationHeightError",
    "InvalidTokenAmountError",
    "MismatchCause",
    "NodeError",
    "NotEnoughBoxesError",
    "PredicateFailedError",
    "RegisterMismatchError",
    "TokenMismatchError",
    "TooManyRegistersError",
    "ValueImbalanceError",
    "ValueRangeError",
]
