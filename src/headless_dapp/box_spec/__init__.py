"""Box specifications — declare, verify and filter boxes."""

from headless_dapp.box_spec.filtering import filter_boxes, select_distinct
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
from headless_dapp.box_spec.results import MismatchCause, VerificationResult
from headless_dapp.box_spec.spec import BoxSpec
from headless_dapp.box_spec.specified import SpecifiedBox, WrappedBox
from headless_dapp.box_spec.standard_boxes import (
    AdaUsdOraclePoolBox,
    ErgsBox,
    ErgUsdOraclePoolBox,
)

__all__ = [
    "AdaUsdOraclePoolBox",
    "BoxPredicate",
    "BoxSpec",
    "ErgUsdOraclePoolBox",
    "ErgsBox",
    "MismatchCause",
    "RegisterSpec",
    "SpecifiedBox",
    "TokenSpec",
    "ValueRange",
    "VerificationResult",
    "WrappedBox",
    "filter_boxes",
    "match_address",
    "match_register",
    "match_token",
    "match_value",
    "select_distinct",
]
