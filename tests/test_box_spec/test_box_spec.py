"""Tests for BoxSpec verification and Explorer integration — box_spec/spec.py."""

from __future__ import annotations

import pytest

from headless_dapp.box_spec import (
    BoxSpec,
    MismatchCause,
    RegisterSpec,
    TokenSpec,
    ValueRange,
    VerificationResult,
)
from headless_dapp.ergo.address import AddressType, ErgoAddress, Network, encode_address
from headless_dapp.ergo.box import Token
from headless_dapp.ergo.constant import Constant, SType
from headless_dapp.errors import (
    AddressMismatchError,
    BoxVerificationError,
    ExplorerEndpointError,
    ExplorerResponseError,
    PredicateFailedError,
    RegisterMismatchError,
    TokenMismatchError,
    ValueRangeError,
)

_API = "https://api.ergoplatform.com/api"
_NFT = "0fb1eca4646950743bc5a8c341c16871a0ad9b4077e3b276bf93855d51a042d1"
_OTHER_TOKEN = "ee" * 32


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


class TestVerify:
    def test_unconstrained_spec_accepts_any_box(self, make_box) -> None:
        spec = BoxSpec()
        box = make_box(
            value=0,
            registers=[Constant.from_long(1)],
            tokens=[Token(_NFT, 9)],
        )
        result = spec.verify(box)
        assert result.ok
        assert result == VerificationResult.success()
        assert bool(result) is True

    def test_address_then_value_order(self, make_box) -> None:
        spec = BoxSpec(address="X", value_range=ValueRange.at_least(1000))

        too_small = spec.verify(make_box(address="X", value=500))
        assert too_small.cause is MismatchCause.VALUE_RANGE

        wrong_address = spec.verify(make_box(address="Y", value=5000))
        assert wrong_address.cause is MismatchCause.ADDRESS
        assert isinstance(wrong_address.error, AddressMismatchError)

        assert spec.verify(make_box(address="X", value=5000)).ok

    def test_address_checked_before_value(self, make_box) -> None:
        spec = BoxSpec(address="X", value_range=ValueRange.at_least(1000))
        result = spec.verify(make_box(address="Y", value=1))
        assert result.cause is MismatchCause.ADDRESS

    def test_register_mismatch_reports_slot(self, make_box) -> None:
        spec = BoxSpec(
            registers=[
                RegisterSpec.of_type(SType.SLONG),
                RegisterSpec.exact(Constant.from_str("bounty")),
            ]
        )
        box = make_box(registers=[Constant.from_long(7), Constant.from_str("other")])
        result = spec.verify(box)
        assert result.cause is MismatchCause.REGISTER
        assert result.slot == 1
        assert isinstance(result.error, RegisterMismatchError)
        assert "R5" in str(result.error)

    def test_missing_register(self, make_box) -> None:
        spec = BoxSpec(registers=[RegisterSpec.of_type(SType.SLONG)])
        result = spec.verify(make_box())
        assert result.cause is MismatchCause.REGISTER
        assert result.slot == 0

    def test_unconstrained_slots_ignore_missing_registers(self, make_box) -> None:
        spec = BoxSpec(registers=[None, RegisterSpec()])
        assert spec.verify(make_box()).ok

    def test_tokens_matched_by_position(self, make_box) -> None:
        spec = BoxSpec(tokens=[None, TokenSpec(_NFT, ValueRange.exactly(1))])
        assert spec.verify(make_box(tokens=[Token(_OTHER_TOKEN, 50), Token(_NFT, 1)])).ok

        swapped = spec.verify(make_box(tokens=[Token(_NFT, 1), Token(_OTHER_TOKEN, 50)]))
        assert swapped.cause is MismatchCause.TOKEN
        assert swapped.slot == 1
        assert isinstance(swapped.error, TokenMismatchError)

    def test_register_checked_before_token(self, make_box) -> None:
        spec = BoxSpec(
            registers=[RegisterSpec.of_type(SType.SLONG)],
            tokens=[TokenSpec(_NFT)],
        )
        assert spec.verify(make_box()).cause is MismatchCause.REGISTER

    def test_predicate_runs_last(self, make_box) -> None:
        calls: list[str] = []

        def predicate(box) -> bool:
            calls.append(box.box_id)
            return box.value % 2 == 0

        spec = BoxSpec(value_range=ValueRange.at_least(10), predicate=predicate)
        assert spec.verify(make_box(value=5)).cause is MismatchCause.VALUE_RANGE
        assert calls == []

        result = spec.verify(make_box(value=11))
        assert result.cause is MismatchCause.PREDICATE
        assert isinstance(result.error, PredicateFailedError)
        assert spec.verify(make_box(value=12)).ok
        assert len(calls) == 2

    def test_verify_box_raises(self, make_box) -> None:
        spec = BoxSpec(value_range=ValueRange.at_least(1000))
        with pytest.raises(ValueRangeError) as exc_info:
            spec.verify_box(make_box(value=1))
        assert exc_info.value.cause is MismatchCause.VALUE_RANGE
        assert isinstance(exc_info.value, BoxVerificationError)

    def test_matches(self, make_box) -> None:
        spec = BoxSpec(value_range=ValueRange.at_least(1000))
        assert spec.matches(make_box(value=1000))
        assert not spec.matches(make_box(value=999))

    def test_verification_result_raise_for_failure(self) -> None:
        VerificationResult.success().raise_for_failure()
        failure = VerificationResult.failure(PredicateFailedError())
        assert failure.slot is None
        with pytest.raises(PredicateFailedError):
            failure.raise_for_failure()


# ---------------------------------------------------------------------------
# Construction and modification
# ---------------------------------------------------------------------------


class TestSpecConstruction:
    def test_lists_stored_as_tuples(self) -> None:
        spec = BoxSpec(registers=[RegisterSpec()], tokens=[TokenSpec(_NFT)])
        assert isinstance(spec.registers, tuple)
        assert isinstance(spec.tokens, tuple)

    def test_too_many_registers(self) -> None:
        with pytest.raises(ValueError, match="at most 6 registers"):
            BoxSpec(registers=[RegisterSpec()] * 7)

    def test_specs_are_hashable_values(self) -> None:
        a = BoxSpec(address="X", value_range=ValueRange.at_least(1))
        b = BoxSpec(address="X", value_range=ValueRange.at_least(1))
        assert a == b
        assert len({a, b}) == 1


class TestModifiedSpecs:
    def test_modified_address_changes_only_address(self, make_box) -> None:
        base = BoxSpec(address="X", value_range=ValueRange.at_least(1000))
        modified = base.modified_address("Y")

        assert base.address == "X"
        assert modified.address == "Y"
        assert modified.value_range == base.value_range
        assert modified.verify(make_box(address="Y", value=5)).cause is MismatchCause.VALUE_RANGE

    def test_modified_address_to_unconstrained(self, make_box) -> None:
        spec = BoxSpec(address="X").modified_address(None)
        assert spec.verify(make_box(address="anything")).ok

    def test_other_modifiers(self) -> None:
        base = BoxSpec()

        def predicate(box) -> bool:
            return True

        assert base.modified_value_range(ValueRange.exactly(5)).value_range == ValueRange.exactly(5)
        assert base.modified_registers([RegisterSpec()]).registers == (RegisterSpec(),)
        assert base.modified_tokens([TokenSpec(_NFT)]).tokens == (TokenSpec(_NFT),)
        assert base.modified_predicate(predicate).predicate is predicate
        assert base == BoxSpec()


# ---------------------------------------------------------------------------
# Explorer integration
# ---------------------------------------------------------------------------


class TestExplorerEndpoint:
    def test_by_address(self) -> None:
        spec = BoxSpec(address="9fAddr")
        assert (
            spec.explorer_endpoint(_API)
            == f"{_API}/v1/boxes/unspent/byAddress/9fAddr?limit=500"
        )

    def test_singular_token_preferred_over_address(self) -> None:
        spec = BoxSpec(address="9fAddr", tokens=[TokenSpec(_NFT, ValueRange.exactly(1))])
        assert (
            spec.explorer_endpoint(_API)
            == f"{_API}/v1/boxes/unspent/byTokenId/{_NFT}?limit=100"
        )

    def test_address_preferred_over_fungible_token(self) -> None:
        spec = BoxSpec(address="9fAddr", tokens=[TokenSpec(_NFT, ValueRange.at_least(5))])
        assert "/byAddress/9fAddr" in spec.explorer_endpoint(_API)

    def test_first_constrained_token_fallback(self) -> None:
        spec = BoxSpec(tokens=[None, TokenSpec(_NFT, ValueRange.at_least(5))])
        assert f"/byTokenId/{_NFT}" in spec.explorer_endpoint(_API)

    def test_trailing_slash_and_limits(self) -> None:
        spec = BoxSpec(address="9fAddr")
        url = spec.explorer_endpoint(_API + "/", address_limit=20)
        assert url == f"{_API}/v1/boxes/unspent/byAddress/9fAddr?limit=20"

    def test_no_address_or_tokens(self) -> None:
        with pytest.raises(ExplorerEndpointError, match="address or tokens"):
            BoxSpec(value_range=ValueRange.at_least(1)).explorer_endpoint(_API)


class TestProcessExplorerResponse:
    def test_filters_in_order(self, explorer_item) -> None:
        body = {
            "items": [
                explorer_item("aa" * 32, value=5_000),
                explorer_item("bb" * 32, value=10),
                explorer_item("cc" * 32, value=7_000),
            ]
        }
        spec = BoxSpec(value_range=ValueRange.at_least(1000))
        assert [b.box_id for b in spec.process_explorer_response(body)] == ["aa" * 32, "cc" * 32]

    def test_register_constraints_against_listing(self, explorer_item) -> None:
        body = [
            explorer_item("aa" * 32, registers={"R4": "0502"}),
            explorer_item("bb" * 32, registers={"R4": "0400"}),
        ]
        spec = BoxSpec(registers=[RegisterSpec.of_type(SType.SLONG)])
        assert [b.box_id for b in spec.process_explorer_response(body)] == ["aa" * 32]

    def test_no_match_is_empty(self, explorer_item) -> None:
        spec = BoxSpec(address="nowhere")
        assert spec.process_explorer_response([explorer_item("aa" * 32)]) == []

    def test_decode_failure(self) -> None:
        with pytest.raises(ExplorerResponseError):
            BoxSpec().process_explorer_response("not json")

    def test_non_object_item_is_a_decode_failure(self, explorer_item) -> None:
        with pytest.raises(ExplorerResponseError):
            BoxSpec().process_explorer_response([explorer_item("aa" * 32), 1])

    def test_testnet_node_boxes_match_testnet_address(self, explorer_item, user_pubkey) -> None:
        testnet_address = encode_address(
            ErgoAddress(Network.TESTNET, AddressType.P2PK, user_pubkey)
        )
        item = explorer_item("aa" * 32)
        del item["address"]
        spec = BoxSpec(address=testnet_address)
        assert spec.process_explorer_response([item]) == []
        matched = spec.process_explorer_response([item], network=Network.TESTNET)
        assert [b.box_id for b in matched] == ["aa" * 32]
