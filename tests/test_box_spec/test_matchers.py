"""Tests for attribute matchers — box_spec/matchers.py."""

from __future__ import annotations

import pytest

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
from headless_dapp.ergo.box import Token
from headless_dapp.ergo.constant import Constant, SType

_NFT = "08b59b14e4fdd60e5952314adbaa8b4e00bc0f0b676872a5224d3bf8591074cd"


# ---------------------------------------------------------------------------
# ValueRange
# ---------------------------------------------------------------------------


class TestValueRange:
    def test_unbounded(self) -> None:
        r = ValueRange()
        assert 0 in r
        assert 2**63 - 1 in r

    def test_at_least_is_inclusive(self) -> None:
        r = ValueRange.at_least(1000)
        assert 999 not in r
        assert 1000 in r

    def test_at_most_is_inclusive(self) -> None:
        r = ValueRange.at_most(10)
        assert r.contains(10)
        assert not r.contains(11)

    def test_between(self) -> None:
        r = ValueRange.between(5, 7)
        assert [v in r for v in (4, 5, 6, 7, 8)] == [False, True, True, True, False]

    def test_exactly(self) -> None:
        r = ValueRange.exactly(1)
        assert 1 in r
        assert 2 not in r
        assert r.max_value == 1

    def test_empty_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="Empty range"):
            ValueRange(min_value=10, max_value=5)


# ---------------------------------------------------------------------------
# Constraint types
# ---------------------------------------------------------------------------


class TestRegisterSpec:
    def test_unconstrained(self) -> None:
        assert RegisterSpec().is_unconstrained
        assert not RegisterSpec.exact(Constant.from_long(1)).is_unconstrained
        assert not RegisterSpec.of_type(SType.SLONG).is_unconstrained

    def test_contradiction_rejected(self) -> None:
        with pytest.raises(ValueError, match="contradicts"):
            RegisterSpec(value=Constant.from_long(1), value_type=SType.SINT)

    def test_consistent_value_and_type(self) -> None:
        spec = RegisterSpec(value=Constant.from_long(1), value_type=SType.SLONG)
        assert spec.value == Constant.from_long(1)


class TestTokenSpec:
    def test_default_range_unbounded(self) -> None:
        spec = TokenSpec(_NFT)
        assert spec.amount_range == ValueRange()


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


class TestMatchAddress:
    def test_unconstrained(self, make_box) -> None:
        assert match_address(None, make_box())

    def test_exact(self, make_box, user_address, other_address) -> None:
        box = make_box()
        assert match_address(user_address, box)
        assert not match_address(other_address, box)


class TestMatchValue:
    def test_unconstrained(self, make_box) -> None:
        assert match_value(None, make_box(value=0))

    def test_range(self, make_box) -> None:
        assert match_value(ValueRange.at_least(1000), make_box(value=1000))
        assert not match_value(ValueRange.at_least(1000), make_box(value=999))


class TestMatchRegister:
    def test_none_spec_matches_missing_register(self) -> None:
        assert match_register(None, None)
        assert match_register(RegisterSpec(), None)

    def test_constrained_slot_requires_register(self) -> None:
        assert not match_register(RegisterSpec.of_type(SType.SLONG), None)

    def test_exact_value(self) -> None:
        spec = RegisterSpec.exact(Constant.from_long(42))
        assert match_register(spec, Constant.from_long(42))
        assert not match_register(spec, Constant.from_long(43))

    def test_type_only(self) -> None:
        spec = RegisterSpec.of_type(SType.SLONG)
        assert match_register(spec, Constant.from_long(-5))
        assert not match_register(spec, Constant.from_int(-5))


class TestMatchToken:
    def test_none_spec(self) -> None:
        assert match_token(None, None)

    def test_missing_token(self) -> None:
        assert not match_token(TokenSpec(_NFT), None)

    def test_id_and_amount(self) -> None:
        spec = TokenSpec(_NFT, ValueRange.exactly(1))
        assert match_token(spec, Token(_NFT, 1))
        assert not match_token(spec, Token(_NFT, 2))
        assert not match_token(spec, Token("ff" * 32, 1))


class TestBoxPredicate:
    def test_plain_function_satisfies_protocol(self) -> None:
        def is_big(box) -> bool:
            return box.value > 10

        assert isinstance(is_big, BoxPredicate)

    def test_callable_object_satisfies_protocol(self, make_box) -> None:
        class HasTokens:
            def __call__(self, box) -> bool:
                return bool(box.tokens)

        predicate = HasTokens()
        assert isinstance(predicate, BoxPredicate)
        assert predicate(make_box()) is False
