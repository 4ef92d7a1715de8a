"""Tests for config-driven assembly — tx/builder.py."""

from __future__ import annotations

import json

import pytest

from headless_dapp.config.settings import TxConfig
from headless_dapp.errors import ValueImbalanceError
from headless_dapp.tx.builder import TxBuilder
from headless_dapp.tx.candidate import MINER_FEE_ADDRESS, change_candidate

_HEIGHT = 700_000


class TestFeeOutput:
    def test_defaults(self) -> None:
        fee = TxBuilder(TxConfig()).fee_output(_HEIGHT)
        assert fee.value == 1_000_000
        assert fee.address == MINER_FEE_ADDRESS
        assert fee.creation_height == _HEIGHT

    def test_configured_fee_and_address(self, other_address) -> None:
        builder = TxBuilder(TxConfig(fee=2_500_000, fee_address=other_address))
        assert builder.fee == 2_500_000
        fee = builder.fee_output(_HEIGHT)
        assert fee.value == 2_500_000
        assert fee.address == other_address


class TestAssemble:
    def test_fee_output_is_last(self, make_box, user_address) -> None:
        change = change_candidate(2_000_000, user_address, _HEIGHT)
        draft = TxBuilder(TxConfig()).assemble(
            [make_box(value=3_000_000)], [], [change], creation_height=_HEIGHT
        )
        assert draft.outputs[0] == change
        assert draft.outputs[-1].address == MINER_FEE_ADDRESS
        assert draft.total_output_value == 3_000_000

    def test_balance_not_checked_by_default(self, make_box, user_address) -> None:
        change = change_candidate(2_000_001, user_address, _HEIGHT)
        draft = TxBuilder(TxConfig()).assemble(
            [make_box(value=3_000_000)], [], [change], creation_height=_HEIGHT
        )
        assert draft.is_balanced is False

    def test_balance_enforced_when_configured(self, make_box, user_address) -> None:
        builder = TxBuilder(TxConfig(enforce_value_balance=True))
        change = change_candidate(2_000_001, user_address, _HEIGHT)
        with pytest.raises(ValueImbalanceError):
            builder.assemble([make_box(value=3_000_000)], [], [change], creation_height=_HEIGHT)

    def test_balance_enforced_counts_fee(self, make_box, user_address) -> None:
        builder = TxBuilder(TxConfig(enforce_value_balance=True))
        change = change_candidate(2_000_000, user_address, _HEIGHT)
        draft = builder.assemble(
            [make_box(value=3_000_000)], [], [change], creation_height=_HEIGHT
        )
        assert draft.is_balanced is True


class TestAssemblerSpec:
    def test_uses_configured_fee(self, make_box, user_address) -> None:
        builder = TxBuilder(TxConfig(fee=1_500_000))
        change = change_candidate(1_000_000, user_address, _HEIGHT)
        draft = builder.assemble(
            [make_box(value=2_500_000)], [], [change], creation_height=_HEIGHT
        )
        spec = json.loads(builder.assembler_spec(draft))
        assert spec["fee"] == 1_500_000
        assert len(spec["requests"]) == 2
