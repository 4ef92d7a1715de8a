"""General-purpose specified boxes shared by many protocols."""

from __future__ import annotations

from collections.abc import Iterable

from headless_dapp.box_spec.matchers import RegisterSpec, TokenSpec, ValueRange
from headless_dapp.box_spec.spec import BoxSpec
from headless_dapp.box_spec.specified import SpecifiedBox
from headless_dapp.ergo.constant import SType, unwrap_long

MIN_ERGS_BOX_VALUE = 1_000_000

ERG_USD_ORACLE_POOL_NFT = "08b59b14e4fdd60e5952314adbaa8b4e00bc0f0b676872a5224d3bf8591074cd"
ADA_USD_ORACLE_POOL_NFT = "19475d9a78377ff0f36e9826cec439727bea522f6ffa3bda32e20d2f8b3103ac"


class ErgsBox(SpecifiedBox):
    """A box spent for the nanoERGs inside; holds at least 1,000,000 nanoERGs."""

    _SPEC = BoxSpec(value_range=ValueRange.at_least(MIN_ERGS_BOX_VALUE))

    @classmethod
    def box_spec(cls) -> BoxSpec:
        return cls._SPEC

    @staticmethod
    def sum_value(boxes: Iterable[ErgsBox]) -> int:
        """Total nanoERGs held by *boxes*."""
        return sum(b.nano_ergs for b in boxes)


def _oracle_pool_spec(nft_id: str) -> BoxSpec:
    return BoxSpec(
        registers=(RegisterSpec.of_type(SType.SLONG),),
        tokens=(TokenSpec(nft_id, ValueRange.exactly(1)),),
    )


class _OraclePoolBox(SpecifiedBox):
    """An oracle pool box holding a ``Long`` datapoint in R4."""

    @property
    def datapoint(self) -> int:
        """The R4 datapoint."""
        return unwrap_long(self.registers[0])

    @property
    def datapoint_in_cents(self) -> int:
        return self.datapoint // 100


class ErgUsdOraclePoolBox(_OraclePoolBox):
    """ERG/USD oracle pool box; R4 is how many nanoERGs buy 1 USD."""

    _SPEC = _oracle_pool_spec(ERG_USD_ORACLE_POOL_NFT)

    @classmethod
    def box_spec(cls) -> BoxSpec:
        return cls._SPEC


class AdaUsdOraclePoolBox(_OraclePoolBox):
    """ADA/USD oracle pool box; R4 is how many lovelaces buy 1 USD."""

    _SPEC = _oracle_pool_spec(ADA_USD_ORACLE_POOL_NFT)

    @classmethod
    def box_spec(cls) -> BoxSpec:
        return cls._SPEC
