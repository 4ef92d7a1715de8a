"""Ergo ledger primitives — boxes, register constants, addresses, units."""

from headless_dapp.ergo.address import (
    AddressType,
    ErgoAddress,
    Network,
    address_to_ergo_tree,
    decode_address,
    encode_address,
    ergo_tree_to_address,
    validate_address,
)
from headless_dapp.ergo.box import MAX_REGISTERS, Box, Token, decode_explorer_response
from headless_dapp.ergo.constant import (
    Constant,
    SType,
    hash_and_serialize_p2s,
    unwrap_ergo_tree_address,
)
from headless_dapp.ergo.inputs import DataInput, UnsignedInput
from headless_dapp.ergo.units import erg_to_nano_erg, nano_erg_to_erg

__all__ = [
    "MAX_REGISTERS",
    "AddressType",
    "Box",
    "Constant",
    "DataInput",
    "ErgoAddress",
    "Network",
    "SType",
    "Token",
    "UnsignedInput",
    "address_to_ergo_tree",
    "decode_address",
    "decode_explorer_response",
    "encode_address",
    "erg_to_nano_erg",
    "ergo_tree_to_address",
    "hash_and_serialize_p2s",
    "nano_erg_to_erg",
    "unwrap_ergo_tree_address",
    "validate_address",
]
