"""Register constants — sigma type tags and value serialization.

Registers R4..R9 of a box hold typed constants. Only the primitive types a
dApp usually writes itself are encodable here:

- ``SBoolean``  — one byte, 0 or 1
- ``SByte``     — one signed byte
- ``SShort`` / ``SInt`` / ``SLong`` — ZigZag then VLQ encoded
- ``Coll[SByte]`` — VLQ length prefix followed by the raw bytes

Every constant serializes as ``<type code><value bytes>``. Constants of other
types (tuples, group elements, sigma props, ...) are kept as opaque hex as
reported by the Explorer, which is enough for equality checks.

Contract hashes (blake2b-256 of an ErgoTree) are stored as ``Coll[SByte]``;
see :func:`hash_and_serialize_p2s`.
"""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass
from io import BytesIO
from typing import Self

from headless_dapp.ergo.address import (
    AddressType,
    ErgoAddress,
    Network,
    address_to_ergo_tree,
    encode_address,
)
from headless_dapp.errors.dapp_errors import EncodingError

# ---------------------------------------------------------------------------
# Type tags
# ---------------------------------------------------------------------------


class SType(enum.StrEnum):
    """Sigma type names, as reported by the Explorer ``sigmaType`` field."""

    SBOOLEAN = "SBoolean"
    SBYTE = "SByte"
    SSHORT = "SShort"
    SINT = "SInt"
    SLONG = "SLong"
    SBIGINT = "SBigInt"
    SGROUP_ELEMENT = "SGroupElement"
    SSIGMA_PROP = "SSigmaProp"
    COLL_BYTE = "Coll[SByte]"


_TYPE_CODES: dict[SType, int] = {
    SType.SBOOLEAN: 0x01,
    SType.SBYTE: 0x02,
    SType.SSHORT: 0x03,
    SType.SINT: 0x04,
    SType.SLONG: 0x05,
    SType.SBIGINT: 0x06,
    SType.SGROUP_ELEMENT: 0x07,
    SType.SSIGMA_PROP: 0x08,
    SType.COLL_BYTE: 0x0E,  # collection prefix 12 + SByte
}

_CODE_TYPES: dict[int, SType] = {code: stype for stype, code in _TYPE_CODES.items()}

_INT_BOUNDS: dict[SType, tuple[int, int]] = {
    SType.SSHORT: (-(2**15), 2**15 - 1),
    SType.SINT: (-(2**31), 2**31 - 1),
    SType.SLONG: (-(2**63), 2**63 - 1),
}


# ---------------------------------------------------------------------------
# VLQ / ZigZag
# ---------------------------------------------------------------------------


def encode_vlq(n: int) -> bytes:
    """Encode a nonnegative integer as an unsigned LEB128 varint."""
    if n < 0:
        msg = f"VLQ cannot encode negative value {n}"
        raise EncodingError(msg)
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def read_vlq(stream: BytesIO) -> int:
    """Read an unsigned LEB128 varint from a byte stream."""
    result = 0
    shift = 0
    while True:
        chunk = stream.read(1)
        if not chunk:
            msg = "Unexpected end of stream reading VLQ"
            raise EncodingError(msg)
        byte = chunk[0]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result
        shift += 7


def zigzag_encode(n: int) -> int:
    """Map a signed integer onto the unsigned integers (0, -1, 1, -2, ...)."""
    return n * 2 if n >= 0 else -n * 2 - 1


def zigzag_decode(n: int) -> int:
    """Inverse of :func:`zigzag_encode`."""
    return n >> 1 if not n & 1 else -((n + 1) >> 1)


# ---------------------------------------------------------------------------
# Constant
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Constant:
    """A typed register value.

    Two constants are equal when both their sigma type and their serialized
    bytes are equal.

    Attributes:
        stype: Sigma type name (an :class:`SType` or an Explorer type string).
        serialized: Lower-case hex of the full serialized constant.
    """

    stype: str
    serialized: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "serialized", self.serialized.lower())

    @property
    def raw(self) -> bytes:
        return bytes.fromhex(self.serialized)

    # -- Constructors -------------------------------------------------------

    @classmethod
    def from_hex(cls, hex_str: str, stype: str | None = None) -> Self:
        """Wrap serialized constant hex, inferring the type from its first byte."""
        try:
            raw = bytes.fromhex(hex_str)
        except ValueError as exc:
            msg = f"Constant is not valid hex: {hex_str!r}"
            raise EncodingError(msg) from exc
        if not raw:
            msg = "Constant hex is empty"
            raise EncodingError(msg)
        if stype is None:
            code = raw[0]
            stype = _CODE_TYPES.get(code, f"type:{code:#04x}")
        return cls(stype=stype, serialized=raw.hex())

    @classmethod
    def from_bool(cls, value: bool) -> Self:
        return cls._build(SType.SBOOLEAN, b"\x01" if value else b"\x00")

    @classmethod
    def from_byte(cls, value: int) -> Self:
        if not -128 <= value <= 127:
            msg = f"SByte out of range: {value}"
            raise EncodingError(msg)
        return cls._build(SType.SBYTE, (value & 0xFF).to_bytes(1, "big"))

    @classmethod
    def from_short(cls, value: int) -> Self:
        return cls._integer(SType.SSHORT, value)

    @classmethod
    def from_int(cls, value: int) -> Self:
        return cls._integer(SType.SINT, value)

    @classmethod
    def from_long(cls, value: int) -> Self:
        return cls._integer(SType.SLONG, value)

    @classmethod
    def from_bytes(cls, value: bytes) -> Self:
        return cls._build(SType.COLL_BYTE, encode_vlq(len(value)) + bytes(value))

    @classmethod
    def from_str(cls, value: str) -> Self:
        """Encode a UTF-8 string as ``Coll[SByte]``."""
        return cls.from_bytes(value.encode("utf-8"))

    @classmethod
    def from_hex_string(cls, hex_str: str) -> Self:
        """Encode the bytes of a hex string (a token id, a hash) as ``Coll[SByte]``."""
        return cls.from_bytes(_hex_bytes(hex_str))

    @classmethod
    def _integer(cls, stype: SType, value: int) -> Self:
        low, high = _INT_BOUNDS[stype]
        if isinstance(value, bool) or not low <= value <= high:
            msg = f"{stype} out of range: {value}"
            raise EncodingError(msg)
        return cls._build(stype, encode_vlq(zigzag_encode(value)))

    @classmethod
    def _build(cls, stype: SType, body: bytes) -> Self:
        return cls(stype=stype, serialized=(bytes([_TYPE_CODES[stype]]) + body).hex())


# ---------------------------------------------------------------------------
# Unwrapping
# ---------------------------------------------------------------------------


def _body(c: Constant, stype: SType) -> BytesIO:
    if c.stype != stype:
        msg = f"Failed to unwrap {c.serialized}: expected {stype}, got {c.stype}"
        raise EncodingError(msg)
    raw = c.raw
    if not raw or raw[0] != _TYPE_CODES[stype]:
        msg = f"Failed to unwrap {c.serialized}: type code mismatch"
        raise EncodingError(msg)
    return BytesIO(raw[1:])


def _unwrap_integer(c: Constant, stype: SType) -> int:
    return zigzag_decode(read_vlq(_body(c, stype)))


def unwrap_short(c: Constant) -> int:
    return _unwrap_integer(c, SType.SSHORT)


def unwrap_int(c: Constant) -> int:
    """Unwrap an ``SInt`` register value."""
    return _unwrap_integer(c, SType.SINT)


def unwrap_long(c: Constant) -> int:
    """Unwrap an ``SLong`` register value."""
    return _unwrap_integer(c, SType.SLONG)


def unwrap_boolean(c: Constant) -> bool:
    return _body(c, SType.SBOOLEAN).read(1) == b"\x01"


def unwrap_bytes(c: Constant) -> bytes:
    """Unwrap a ``Coll[SByte]`` register value."""
    stream = _body(c, SType.COLL_BYTE)
    length = read_vlq(stream)
    data = stream.read(length)
    if len(data) != length:
        msg = f"Failed to unwrap {c.serialized}: truncated byte collection"
        raise EncodingError(msg)
    return data


def unwrap_string(c: Constant) -> str:
    """Unwrap a UTF-8 string stored as ``Coll[SByte]``."""
    try:
        return unwrap_bytes(c).decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Failed to deserialize {c.serialized} as UTF-8"
        raise EncodingError(msg) from exc


def unwrap_hex_encoded_string(c: Constant) -> str:
    """Unwrap a ``Coll[SByte]`` register value as lower-case hex."""
    return unwrap_bytes(c).hex()


def unwrap_ergo_tree_address(c: Constant, *, network: Network = Network.MAINNET) -> str:
    """P2S address of the ErgoTree bytes held in a ``Coll[SByte]`` register."""
    tree = unwrap_bytes(c)
    if not tree:
        msg = f"Failed to deserialize {c.serialized}: empty ErgoTree"
        raise EncodingError(msg)
    return encode_address(ErgoAddress(network, AddressType.P2S, tree))


# ---------------------------------------------------------------------------
# Contract hashes
# ---------------------------------------------------------------------------


def _hex_bytes(hex_str: str) -> bytes:
    try:
        return bytes.fromhex(hex_str)
    except ValueError as exc:
        msg = f"Not valid hex: {hex_str!r}"
        raise EncodingError(msg) from exc


def blake2b256_hex(hex_str: str) -> str:
    """Hex blake2b-256 digest of the bytes encoded by *hex_str*."""
    return hashlib.blake2b(_hex_bytes(hex_str), digest_size=32).hexdigest()


def hash_and_serialize_p2s(address: str) -> Constant:
    """Register constant holding the blake2b-256 hash of *address*'s ErgoTree.

    Contracts compare ``blake2b256(OUTPUTS(i).propositionBytes)`` against such
    a register to pin an output to a known script.

    Raises:
        InvalidAddressError: If *address* does not decode to an ErgoTree.
    """
    return Constant.from_hex_string(blake2b256_hex(address_to_ergo_tree(address)))
