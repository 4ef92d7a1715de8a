"""Address encoding — Base58, blake2b checksums, ErgoTree conversion.

Ergo address operations:
- Base58 encoding/decoding of the raw address bytes
- Network / address type detection from the prefix byte
- Checksum validation (first 4 bytes of blake2b-256)
- Conversion between addresses and ErgoTree hex

Raw layout: ``prefix(1) || content || checksum(4)`` where
``prefix = network + address_type``.
"""

from __future__ import annotations

import enum
import hashlib
from dataclasses import dataclass

from headless_dapp.errors.dapp_errors import InvalidAddressError

_CHECKSUM_LEN = 4
_P2PK_TREE_PREFIX = bytes.fromhex("0008cd")
_PUBKEY_LEN = 33


class Network(enum.IntEnum):
    """Network prefix of an address."""

    MAINNET = 0x00
    TESTNET = 0x10


class AddressType(enum.IntEnum):
    """Address type encoded in the low nibble of the prefix byte."""

    P2PK = 0x01
    P2SH = 0x02
    P2S = 0x03


# ---------------------------------------------------------------------------
# Base58 encoding / decoding
# ---------------------------------------------------------------------------

_B58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def base58_encode(payload: bytes) -> str:
    """Encode raw bytes to Base58 (no checksum)."""
    n = int.from_bytes(payload, "big")
    result: list[int] = []
    while n > 0:
        n, remainder = divmod(n, 58)
        result.append(_B58_ALPHABET[remainder])
    # Preserve leading zero bytes
    for byte in payload:
        if byte == 0:
            result.append(_B58_ALPHABET[0])
        else:
            break
    return bytes(reversed(result)).decode("ascii")


def base58_decode(s: str) -> bytes:
    """Decode Base58 string to raw bytes (no checksum).

    Raises:
        ValueError: If *s* contains a character outside the Base58 alphabet.
    """
    n = 0
    for char in s:
        index = _B58_ALPHABET.find(char.encode("ascii", errors="replace"))
        if index < 0:
            msg = f"Invalid Base58 character {char!r}"
            raise ValueError(msg)
        n = n * 58 + index
    result = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    pad_count = len(s) - len(s.lstrip("1"))
    return b"\x00" * pad_count + result


def _checksum(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()[:_CHECKSUM_LEN]


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ErgoAddress:
    """A decoded address.

    Attributes:
        network: Mainnet or testnet.
        address_type: P2PK, P2SH or P2S.
        content: Public key (P2PK), script hash (P2SH) or ErgoTree bytes (P2S).
    """

    network: Network
    address_type: AddressType
    content: bytes

    @property
    def prefix(self) -> int:
        return self.network + self.address_type

    def ergo_tree(self) -> bytes:
        """The ErgoTree guarding boxes at this address."""
        if self.address_type is AddressType.P2PK:
            return _P2PK_TREE_PREFIX + self.content
        if self.address_type is AddressType.P2S:
            return self.content
        msg = "P2SH addresses carry only a script hash"
        raise InvalidAddressError(encode_address(self), msg)


def decode_address(address: str) -> ErgoAddress:
    """Decode and checksum-verify a Base58 address string.

    Raises:
        InvalidAddressError: If the string is not a well-formed address.
    """
    if not address:
        raise InvalidAddressError(address, "empty")
    try:
        raw = base58_decode(address)
    except ValueError as exc:
        raise InvalidAddressError(address, str(exc)) from exc
    if len(raw) <= 1 + _CHECKSUM_LEN:
        raise InvalidAddressError(address, "too short")
    body, checksum = raw[:-_CHECKSUM_LEN], raw[-_CHECKSUM_LEN:]
    if _checksum(body) != checksum:
        raise InvalidAddressError(address, "checksum mismatch")
    prefix = body[0]
    try:
        network = Network(prefix & 0xF0)
        address_type = AddressType(prefix & 0x0F)
    except ValueError as exc:
        raise InvalidAddressError(address, f"unknown prefix {prefix:#04x}") from exc
    content = body[1:]
    if address_type is AddressType.P2PK and len(content) != _PUBKEY_LEN:
        raise InvalidAddressError(address, "P2PK content must be a 33-byte public key")
    return ErgoAddress(network=network, address_type=address_type, content=content)


def encode_address(address: ErgoAddress) -> str:
    """Encode an :class:`ErgoAddress` as a Base58 string with checksum."""
    body = bytes([address.prefix]) + address.content
    return base58_encode(body + _checksum(body))


def validate_address(address: str) -> bool:
    """Check if *address* is a well-formed address."""
    try:
        decode_address(address)
    except InvalidAddressError:
        return False
    return True


def address_to_ergo_tree(address: str) -> str:
    """Hex-encoded ErgoTree for a P2PK or P2S address string."""
    return decode_address(address).ergo_tree().hex()


def ergo_tree_to_address(ergo_tree: str, *, network: Network = Network.MAINNET) -> str:
    """Encode an ErgoTree hex string as a P2PK address if possible, else P2S."""
    tree = bytes.fromhex(ergo_tree)
    if tree.startswith(_P2PK_TREE_PREFIX) and len(tree) == len(_P2PK_TREE_PREFIX) + _PUBKEY_LEN:
        decoded = ErgoAddress(network, AddressType.P2PK, tree[len(_P2PK_TREE_PREFIX) :])
    else:
        decoded = ErgoAddress(network, AddressType.P2S, tree)
    return encode_address(decoded)
