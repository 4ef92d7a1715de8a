"""HeadlessDappError — base exception class for all headless dApp errors."""

from __future__ import annotations


class HeadlessDappError(Exception):
    """Base error for all headless dApp operations.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "headless-dapp-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class EncodingError(HeadlessDappError):
    """A register constant or encoded value could not be (de)serialized."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="encoding-error")


class InvalidAddressError(HeadlessDappError):
    """An address string failed to decode."""

    def __init__(self, address: str, reason: str = "") -> None:
        message = f"invalid address: {address}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, code="invalid-address")
        self.address = address
        self.reason = reason
