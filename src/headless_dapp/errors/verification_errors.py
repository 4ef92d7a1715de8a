"""Box verification failures — one class per mismatching attribute.

Each error names exactly which attribute of a ``BoxSpec`` rejected the box.
Register and token mismatches also carry the zero-based slot index (slot
``i`` of the register list is register ``R(4+i)``).
"""

from __future__ import annotations

import enum
from typing import ClassVar

from headless_dapp.errors.dapp_errors import HeadlessDappError


class MismatchCause(enum.StrEnum):
    """The attribute of a box that failed verification."""

    ADDRESS = "address"
    VALUE_RANGE = "value_range"
    REGISTER = "register"
    TOKEN = "token"
    PREDICATE = "predicate"


class BoxVerificationError(HeadlessDappError):
    """A box does not match a ``BoxSpec``."""

    cause: ClassVar[MismatchCause]

    def __init__(self, message: str, *, code: str, slot: int | None = None) -> None:
        super().__init__(message, code=code)
        self.slot = slot


class AddressMismatchError(BoxVerificationError):
    cause = MismatchCause.ADDRESS

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"box address {actual} does not match the box spec address {expected}",
            code="spec-address-mismatch",
        )
        self.expected = expected
        self.actual = actual


class ValueRangeError(BoxVerificationError):
    cause = MismatchCause.VALUE_RANGE

    def __init__(self, value: int) -> None:
        super().__init__(
            f"box value {value} is outside of the valid range of the box spec",
            code="spec-value-out-of-range",
        )
        self.value = value


class RegisterMismatchError(BoxVerificationError):
    cause = MismatchCause.REGISTER

    def __init__(self, slot: int) -> None:
        super().__init__(
            f"register R{slot + 4} failed to match the box spec",
            code="spec-register-mismatch",
            slot=slot,
        )


class TokenMismatchError(BoxVerificationError):
    cause = MismatchCause.TOKEN

    def __init__(self, slot: int) -> None:
        super().__init__(
            f"token at position {slot} failed to match the box spec",
            code="spec-token-mismatch",
            slot=slot,
        )


class PredicateFailedError(BoxVerificationError):
    cause = MismatchCause.PREDICATE

    def __init__(self) -> None:
        super().__init__("the box spec predicate rejected the box", code="spec-predicate-failed")
