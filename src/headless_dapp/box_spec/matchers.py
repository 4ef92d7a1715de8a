"""Attribute matchers — independent predicates over one attribute of a box.

Each matcher takes a constraint and the box attribute it constrains and
returns a bool. A ``None`` constraint is unconstrained and always matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from headless_dapp.ergo.box import Box, Token
    from headless_dapp.ergo.constant import Constant


# ---------------------------------------------------------------------------
# Constraint types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueRange:
    """Inclusive integer range; a ``None`` bound is unbounded on that side."""

    min_value: int | None = None
    max_value: int | None = None

    def __post_init__(self) -> None:
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            msg = f"Empty range: {self.min_value} > {self.max_value}"
            raise ValueError(msg)

    @classmethod
    def at_least(cls, minimum: int) -> Self:
        return cls(min_value=minimum)

    @classmethod
    def at_most(cls, maximum: int) -> Self:
        return cls(max_value=maximum)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> Self:
        return cls(min_value=minimum, max_value=maximum)

    @classmethod
    def exactly(cls, amount: int) -> Self:
        return cls(min_value=amount, max_value=amount)

    def contains(self, value: int) -> bool:
        if self.min_value is not None and value < self.min_value:
            return False
        return self.max_value is None or value <= self.max_value

    def __contains__(self, value: int) -> bool:
        return self.contains(value)


@dataclass(frozen=True)
class RegisterSpec:
    """Constraint on one register slot.

    ``value`` requires an exact constant; ``value_type`` requires only the
    sigma type. With neither set the slot is unconstrained.
    """

    value: Constant | None = None
    value_type: str | None = None

    def __post_init__(self) -> None:
        if (
            self.value is not None
            and self.value_type is not None
            and self.value.stype != self.value_type
        ):
            msg = f"Register value of type {self.value.stype} contradicts {self.value_type}"
            raise ValueError(msg)

    @classmethod
    def exact(cls, value: Constant) -> Self:
        return cls(value=value)

    @classmethod
    def of_type(cls, value_type: str) -> Self:
        return cls(value_type=value_type)

    @property
    def is_unconstrained(self) -> bool:
        return self.value is None and self.value_type is None


@dataclass(frozen=True)
class TokenSpec:
    """Constraint on one token slot: the token id and its quantity range."""

    token_id: str
    amount_range: ValueRange = field(default_factory=ValueRange)


@runtime_checkable
class BoxPredicate(Protocol):
    """Custom check applied last during verification.

    Any callable taking a box and returning a bool satisfies this protocol.
    """

    def __call__(self, box: Box, /) -> bool: ...


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


def match_address(expected: str | None, box: Box) -> bool:
    return expected is None or box.address == expected


def match_value(value_range: ValueRange | None, box: Box) -> bool:
    return value_range is None or value_range.contains(box.value)


def match_register(spec: RegisterSpec | None, register: Constant | None) -> bool:
    """Match one register slot.

    A constrained slot fails when the box has no register at that position.
    """
    if spec is None or spec.is_unconstrained:
        return True
    if register is None:
        return False
    if spec.value_type is not None and register.stype != spec.value_type:
        return False
    return spec.value is None or register == spec.value


def match_token(spec: TokenSpec | None, token: Token | None) -> bool:
    """Match one token slot on both identifier and quantity."""
    if spec is None:
        return True
    if token is None:
        return False
    return token.token_id == spec.token_id and spec.amount_range.contains(token.amount)
