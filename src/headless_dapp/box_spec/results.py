"""Verification results — success or a tagged per-attribute failure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from headless_dapp.errors.verification_errors import MismatchCause

if TYPE_CHECKING:
    from headless_dapp.errors.verification_errors import BoxVerificationError

__all__ = ["MismatchCause", "VerificationResult"]


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one box against a spec.

    ``error`` is None on success, otherwise the exception describing the
    first attribute that failed.
    """

    error: BoxVerificationError | None = None

    @classmethod
    def success(cls) -> Self:
        return cls()

    @classmethod
    def failure(cls, error: BoxVerificationError) -> Self:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def cause(self) -> MismatchCause | None:
        return self.error.cause if self.error is not None else None

    @property
    def slot(self) -> int | None:
        return self.error.slot if self.error is not None else None

    def raise_for_failure(self) -> None:
        """Raise the failure's exception, if any."""
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.ok
