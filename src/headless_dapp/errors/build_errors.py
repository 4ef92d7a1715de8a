"""Output candidate construction errors.

Raised by the output candidate builder when caller input cannot describe a
valid box. Values are never coerced; a failed build produces no candidate.
"""

from __future__ import annotations

from headless_dapp.errors.dapp_errors import HeadlessDappError


class CandidateBuildError(HeadlessDappError):
    """An output candidate could not be constructed."""


class InvalidBoxValueError(CandidateBuildError):
    def __init__(self, value: object) -> None:
        super().__init__(f"the box value {value} is invalid", code="invalid-box-value")
        self.value = value


class TooManyRegistersError(CandidateBuildError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"{count} registers supplied, a box holds at most {limit}",
            code="too-many-registers",
        )
        self.count = count
        self.limit = limit


class DuplicateTokenError(CandidateBuildError):
    def __init__(self, token_id: str) -> None:
        super().__init__(f"token {token_id} appears more than once", code="duplicate-token")
        self.token_id = token_id


class InvalidTokenAmountError(CandidateBuildError):
    def __init__(self, token_id: str, amount: object) -> None:
        super().__init__(
            f"token {token_id} has invalid amount {amount}", code="invalid-token-amount"
        )
        self.token_id = token_id
        self.amount = amount


class InvalidCreationHeightError(CandidateBuildError):
    def __init__(self, height: object) -> None:
        super().__init__(f"invalid creation height {height}", code="invalid-creation-height")
        self.height = height
