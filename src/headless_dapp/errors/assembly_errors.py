"""Unsigned transaction assembly errors.

Each invariant violation has its own class so callers can tell an empty
input list from an empty output list or a double spend within one draft.
"""

from __future__ import annotations

from headless_dapp.errors.dapp_errors import HeadlessDappError


class AssemblyError(HeadlessDappError):
    """An unsigned transaction draft could not be assembled."""


class EmptyInputsError(AssemblyError):
    def __init__(self) -> None:
        super().__init__("transaction has no inputs", code="empty-inputs")


class EmptyOutputsError(AssemblyError):
    def __init__(self) -> None:
        super().__init__("transaction has no outputs", code="empty-outputs")


class DuplicateInputError(AssemblyError):
    def __init__(self, box_id: str) -> None:
        super().__init__(f"box {box_id} is spent more than once", code="duplicate-input")
        self.box_id = box_id


class ValueImbalanceError(AssemblyError):
    def __init__(self, total_input: int, total_output: int) -> None:
        super().__init__(
            f"outputs hold {total_output} nanoErgs but inputs only {total_input}",
            code="value-imbalance",
        )
        self.total_input = total_input
        self.total_output = total_output
