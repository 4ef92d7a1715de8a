"""Unsigned transaction drafts — inputs, data inputs and output candidates.

The draft is the hand-off point to an external signer. It is immutable;
changing it means assembling a new draft. Input and output order is kept
exactly as given, since guarding scripts commonly inspect outputs by
position ("output 0 must hold X").

Fee sufficiency and token conservation are ledger consensus rules and are
not checked here. Value balance (outputs not exceeding inputs) is only
checked when explicitly requested.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from headless_dapp.box_spec.specified import WrappedBox
from headless_dapp.ergo.box import Box
from headless_dapp.ergo.inputs import DataInput, UnsignedInput
from headless_dapp.errors.assembly_errors import (
    DuplicateInputError,
    EmptyInputsError,
    EmptyOutputsError,
    ValueImbalanceError,
)
from headless_dapp.tx.candidate import OutputCandidate

logger = logging.getLogger(__name__)

InputLike = Box | WrappedBox | UnsignedInput
DataInputLike = Box | WrappedBox | DataInput | str


@dataclass(frozen=True)
class UnsignedTransaction:
    """An unsigned transaction draft.

    Construction enforces: at least one input, at least one output, and no
    box spent twice. Data inputs may repeat ids of spent inputs.
    """

    inputs: tuple[UnsignedInput, ...]
    data_inputs: tuple[DataInput, ...] = field(default_factory=tuple)
    outputs: tuple[OutputCandidate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "data_inputs", tuple(self.data_inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))

        if not self.inputs:
            raise EmptyInputsError()
        if not self.outputs:
            raise EmptyOutputsError()

        seen: set[str] = set()
        for inp in self.inputs:
            if inp.box_id in seen:
                raise DuplicateInputError(inp.box_id)
            seen.add(inp.box_id)

    @property
    def input_ids(self) -> list[str]:
        return [i.box_id for i in self.inputs]

    @property
    def total_input_value(self) -> int:
        return sum(i.value for i in self.inputs)

    @property
    def total_output_value(self) -> int:
        return sum(o.value for o in self.outputs)

    @property
    def is_balanced(self) -> bool:
        """Check that outputs do not hold more nanoERGs than inputs."""
        return self.total_output_value <= self.total_input_value

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the node's unsigned transaction JSON."""
        return {
            "inputs": [i.to_dict() for i in self.inputs],
            "dataInputs": [d.to_dict() for d in self.data_inputs],
            "outputs": [o.to_dict() for o in self.outputs],
        }

    def __repr__(self) -> str:
        return (
            f"<UnsignedTransaction inputs={len(self.inputs)} "
            f"data_inputs={len(self.data_inputs)} outputs={len(self.outputs)}>"
        )


def _as_input(item: InputLike) -> UnsignedInput:
    if isinstance(item, UnsignedInput):
        return item
    if isinstance(item, WrappedBox):
        return item.as_unsigned_input()
    if isinstance(item, Box):
        return UnsignedInput(item)
    msg = f"Cannot spend {type(item).__name__} as a transaction input"
    raise TypeError(msg)


def _as_data_input(item: DataInputLike) -> DataInput:
    if isinstance(item, DataInput):
        return item
    if isinstance(item, str):
        return DataInput(item)
    if isinstance(item, WrappedBox):
        return item.as_data_input()
    if isinstance(item, Box):
        return DataInput(item.box_id)
    msg = f"Cannot read {type(item).__name__} as a data input"
    raise TypeError(msg)


def assemble(
    inputs: Iterable[InputLike],
    data_inputs: Iterable[DataInputLike],
    outputs: Iterable[OutputCandidate],
    *,
    enforce_value_balance: bool = False,
) -> UnsignedTransaction:
    """Assemble an unsigned transaction draft.

    Args:
        inputs: Boxes to spend, in order.
        data_inputs: Boxes (or box ids) to read, in order.
        outputs: Output candidates, in order.
        enforce_value_balance: Reject drafts whose outputs hold more
            nanoERGs than their inputs.

    Returns:
        The assembled draft.

    Raises:
        EmptyInputsError: If *inputs* is empty.
        EmptyOutputsError: If *outputs* is empty.
        DuplicateInputError: If two inputs spend the same box.
        ValueImbalanceError: If balance is enforced and outputs exceed inputs.
    """
    draft = UnsignedTransaction(
        inputs=tuple(_as_input(i) for i in inputs),
        data_inputs=tuple(_as_data_input(d) for d in data_inputs),
        outputs=tuple(outputs),
    )
    if enforce_value_balance and not draft.is_balanced:
        raise ValueImbalanceError(draft.total_input_value, draft.total_output_value)

    logger.debug(
        "Assembled draft: %d inputs (%d nanoErg), %d data inputs, %d outputs (%d nanoErg)",
        len(draft.inputs),
        draft.total_input_value,
        len(draft.data_inputs),
        len(draft.outputs),
        draft.total_output_value,
    )
    return draft
