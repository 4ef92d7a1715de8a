"""Wrapped and specified boxes.

A ``SpecifiedBox`` subclass ties a Python type to a ``BoxSpec``. Its
constructor verifies the box, so holding an instance means the box matched
the class BoxSpec at construction time::

    class MathBountyBox(SpecifiedBox):
        @classmethod
        def box_spec(cls) -> BoxSpec:
            return BoxSpec(address=BOUNTY_ADDRESS)

    bounty = MathBountyBox(box)             # raises BoxVerificationError
    maybe = MathBountyBox.try_wrap(box)     # or returns None
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Self

from headless_dapp.box_spec.filtering import filter_boxes
from headless_dapp.ergo.address import Network
from headless_dapp.ergo.box import decode_explorer_response
from headless_dapp.ergo.inputs import DataInput, UnsignedInput
from headless_dapp.errors.verification_errors import BoxVerificationError

if TYPE_CHECKING:
    from headless_dapp.box_spec.spec import BoxSpec
    from headless_dapp.ergo.box import Box, Token
    from headless_dapp.ergo.constant import Constant


class WrappedBox:
    """A box held inside a higher-level type."""

    def __init__(self, box: Box) -> None:
        self._box = box

    @property
    def box(self) -> Box:
        return self._box

    @property
    def box_id(self) -> str:
        return self._box.box_id

    @property
    def nano_ergs(self) -> int:
        return self._box.value

    @property
    def address(self) -> str:
        return self._box.address

    @property
    def registers(self) -> tuple[Constant, ...]:
        """Registers in order; the first element is R4."""
        return self._box.registers

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._box.tokens

    @property
    def creation_height(self) -> int:
        return self._box.creation_height

    def as_unsigned_input(self) -> UnsignedInput:
        return UnsignedInput(self._box)

    def as_data_input(self) -> DataInput:
        return DataInput(self._box.box_id)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._box == other._box  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._box))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.box_id[:16]}... nanoErgs={self.nano_ergs}>"


class SpecifiedBox(WrappedBox, ABC):
    """A wrapped box guaranteed to match the class's ``box_spec()``.

    Subclasses must implement :meth:`box_spec`.
    """

    def __init__(self, box: Box) -> None:
        self.verify_box(box)
        super().__init__(box)

    @classmethod
    @abstractmethod
    def box_spec(cls) -> BoxSpec:
        """The BoxSpec every instance of this class matches."""

    @classmethod
    def verify_box(cls, box: Box) -> None:
        """Verify *box* against the class spec, raising on mismatch."""
        cls.box_spec().verify_box(box)

    @classmethod
    def try_wrap(cls, box: Box) -> Self | None:
        """Wrap *box* if it matches the class spec, else return None."""
        try:
            return cls(box)
        except BoxVerificationError:
            return None

    @classmethod
    def explorer_endpoint(cls, explorer_api_url: str, **limits: int) -> str:
        return cls.box_spec().explorer_endpoint(explorer_api_url, **limits)

    @classmethod
    def from_boxes(cls, boxes: Iterable[Box], box_spec: BoxSpec | None = None) -> list[Self]:
        """Filter *boxes* against *box_spec* (default: the class spec) and wrap them.

        A custom spec is expected to narrow the class spec. A box that passes
        the custom spec but not the class spec raises ``BoxVerificationError``.
        """
        spec = box_spec if box_spec is not None else cls.box_spec()
        return [cls(b) for b in filter_boxes(spec, boxes)]

    @classmethod
    def process_explorer_response(
        cls,
        explorer_response_body: str | bytes | Any,
        box_spec: BoxSpec | None = None,
        *,
        network: Network = Network.MAINNET,
    ) -> list[Self]:
        """Decode an Explorer listing into instances of this class.

        Raises:
            ExplorerResponseError: If the body fails to decode.
        """
        boxes = decode_explorer_response(explorer_response_body, network=network)
        return cls.from_boxes(boxes, box_spec)
