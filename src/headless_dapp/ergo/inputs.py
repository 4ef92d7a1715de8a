"""Transaction input references — spent inputs and read-only data inputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from headless_dapp.ergo.box import Box


@dataclass(frozen=True)
class UnsignedInput:
    """A box to be spent, not yet carrying a spending proof."""

    box: Box

    @property
    def box_id(self) -> str:
        return self.box.box_id

    @property
    def value(self) -> int:
        return self.box.value

    def to_dict(self) -> dict[str, Any]:
        return {"boxId": self.box_id, "extension": {}}


@dataclass(frozen=True)
class DataInput:
    """A box read by a transaction without being spent."""

    box_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"boxId": self.box_id}
