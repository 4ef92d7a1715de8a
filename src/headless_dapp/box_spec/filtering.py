"""Batch filtering of candidate boxes against a BoxSpec.

Filtering operates on boxes already decoded into memory and performs no I/O.
Rejection reasons are dropped; call ``BoxSpec.verify`` directly per box when
they are needed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from headless_dapp.errors.chain_errors import NotEnoughBoxesError

if TYPE_CHECKING:
    from headless_dapp.box_spec.spec import BoxSpec
    from headless_dapp.ergo.box import Box

logger = logging.getLogger(__name__)


def filter_boxes(
    spec: BoxSpec,
    candidates: Iterable[Box],
    *,
    max_workers: int | None = None,
) -> list[Box]:
    """Return the candidates that verify against *spec*, in input order.

    Args:
        spec: The specification to verify against.
        candidates: Decoded boxes, typically from an Explorer listing.
        max_workers: If set, verify on a thread pool of this size. Results
            are still returned in input order.

    Returns:
        An order-preserving subsequence of *candidates*; empty when nothing
        matches.
    """
    boxes = list(candidates)
    if max_workers and len(boxes) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            verdicts = list(pool.map(spec.matches, boxes))
    else:
        verdicts = [spec.matches(b) for b in boxes]

    matched = [b for b, ok in zip(boxes, verdicts, strict=True) if ok]
    logger.debug("Spec matched %d of %d candidate boxes", len(matched), len(boxes))
    return matched


def select_distinct(
    spec: BoxSpec,
    candidates: Iterable[Box],
    count: int,
    *,
    exclude_ids: Iterable[str] = (),
) -> list[Box]:
    """Pick the first *count* matching boxes with distinct ids.

    Used when one action needs several boxes from the same listing (e.g. one
    box to fund a bounty and another to pay the fee). Boxes whose ids are in
    *exclude_ids* or were already picked are skipped.

    Raises:
        NotEnoughBoxesError: If fewer than *count* such boxes exist.
    """
    if count < 1:
        msg = f"count must be positive, got {count}"
        raise ValueError(msg)

    taken = set(exclude_ids)
    selected: list[Box] = []
    for box in candidates:
        if box.box_id in taken or not spec.matches(box):
            continue
        selected.append(box)
        taken.add(box.box_id)
        if len(selected) == count:
            return selected

    raise NotEnoughBoxesError(count, len(selected))
