"""Logging setup driven by :class:`AppConfig`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from headless_dapp.config.settings import AppConfig

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(config: AppConfig) -> None:
    """Configure the root logger; ``debug`` forces DEBUG level."""
    level = logging.DEBUG if config.debug else config.log_level.value
    logging.basicConfig(level=level, format=_FORMAT, force=True)
    logging.getLogger("httpx").setLevel(logging.WARNING)
