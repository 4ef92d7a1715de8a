"""Ergo node API client."""

from headless_dapp.clients.node.client import NodeClient

__all__ = ["NodeClient"]
