"""Ergo Explorer API client."""

from headless_dapp.clients.explorer.client import ExplorerClient

__all__ = ["ExplorerClient"]
