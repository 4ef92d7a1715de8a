"""External service clients — Explorer listings and node signing."""

from headless_dapp.clients.explorer.client import ExplorerClient
from headless_dapp.clients.node.client import NodeClient
from headless_dapp.clients.signer import TransactionSigner

__all__ = ["ExplorerClient", "NodeClient", "TransactionSigner"]
