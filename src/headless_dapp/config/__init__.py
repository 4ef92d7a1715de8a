"""Configuration — settings models and logging setup."""

from headless_dapp.config.logs import configure_logging
from headless_dapp.config.settings import AppConfig, ExplorerConfig, Network, NodeConfig, TxConfig

__all__ = ["AppConfig", "ExplorerConfig", "Network", "NodeConfig", "TxConfig", "configure_logging"]
