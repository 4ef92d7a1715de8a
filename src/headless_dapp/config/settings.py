"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``HEADLESS_DAPP_``, nested via ``__``)
2. YAML config file (``HEADLESS_DAPP_CONFIG_PATH`` env var or :meth:`AppConfig.from_yaml`)
3. Defaults defined here
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from headless_dapp.ergo.address import Network as AddressNetwork
from headless_dapp.tx.candidate import MINER_FEE_ADDRESS

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class Network(enum.StrEnum):
    """Ergo network the dApp talks to."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def address_prefix(self) -> AddressNetwork:
        return AddressNetwork.MAINNET if self is Network.MAINNET else AddressNetwork.TESTNET


class LogLevel(enum.StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class ExplorerConfig(BaseSettings):
    """Ergo Explorer API settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEADLESS_DAPP_EXPLORER__",
        case_sensitive=False,
    )

    url: str = "https://api.ergoplatform.com/api"
    timeout: float = 30.0
    address_limit: int = Field(default=500, gt=0, description="Page size for byAddress lookups")
    token_limit: int = Field(default=100, gt=0, description="Page size for byTokenId lookups")


class NodeConfig(BaseSettings):
    """Ergo node settings (wallet signing and submission)."""

    model_config = SettingsConfigDict(
        env_prefix="HEADLESS_DAPP_NODE__",
        case_sensitive=False,
    )

    url: str = "http://127.0.0.1:9053"
    api_key: str = ""
    timeout: float = 30.0


class TxConfig(BaseSettings):
    """Transaction creation defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HEADLESS_DAPP_TX__",
        case_sensitive=False,
    )

    fee: int = Field(default=1_000_000, ge=0, description="Default tx fee in nanoERGs")
    fee_address: str = MINER_FEE_ADDRESS
    enforce_value_balance: bool = False


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``HEADLESS_DAPP_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="HEADLESS_DAPP_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    network: Network = Network.MAINNET
    config_path: str = ""

    explorer: ExplorerConfig = Field(default_factory=ExplorerConfig)
    node: NodeConfig = Field(default_factory=NodeConfig)
    tx: TxConfig = Field(default_factory=TxConfig)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        yaml_data = _load_yaml(config_path)
        for key, val in yaml_data.items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
