"""Ergo node REST client — chain height, wallet addresses, sign & submit.

Async HTTP client for the node API:
- GET  /info                       — current full height
- GET  /wallet/addresses           — addresses of the unlocked wallet
- POST /wallet/transaction/sign    — sign an unsigned transaction
- POST /transactions               — submit a signed transaction

Authenticated endpoints need the node ``api_key``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from headless_dapp.config.settings import NodeConfig
from headless_dapp.errors.chain_errors import NodeError

if TYPE_CHECKING:
    from headless_dapp.tx.draft import UnsignedTransaction

logger = logging.getLogger(__name__)


class NodeClient:
    """Async HTTP client for an Ergo node with an unlocked wallet.

    Usage::

        node = NodeClient(config.node)
        await node.connect()
        try:
            height = await node.current_height()
            tx_id = await node.sign_and_submit(draft)
        finally:
            await node.close()
    """

    def __init__(self, config: NodeConfig | None = None) -> None:
        self._config = config if config is not None else NodeConfig()
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._config.api_key:
            headers["api_key"] = self._config.api_key
        self._client = httpx.AsyncClient(
            base_url=self._config.url.rstrip("/"),
            headers=headers,
            timeout=self._config.timeout,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def current_height(self) -> int:
        """Current full block height of the node."""
        data = await self._request("GET", "/info")
        try:
            return int(data["fullHeight"])
        except (KeyError, TypeError, ValueError) as exc:
            msg = "Node info has no fullHeight"
            raise NodeError(msg) from exc

    async def wallet_addresses(self) -> list[str]:
        """Addresses of the node wallet, first one is the default."""
        data = await self._request("GET", "/wallet/addresses")
        if not isinstance(data, list):
            msg = "Node returned no address list"
            raise NodeError(msg)
        return [str(a) for a in data]

    async def sign_transaction(self, unsigned_tx: UnsignedTransaction) -> dict[str, Any]:
        """Sign *unsigned_tx* with the node wallet, returning the signed tx JSON."""
        signed = await self._request(
            "POST", "/wallet/transaction/sign", json={"tx": unsigned_tx.to_dict()}
        )
        if not isinstance(signed, dict):
            msg = "Node returned no signed transaction"
            raise NodeError(msg)
        return signed

    async def submit_transaction(self, signed_tx: dict[str, Any]) -> str:
        """Submit a signed transaction, returning its id."""
        tx_id = await self._request("POST", "/transactions", json=signed_tx)
        return str(tx_id).strip('"')

    async def sign_and_submit(self, unsigned_tx: UnsignedTransaction) -> str:
        """Sign and submit *unsigned_tx*; returns the transaction id."""
        signed = await self.sign_transaction(unsigned_tx)
        tx_id = await self.submit_transaction(signed)
        logger.info("Submitted transaction %s", tx_id)
        return tx_id

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        client = self._ensure_connected()
        try:
            resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            msg = f"Node request {method} {path} failed: {exc}"
            raise NodeError(msg) from exc

        if resp.status_code != 200:
            detail = resp.text.strip()
            msg = f"Node returned HTTP {resp.status_code} for {path}: {detail}"
            raise NodeError(msg, status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            msg = f"Node returned invalid JSON for {path}"
            raise NodeError(msg, status_code=resp.status_code) from exc

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "NodeClient is not connected — call connect() first"
            raise RuntimeError(msg)
        return self._client
