"""Ergo Explorer REST client — unspent box listings.

Async HTTP client for the public Explorer API:
- GET  /v1/boxes/unspent/byAddress/<address>
- GET  /v1/boxes/unspent/byTokenId/<token id>
- GET  /v1/boxes/<box id>

Responses are decoded into :class:`Box` values in listing order; filtering
against a ``BoxSpec`` happens in memory afterwards. No retries are made.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from headless_dapp.config.settings import ExplorerConfig
from headless_dapp.ergo.address import Network
from headless_dapp.ergo.box import Box, decode_explorer_response
from headless_dapp.errors.chain_errors import ExplorerError, ExplorerResponseError
from headless_dapp.errors.dapp_errors import HeadlessDappError

if TYPE_CHECKING:
    from headless_dapp.box_spec.spec import BoxSpec
    from headless_dapp.box_spec.specified import SpecifiedBox

logger = logging.getLogger(__name__)

S = TypeVar("S", bound="SpecifiedBox")


class ExplorerClient:
    """Async HTTP client for the Ergo Explorer API.

    Usage::

        explorer = ExplorerClient()
        await explorer.connect()
        try:
            boxes = await explorer.find_boxes(spec)
        finally:
            await explorer.close()
    """

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        *,
        network: Network = Network.MAINNET,
    ) -> None:
        self._config = config if config is not None else ExplorerConfig()
        self._network = network
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._config.url.rstrip("/"),
            headers={"Accept": "application/json"},
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

    async def get_unspent_by_address(
        self, address: str, *, limit: int | None = None
    ) -> list[Box]:
        """Unspent boxes guarded by *address*, in Explorer order."""
        limit = limit or self._config.address_limit
        body = await self._get_json(f"/v1/boxes/unspent/byAddress/{address}?limit={limit}")
        return decode_explorer_response(body, network=self._network)

    async def get_unspent_by_token_id(
        self, token_id: str, *, limit: int | None = None
    ) -> list[Box]:
        """Unspent boxes holding *token_id*, in Explorer order."""
        limit = limit or self._config.token_limit
        body = await self._get_json(f"/v1/boxes/unspent/byTokenId/{token_id}?limit={limit}")
        return decode_explorer_response(body, network=self._network)

    async def get_box(self, box_id: str) -> Box:
        """A single box by id."""
        body = await self._get_json(f"/v1/boxes/{box_id}")
        if not isinstance(body, dict):
            msg = f"Explorer returned no box object for {box_id}"
            raise ExplorerResponseError(msg)
        try:
            return Box.from_explorer_json(body, network=self._network)
        except (KeyError, TypeError, ValueError, HeadlessDappError) as exc:
            msg = f"Box json for {box_id} failed to decode: {exc!r}"
            raise ExplorerResponseError(msg) from exc

    async def find_boxes(self, spec: BoxSpec) -> list[Box]:
        """Fetch the Explorer listing derived from *spec* and keep matching boxes.

        Raises:
            ExplorerEndpointError: If no listing can be derived from *spec*.
            ExplorerResponseError: If the listing fails to decode.
            ExplorerError: On HTTP errors.
        """
        path = spec.explorer_endpoint(
            "",
            address_limit=self._config.address_limit,
            token_limit=self._config.token_limit,
        )
        body = await self._get_json(path)
        return spec.process_explorer_response(body, network=self._network)

    async def find_specified(self, box_type: type[S], spec: BoxSpec | None = None) -> list[S]:
        """Like :meth:`find_boxes`, wrapping results as *box_type* instances."""
        boxes = await self.find_boxes(spec if spec is not None else box_type.box_spec())
        return [box_type(b) for b in boxes]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _get_json(self, path: str) -> Any:
        client = self._ensure_connected()
        try:
            resp = await client.get(path)
        except httpx.HTTPError as exc:
            msg = f"Explorer request failed: {exc}"
            raise ExplorerError(msg) from exc

        if resp.status_code != 200:
            msg = f"Explorer returned HTTP {resp.status_code} for {path}"
            raise ExplorerError(msg)
        try:
            return resp.json()
        except ValueError as exc:
            msg = f"Explorer returned invalid JSON for {path}"
            raise ExplorerResponseError(msg) from exc

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "ExplorerClient is not connected — call connect() first"
            raise RuntimeError(msg)
        return self._client
