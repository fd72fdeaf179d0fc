"""HTTP client for the Hyperliquid exchange, info and explorer endpoints."""

from __future__ import annotations

from typing import Any

import httpx

from .constants import EXCHANGE_STATUS_OK, NETWORK_CONFIGS
from .types import HyperliquidTokenInfo

DEFAULT_TIMEOUT_SECONDS = 10.0


class HyperliquidApiError(Exception):
    """Raised when a Hyperliquid endpoint fails or returns an error body."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (Status code: {self.status_code})"


class HyperliquidInfoClient:
    """Sync client for one Hyperliquid network.

    Args:
        network: Hyperliquid network name ("hyperliquid" or "hyperliquid-testnet").
        http_client: Optional httpx.Client to use. When omitted the client
            creates and owns one.
        timeout: Request timeout for an owned client.
        exchange_url: Override of the network's exchange endpoint.
        info_url: Override of the network's info endpoint.
        explorer_url: Override of the network's explorer endpoint.
    """

    def __init__(
        self,
        network: str,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        exchange_url: str | None = None,
        info_url: str | None = None,
        explorer_url: str | None = None,
    ):
        if network not in NETWORK_CONFIGS:
            raise ValueError(f"Unsupported Hyperliquid network: {network}")

        endpoints = NETWORK_CONFIGS[network]["endpoints"]
        self.network = network
        self.exchange_url = exchange_url or endpoints["exchange"]
        self.info_url = info_url or endpoints["info"]
        self.explorer_url = explorer_url or endpoints["explorer"]

        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        """Close HTTP client if we own it."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> HyperliquidInfoClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Info / Explorer
    # =========================================================================

    def token_details(self, token_id: str) -> HyperliquidTokenInfo:
        """Look up spot token metadata.

        Args:
            token_id: Bare hex token id (e.g., "0xeb62eee3685fc4c43992febcd9e75443").

        Returns:
            Token decimals and name.

        Raises:
            HyperliquidApiError: If the lookup fails or lacks weiDecimals.
        """
        body = self._post(self.info_url, {"type": "tokenDetails", "tokenId": token_id})
        decimals = body.get("weiDecimals") if isinstance(body, dict) else None
        if not isinstance(decimals, int) or isinstance(decimals, bool):
            raise HyperliquidApiError(f"tokenDetails for {token_id} has no weiDecimals", response=body)

        name = body.get("name")
        return HyperliquidTokenInfo(decimals=decimals, symbol=name, name=name, token_id=token_id)

    def user_details(self, user: str) -> dict[str, Any]:
        """Fetch a user's recent transactions from the explorer.

        Raises:
            HyperliquidApiError: If the request fails.
        """
        body = self._post(self.explorer_url, {"type": "userDetails", "user": user})
        if not isinstance(body, dict):
            raise HyperliquidApiError("userDetails returned a non-object body", response=body)
        return body

    def tx_details(self, tx_hash: str) -> dict[str, Any]:
        """Fetch a transaction by hash from the explorer.

        Returns:
            The ``tx`` record of the response.

        Raises:
            HyperliquidApiError: If the request fails or the transaction is
                unknown to the explorer.
        """
        body = self._post(self.explorer_url, {"type": "txDetails", "hash": tx_hash})
        tx = body.get("tx") if isinstance(body, dict) else None
        if not isinstance(tx, dict):
            raise HyperliquidApiError(f"txDetails for {tx_hash} returned no transaction", response=body)
        return tx

    # =========================================================================
    # Exchange
    # =========================================================================

    def submit_exchange(self, action: dict[str, Any], signature: Any, nonce: int) -> dict[str, Any]:
        """Submit a signed action to the exchange endpoint.

        Returns:
            The acknowledgment body, whose status is "ok".

        Raises:
            HyperliquidApiError: On a non-2xx status or a body without an "ok" status.
        """
        body = self._post(
            self.exchange_url,
            {"action": action, "signature": signature, "nonce": nonce},
        )
        if not isinstance(body, dict) or body.get("status") != EXCHANGE_STATUS_OK:
            raise HyperliquidApiError("hyperliquid_exchange_failed", response=body)
        return body

    # =========================================================================
    # Internal HTTP Methods
    # =========================================================================

    def _post(self, url: str, payload: dict[str, Any]) -> Any:
        try:
            response = self._http_client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise HyperliquidApiError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise HyperliquidApiError(
                f"Request to {url} failed: {response.text}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise HyperliquidApiError(
                f"Invalid JSON from {url}", status_code=response.status_code
            ) from e

        if isinstance(body, dict) and body.get("type") == "error":
            raise HyperliquidApiError(
                str(body.get("message", "unknown error")),
                status_code=response.status_code,
                response=body,
            )
        return body
