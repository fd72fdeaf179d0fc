"""Hyperliquid facilitator implementation for the Exact payment scheme."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from ....networks import Family, is_family
from ....schemas import (
    ERR_AMOUNT_MISMATCH,
    ERR_ASSET_MISMATCH,
    ERR_EXCHANGE_ERROR,
    ERR_INVALID_NETWORK,
    ERR_INVALID_PAYLOAD,
    ERR_PAYMENT_EXPIRED,
    ERR_RECIPIENT_MISMATCH,
    ERR_TX_NOT_FOUND,
    ERR_TX_UNCONFIRMED,
    SCHEME_EXACT,
    ExactHlPayload,
    Network,
    PaymentPayload,
    PaymentRequirements,
    SettleResponse,
    VerifyResponse,
)
from ..cache import TokenInfoCache
from ..constants import CONFIRMATION_DELAY_SECONDS, CONFIRMATION_RETRIES
from ..info import DEFAULT_TIMEOUT_SECONDS, HyperliquidInfoClient
from ..matching import find_matching_hash
from ..types import ConfirmationResult
from ..utils import (
    amount_meets_requirement,
    extract_payer,
    extract_token_id,
    get_chain_label,
    get_decimals_hint,
    get_signature_chain_id,
    is_tx_hash,
    now_ms,
    within_ttl,
)

logger = logging.getLogger(__name__)

MISSING_TRANSFER_FIELDS = "action requires destination, token and amount strings"


@dataclass
class ExactHyperliquidSchemeConfig:
    """Configuration for ExactHyperliquidScheme facilitator.

    Endpoint overrides apply to every Hyperliquid network the scheme serves.
    """

    confirmation_retries: int = CONFIRMATION_RETRIES
    """Number of txDetails lookups before a settlement is reported unconfirmed."""

    confirmation_delay_seconds: float = CONFIRMATION_DELAY_SECONDS
    """Fixed delay between txDetails lookups."""

    timeout: float = DEFAULT_TIMEOUT_SECONDS
    """HTTP timeout for an internally created client."""

    exchange_url: str | None = None
    info_url: str | None = None
    explorer_url: str | None = None


class ExactHyperliquidScheme:
    """Hyperliquid facilitator for spotSend payments (Exact scheme).

    Verification is local apart from an optional token decimals lookup.
    Settlement submits the signed action to the exchange, locates the
    resulting transaction in the payer's history, and polls the explorer
    until it is visible.

    Attributes:
        scheme: The scheme identifier ("exact").
        family: The network family (Family.HYPERLIQUID).
    """

    scheme = SCHEME_EXACT
    family = Family.HYPERLIQUID

    def __init__(
        self,
        config: ExactHyperliquidSchemeConfig | None = None,
        http_client: httpx.Client | None = None,
        token_cache: TokenInfoCache | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], int] = now_ms,
    ):
        """Create ExactHyperliquidScheme facilitator.

        Args:
            config: Optional configuration.
            http_client: Optional shared httpx.Client for all endpoints.
            token_cache: Token info cache (a fresh cache when omitted).
            sleep: Delay function used between confirmation attempts.
            clock: Current time in milliseconds.
        """
        self._config = config or ExactHyperliquidSchemeConfig()
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=self._config.timeout, follow_redirects=True
        )
        self._token_cache = token_cache if token_cache is not None else TokenInfoCache()
        self._sleep = sleep
        self._clock = clock
        self._clients: dict[Network, HyperliquidInfoClient] = {}

    def close(self) -> None:
        """Close HTTP client if we own it."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> ExactHyperliquidScheme:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_extra(self, network: Network) -> dict[str, Any] | None:
        """Get mechanism-specific extra data: signing chain and chain label.

        Args:
            network: Network identifier.

        Returns:
            signatureChainId and hyperliquidChain for the network.
        """
        return {
            "signatureChainId": get_signature_chain_id(network),
            "hyperliquidChain": get_chain_label(network),
        }

    def get_signers(self, network: Network) -> list[str]:
        """Get facilitator addresses. Hyperliquid: none, the payer signs and pays."""
        return []

    def client_for(self, network: Network) -> HyperliquidInfoClient:
        """Get (and memoize) the API client for a network."""
        client = self._clients.get(network)
        if client is None:
            client = HyperliquidInfoClient(
                network,
                http_client=self._http_client,
                exchange_url=self._config.exchange_url,
                info_url=self._config.info_url,
                explorer_url=self._config.explorer_url,
            )
            self._clients[network] = client
        return client

    # =========================================================================
    # Verify
    # =========================================================================

    def verify(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> VerifyResponse:
        """Verify a signed spotSend against payment requirements.

        Checks run in a fixed order and the first failure is reported:
        network, shape, recipient, asset, amount, freshness.

        Args:
            payload: Payment payload.
            requirements: Payment requirements.

        Returns:
            VerifyResponse with is_valid and payer.
        """
        if not self._network_matches(payload, requirements):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_NETWORK)

        hl_payload = payload.payload
        if not isinstance(hl_payload, ExactHlPayload):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_PAYLOAD)

        action = hl_payload.action
        if not _has_transfer_fields(action):
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_INVALID_PAYLOAD,
                invalid_message=MISSING_TRANSFER_FIELDS,
            )
        destination, token, amount = action["destination"], action["token"], action["amount"]

        payer = extract_payer(hl_payload)

        if destination.lower() != requirements.pay_to.lower():
            return VerifyResponse(is_valid=False, invalid_reason=ERR_RECIPIENT_MISMATCH, payer=payer)

        # Token ids are compound SYMBOL:0xHEX strings; compare exactly
        if token != requirements.asset:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_ASSET_MISMATCH, payer=payer)

        decimals = self.resolve_decimals(requirements)
        if not amount_meets_requirement(amount, requirements.max_amount_required, decimals):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_AMOUNT_MISMATCH, payer=payer)

        if not within_ttl(action.get("time"), requirements.max_timeout_seconds, self._clock()):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_PAYMENT_EXPIRED, payer=payer)

        return VerifyResponse(is_valid=True, payer=payer)

    def resolve_decimals(self, requirements: PaymentRequirements) -> int | None:
        """Resolve token decimals for an amount comparison.

        ``extra.decimals`` wins; otherwise a bare hex asset is looked up
        through the token cache. Lookup failures leave decimals unknown.
        """
        provided = get_decimals_hint(requirements.get_extra())
        if provided is not None:
            return provided

        token_id = extract_token_id(requirements.asset)
        if token_id is None:
            return None

        network = requirements.network
        cached = self._token_cache.get(network, token_id)
        if cached is not None:
            return cached.decimals

        try:
            info = self.client_for(network).token_details(token_id)
        except Exception as e:
            logger.warning("Failed to fetch Hyperliquid token decimals for %s: %s", token_id, e)
            return None

        return self._token_cache.populate(network, token_id, info).decimals

    # =========================================================================
    # Settle
    # =========================================================================

    def settle(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettleResponse:
        """Submit a signed spotSend and confirm it landed.

        Only the network and action shape checks of verify are repeated;
        callers verify first. Any unexpected failure is reported as
        exchange_error.

        Args:
            payload: Payment payload.
            requirements: Payment requirements.

        Returns:
            SettleResponse with success, transaction, and payer.
        """
        network = requirements.network

        if not self._network_matches(payload, requirements):
            return self._failure(ERR_INVALID_NETWORK, requirements)

        hl_payload = payload.payload
        if not isinstance(hl_payload, ExactHlPayload):
            return self._failure(ERR_INVALID_PAYLOAD, requirements)

        payer = extract_payer(hl_payload)

        # Reject before the exchange write, which cannot be undone
        if not _has_transfer_fields(hl_payload.action):
            return self._failure(
                ERR_INVALID_PAYLOAD, requirements, payer=payer, message=MISSING_TRANSFER_FIELDS
            )

        try:
            client = self.client_for(network)
            ack = client.submit_exchange(hl_payload.action, self._wire_signature(hl_payload), hl_payload.nonce)
            exchange_hash = extract_exchange_tx_hash(ack)

            matched_hash = None
            if payer:
                matched_hash = self._find_matching_hash(client, payer, hl_payload, requirements)
                if matched_hash is None:
                    logger.warning("No matching Hyperliquid transaction found for payer %s", payer)
                    return self._failure(
                        ERR_TX_NOT_FOUND, requirements, transaction=exchange_hash, payer=payer
                    )

            tx_hash = matched_hash or exchange_hash
            if not is_tx_hash(tx_hash):
                logger.warning("Hyperliquid settlement has no transaction hash after lookup")
                return self._failure(
                    ERR_TX_NOT_FOUND, requirements, transaction=exchange_hash, payer=payer
                )

            result = self._confirm_transaction(client, tx_hash)
            if result is ConfirmationResult.NOT_FOUND:
                return self._failure(ERR_TX_NOT_FOUND, requirements, transaction=tx_hash, payer=payer)
            if result is ConfirmationResult.TIMEOUT:
                return self._failure(ERR_TX_UNCONFIRMED, requirements, transaction=tx_hash, payer=payer)

            return SettleResponse(
                success=True,
                transaction=tx_hash,
                network=network,
                payer=payer,
            )

        except Exception as e:
            logger.error("Hyperliquid settle error on %s: %s", network, e)
            return self._failure(ERR_EXCHANGE_ERROR, requirements, payer=payer, message=str(e))

    def _find_matching_hash(
        self,
        client: HyperliquidInfoClient,
        payer: str,
        payload: ExactHlPayload,
        requirements: PaymentRequirements,
    ) -> str | None:
        try:
            details = client.user_details(payer)
        except Exception as e:
            logger.error("Failed to fetch Hyperliquid userDetails for %s: %s", payer, e)
            return None
        return find_matching_hash(details, payload, requirements, self.resolve_decimals(requirements))

    def _confirm_transaction(self, client: HyperliquidInfoClient, tx_hash: str) -> ConfirmationResult:
        retries = self._config.confirmation_retries
        for attempt in range(retries):
            try:
                client.tx_details(tx_hash)
                return ConfirmationResult.CONFIRMED
            except Exception as e:
                if "not found" in str(e).lower():
                    return ConfirmationResult.NOT_FOUND
                logger.debug("txDetails attempt %d/%d for %s failed: %s", attempt + 1, retries, tx_hash, e)
            if attempt < retries - 1:
                self._sleep(self._config.confirmation_delay_seconds)
        return ConfirmationResult.TIMEOUT

    # =========================================================================
    # Helpers
    # =========================================================================

    def _network_matches(self, payload: PaymentPayload, requirements: PaymentRequirements) -> bool:
        return (
            payload.scheme == requirements.scheme
            and requirements.scheme == SCHEME_EXACT
            and payload.network == requirements.network
            and is_family(requirements.network, Family.HYPERLIQUID)
        )

    @staticmethod
    def _wire_signature(payload: ExactHlPayload) -> Any:
        if isinstance(payload.signature, str):
            return payload.signature
        return payload.signature.model_dump()

    @staticmethod
    def _failure(
        reason: str,
        requirements: PaymentRequirements,
        transaction: str | None = None,
        payer: str | None = None,
        message: str | None = None,
    ) -> SettleResponse:
        return SettleResponse(
            success=False,
            error_reason=reason,
            error_message=message,
            transaction=transaction or requirements.pay_to,
            network=requirements.network,
            payer=payer,
        )


def _has_transfer_fields(action: dict[str, Any]) -> bool:
    return all(isinstance(action.get(k), str) and action.get(k) for k in ("destination", "token", "amount"))


def extract_exchange_tx_hash(ack: dict[str, Any]) -> str | None:
    """Get the transaction hash an exchange acknowledgment carries, if any."""
    response = ack.get("response")
    if isinstance(response, dict) and isinstance(response.get("txHash"), str):
        return response["txHash"]
    for key in ("txHash", "hash"):
        if isinstance(ack.get(key), str):
            return ack[key]
    return None
