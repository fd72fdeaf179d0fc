"""Hyperliquid client implementation for the Exact payment scheme."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from ....codec import encode_payment
from ....networks import Family
from ....schemas import (
    SCHEME_EXACT,
    X402_VERSION,
    ExactHlPayload,
    PaymentPayload,
    PaymentRequirements,
)
from ..cache import TokenInfoCache
from ..constants import SPOT_SEND_PRIMARY_TYPE, SPOT_SEND_TYPES
from ..info import HyperliquidInfoClient
from ..signer import ClientHyperliquidSigner
from ..types import HyperliquidTokenInfo
from ..utils import (
    extract_token_id,
    format_decimal_amount,
    get_chain_label,
    get_decimals_hint,
    get_signature_chain_id,
    now_ms,
)

logger = logging.getLogger(__name__)


class ExactHyperliquidClientScheme:
    """Hyperliquid client that pays with a signed spotSend action.

    Attributes:
        scheme: The scheme identifier ("exact").
        family: The network family (Family.HYPERLIQUID).
    """

    scheme = SCHEME_EXACT
    family = Family.HYPERLIQUID

    def __init__(
        self,
        signer: ClientHyperliquidSigner,
        http_client: httpx.Client | None = None,
        token_cache: TokenInfoCache | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Create ExactHyperliquidClientScheme.

        Args:
            signer: Signer for user-signed actions.
            http_client: Optional httpx.Client for token lookups.
            token_cache: Token info cache (a fresh cache when omitted).
            clock: Current time in milliseconds, used for time and nonce.
        """
        self._signer = signer
        self._http_client = http_client
        self._token_cache = token_cache if token_cache is not None else TokenInfoCache()
        self._clock = clock

    def create_payment_payload(self, requirements: PaymentRequirements) -> PaymentPayload:
        """Build and sign a spotSend paying the requirements.

        Args:
            requirements: Payment requirements to fulfill.

        Returns:
            Payment payload carrying the signed action.
        """
        network = requirements.network
        nonce = self._clock()
        decimals = self._resolve_decimals(requirements)

        action = {
            "type": "spotSend",
            "signatureChainId": get_signature_chain_id(network),
            "hyperliquidChain": get_chain_label(network),
            "destination": requirements.pay_to,
            "token": self._resolve_token_string(requirements),
            "amount": format_decimal_amount(requirements.max_amount_required, decimals),
            "time": nonce,
        }
        signature = self._signer.sign_user_signed_action(action, SPOT_SEND_TYPES, SPOT_SEND_PRIMARY_TYPE)

        return PaymentPayload(
            x402_version=X402_VERSION,
            scheme=requirements.scheme,
            network=network,
            payload=ExactHlPayload(
                action=action,
                signature=signature,
                nonce=nonce,
                user=self._signer.address,
            ),
        )

    def create_payment_header(self, requirements: PaymentRequirements) -> str:
        """Build, sign and encode a payment as an X-PAYMENT header value."""
        return encode_payment(self.create_payment_payload(requirements))

    def _resolve_decimals(self, requirements: PaymentRequirements) -> int | None:
        provided = get_decimals_hint(requirements.get_extra())
        if provided is not None:
            return provided

        token_id = extract_token_id(requirements.asset)
        if token_id is None:
            return None
        info = self._token_info(requirements.network, token_id)
        return info.decimals if info else None

    def _resolve_token_string(self, requirements: PaymentRequirements) -> str:
        asset = requirements.asset
        if ":" in asset:
            return asset

        symbol = requirements.get_extra().get("tokenSymbol")
        if isinstance(symbol, str) and symbol:
            return f"{symbol}:{asset}"

        info = self._token_info(requirements.network, asset)
        if info and info.symbol:
            return f"{info.symbol}:{asset}"
        return f"TOKEN:{asset}"

    def _token_info(self, network: str, token_id: str) -> HyperliquidTokenInfo | None:
        cached = self._token_cache.get(network, token_id)
        if cached is not None:
            return cached

        try:
            with HyperliquidInfoClient(network, http_client=self._http_client) as client:
                info = client.token_details(token_id)
        except Exception as e:
            logger.warning("Failed to fetch Hyperliquid token info for %s: %s", token_id, e)
            return None
        return self._token_cache.populate(network, token_id, info)
