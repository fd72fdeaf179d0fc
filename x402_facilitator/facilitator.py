"""x402Facilitator - Payment verification and settlement router.

Holds one scheme mechanism per network family and dispatches verify/settle
calls to it, resolving the family from the requirements' network through
the network registry.
"""

from __future__ import annotations

import logging

from .interfaces import SchemeNetworkFacilitator
from .networks import Family, classify, networks_for
from .schemas import (
    ERR_EXCHANGE_ERROR,
    ERR_INVALID_NETWORK,
    ERR_INVALID_PAYLOAD,
    X402_VERSION,
    PaymentPayload,
    PaymentRequirements,
    SettleRequest,
    SettleResponse,
    SupportedKind,
    SupportedResponse,
    UnsupportedNetworkError,
    VerifyRequest,
    VerifyResponse,
)

logger = logging.getLogger(__name__)


class x402Facilitator:
    """Payment verification and settlement component.

    Example:
        ```python
        from x402_facilitator import x402Facilitator
        from x402_facilitator.networks import Family
        from x402_facilitator.mechanisms.hyperliquid.exact import ExactHyperliquidScheme

        facilitator = x402Facilitator()
        facilitator.register(Family.HYPERLIQUID, ExactHyperliquidScheme())

        # Verify payment
        result = facilitator.verify(payload, requirements)

        # Get supported kinds for /supported endpoint
        supported = facilitator.get_supported()
        ```
    """

    def __init__(self) -> None:
        """Initialize x402Facilitator."""
        self._facilitators: dict[Family, SchemeNetworkFacilitator] = {}

    # ========================================================================
    # Registration
    # ========================================================================

    def register(
        self,
        family: Family,
        facilitator: SchemeNetworkFacilitator,
    ) -> x402Facilitator:
        """Register the facilitator mechanism for a network family.

        Args:
            family: Network family the mechanism handles.
            facilitator: Scheme facilitator implementation.

        Returns:
            Self for chaining.

        Raises:
            ValueError: If a mechanism is already registered for the family.
        """
        family = Family(family)
        if family in self._facilitators:
            raise ValueError(f"A facilitator is already registered for family {family.value!r}")
        self._facilitators[family] = facilitator
        return self

    def registered_families(self) -> list[Family]:
        """Get the families that have a registered mechanism."""
        return list(self._facilitators)

    # ========================================================================
    # Supported
    # ========================================================================

    def get_supported(self) -> SupportedResponse:
        """Get supported payment kinds.

        Returns:
            SupportedResponse with one kind per network of every registered
            family, and signer addresses grouped by family.
        """
        kinds: list[SupportedKind] = []
        signers: dict[str, list[str]] = {}

        for family, facilitator in self._facilitators.items():
            family_signers = signers.setdefault(family.value, [])
            for network in networks_for(family):
                kinds.append(
                    SupportedKind(
                        x402_version=X402_VERSION,
                        scheme=facilitator.scheme,
                        network=network,
                        extra=facilitator.get_extra(network),
                    )
                )
                for signer in facilitator.get_signers(network):
                    if signer not in family_signers:
                        family_signers.append(signer)

        return SupportedResponse(kinds=kinds, signers=signers)

    # ========================================================================
    # Verify / Settle
    # ========================================================================

    def verify(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> VerifyResponse:
        """Verify a payment.

        Args:
            payload: Payment payload to verify.
            requirements: Requirements to verify against.

        Returns:
            VerifyResponse with is_valid=True or is_valid=False. Never raises.
        """
        facilitator = self._find_facilitator(requirements)
        if facilitator is None:
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_INVALID_NETWORK,
                invalid_message=f"No facilitator for network {requirements.network!r}",
            )

        try:
            return facilitator.verify(payload, requirements)
        except Exception as e:
            logger.error("Unexpected verify failure on %s: %s", requirements.network, e)
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_INVALID_PAYLOAD,
                invalid_message=str(e),
            )

    def settle(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettleResponse:
        """Settle a payment.

        Args:
            payload: Payment payload to settle.
            requirements: Requirements for settlement.

        Returns:
            SettleResponse with success=True or success=False. Never raises.
        """
        facilitator = self._find_facilitator(requirements)
        if facilitator is None:
            return SettleResponse(
                success=False,
                error_reason=ERR_INVALID_NETWORK,
                error_message=f"No facilitator for network {requirements.network!r}",
                transaction="",
                network=requirements.network,
            )

        try:
            return facilitator.settle(payload, requirements)
        except Exception as e:
            logger.error("Unexpected settle failure on %s: %s", requirements.network, e)
            return SettleResponse(
                success=False,
                error_reason=ERR_EXCHANGE_ERROR,
                error_message=str(e),
                transaction=requirements.pay_to,
                network=requirements.network,
            )

    def verify_request(self, request: VerifyRequest) -> VerifyResponse:
        """Verify a payment from a /verify request body."""
        return self.verify(request.payment_payload, request.payment_requirements)

    def settle_request(self, request: SettleRequest) -> SettleResponse:
        """Settle a payment from a /settle request body."""
        return self.settle(request.payment_payload, request.payment_requirements)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _find_facilitator(
        self,
        requirements: PaymentRequirements,
    ) -> SchemeNetworkFacilitator | None:
        """Find the mechanism for the requirements' network family."""
        try:
            family = classify(requirements.network)
        except UnsupportedNetworkError:
            return None
        return self._facilitators.get(family)
