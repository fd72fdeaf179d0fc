"""Scheme protocol definitions for the x402 facilitator.

This module defines the Protocol interfaces that payment schemes must implement
to be registered with x402Facilitator, or to build payloads on the client side.

Note: All protocols are sync-first.
"""

from typing import Any, Protocol

from .networks import Family
from .schemas import (
    Network,
    PaymentPayload,
    PaymentRequirements,
    SettleResponse,
    VerifyResponse,
)

# ============================================================================
# Client-Side Protocols
# ============================================================================


class SchemeNetworkClient(Protocol):
    """Client-side payment mechanism.

    Implementations create signed payment payloads for one network family.

    Example:
        ```python
        class ExactHyperliquidClientScheme:
            scheme = "exact"
            family = Family.HYPERLIQUID

            def create_payment_payload(
                self, requirements: PaymentRequirements
            ) -> PaymentPayload:
                # Build and sign a spotSend action
                ...
        ```
    """

    @property
    def scheme(self) -> str:
        """Payment scheme identifier (e.g., 'exact')."""
        ...

    @property
    def family(self) -> Family:
        """Network family this client builds payloads for."""
        ...

    def create_payment_payload(
        self,
        requirements: PaymentRequirements,
    ) -> PaymentPayload:
        """Create a signed payment payload.

        Args:
            requirements: The payment requirements to fulfill.

        Returns:
            Full PaymentPayload envelope for the requirements' network.
        """
        ...


# ============================================================================
# Facilitator-Side Protocols
# ============================================================================


class SchemeNetworkFacilitator(Protocol):
    """Facilitator-side payment mechanism for one network family.

    Implementations verify and settle payments for specific schemes.

    Note: Returns VerifyResponse/SettleResponse objects with
    is_valid=False/success=False on failure, not exceptions.

    Example:
        ```python
        class ExactEvmScheme:
            scheme = "exact"
            family = Family.EVM

            def verify(
                self, payload: PaymentPayload, requirements: PaymentRequirements
            ) -> VerifyResponse:
                # Verify EIP-3009 signature
                ...

            def settle(
                self, payload: PaymentPayload, requirements: PaymentRequirements
            ) -> SettleResponse:
                # Execute transferWithAuthorization
                ...
        ```
    """

    @property
    def scheme(self) -> str:
        """Payment scheme identifier."""
        ...

    @property
    def family(self) -> Family:
        """Network family this mechanism handles."""
        ...

    def get_extra(self, network: Network) -> dict[str, Any] | None:
        """Get extra data for SupportedKind.

        Args:
            network: Target network.

        Returns:
            Extra data (e.g., {"feePayer": addr} for SVM), or None.
        """
        ...

    def get_signers(self, network: Network) -> list[str]:
        """Get signer addresses for this network.

        Args:
            network: Target network.

        Returns:
            List of signer addresses.
        """
        ...

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
            VerifyResponse with is_valid=True on success,
            or is_valid=False with invalid_reason on failure.
        """
        ...

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
            SettleResponse with success=True and transaction on success,
            or success=False with error_reason on failure.
        """
        ...
