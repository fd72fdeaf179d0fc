"""Payment requirement and payload envelope types."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, model_validator

from .base import X402_VERSION, BaseX402Model, Network
from .payloads import ExactEvmPayload, ExactHlPayload, ExactSvmPayload, FamilyPayload


class PaymentRequirements(BaseX402Model):
    """What must be paid for a resource.

    Attributes:
        scheme: Payment scheme identifier (currently only "exact").
        network: Registry network name (e.g., "base-sepolia", "hyperliquid").
        max_amount_required: Amount in the asset's atomic unit, as a decimal string.
        resource: Resource URL.
        description: Optional resource description.
        mime_type: Optional MIME type.
        pay_to: Recipient address.
        max_timeout_seconds: Freshness budget for the payload.
        asset: Family-specific asset identifier (token address, mint, or
            Hyperliquid ``SYMBOL:0xHEX`` token id).
        output_schema: Optional output schema.
        extra: Family-specific hints (decimals, tokenSymbol, name/version, feePayer...).
    """

    model_config = ConfigDict(frozen=True)

    scheme: str
    network: Network
    max_amount_required: str
    resource: str
    description: str | None = None
    mime_type: str | None = None
    pay_to: str
    max_timeout_seconds: int
    asset: str
    output_schema: dict[str, Any] | None = None
    extra: dict[str, Any] | None = None

    def get_extra(self) -> dict[str, Any]:
        """Get extra metadata (empty dict when absent)."""
        return self.extra or {}


def _payload_model_for(network: Any) -> type[BaseX402Model]:
    from ..networks import Family, classify

    return {
        Family.EVM: ExactEvmPayload,
        Family.SVM: ExactSvmPayload,
        Family.HYPERLIQUID: ExactHlPayload,
    }[classify(network)]


class PaymentPayload(BaseX402Model):
    """Signed payment envelope.

    The inner ``payload`` is validated against the model of the family that
    ``network`` belongs to; a network outside the registry is rejected.

    Attributes:
        x402_version: Protocol version.
        scheme: Payment scheme identifier.
        network: Registry network name.
        payload: Family-specific payload.
    """

    model_config = ConfigDict(frozen=True)

    x402_version: int = X402_VERSION
    scheme: str
    network: Network
    payload: FamilyPayload

    @model_validator(mode="before")
    @classmethod
    def _bind_payload_to_family(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        network = data.get("network")
        model = _payload_model_for(network)
        inner = data.get("payload")
        if isinstance(inner, BaseX402Model) and not isinstance(inner, model):
            raise ValueError(
                f"{type(inner).__name__} cannot be carried on network {network!r}"
            )
        if not isinstance(inner, BaseX402Model):
            inner = model.model_validate(inner)
        return {**data, "payload": inner}

    def get_scheme(self) -> str:
        """Get the payment scheme."""
        return self.scheme

    def get_network(self) -> str:
        """Get the network."""
        return self.network
