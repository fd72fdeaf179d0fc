"""EVM facilitator implementation for the Exact payment scheme (EIP-3009)."""

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ....networks import Family, is_family
from ....schemas import (
    ERR_AMOUNT_MISMATCH,
    ERR_ASSET_MISMATCH,
    ERR_EXCHANGE_ERROR,
    ERR_INVALID_NETWORK,
    ERR_INVALID_PAYLOAD,
    ERR_PAYMENT_EXPIRED,
    ERR_RECIPIENT_MISMATCH,
    ERR_TX_UNCONFIRMED,
    SCHEME_EXACT,
    ExactEvmPayload,
    Network,
    PaymentPayload,
    PaymentRequirements,
    SettleResponse,
    VerifyResponse,
)
from ..constants import (
    DEFAULT_VALIDITY_BUFFER,
    ERR_INSUFFICIENT_FUNDS,
    ERR_INVALID_SIGNATURE,
    ERR_PAYMENT_NOT_YET_VALID,
    ERR_TRANSACTION_FAILED,
    TRANSFER_WITH_AUTHORIZATION_BYTES_ABI,
    TRANSFER_WITH_AUTHORIZATION_VRS_ABI,
    TX_STATUS_SUCCESS,
)
from ..eip712 import hash_eip3009_authorization
from ..signer import FacilitatorEvmSigner
from ..utils import (
    get_asset_info,
    get_evm_chain_id,
    hex_to_bytes,
    is_bytes32,
    is_hex_string,
    is_valid_address,
    normalize_address,
)
from ..verify import verify_payer_signature

logger = logging.getLogger(__name__)


@dataclass
class ExactEvmSchemeConfig:
    """Configuration for ExactEvmScheme facilitator."""

    validity_buffer: int = DEFAULT_VALIDITY_BUFFER
    """Seconds validBefore must lie beyond now at verification time."""

    check_balance: bool = True
    """Reject payers whose token balance cannot cover the payment."""


class ExactEvmScheme:
    """EVM facilitator implementation for the Exact payment scheme.

    Verifies and settles EIP-3009 transferWithAuthorization payments.

    Attributes:
        scheme: The scheme identifier ("exact").
        family: The network family (Family.EVM).
    """

    scheme = SCHEME_EXACT
    family = Family.EVM

    def __init__(
        self,
        signer: FacilitatorEvmSigner | Mapping[Network, FacilitatorEvmSigner],
        config: ExactEvmSchemeConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        """Create ExactEvmScheme facilitator.

        Args:
            signer: EVM signer used on every network, or a mapping of
                network name to the signer connected to that network.
            config: Optional configuration.
            clock: Current Unix time in seconds.
        """
        self._signer = signer
        self._config = config or ExactEvmSchemeConfig()
        self._clock = clock

    def signer_for(self, network: Network) -> FacilitatorEvmSigner | None:
        """Get the signer connected to a network, if any."""
        if isinstance(self._signer, Mapping):
            return self._signer.get(network)
        return self._signer

    def get_extra(self, network: Network) -> dict[str, Any] | None:
        """Get mechanism-specific extra data. EVM: None."""
        return None

    def get_signers(self, network: Network) -> list[str]:
        """Get facilitator wallet addresses.

        Args:
            network: Network identifier.

        Returns:
            List of facilitator addresses.
        """
        signer = self.signer_for(network)
        return signer.get_addresses() if signer else []

    def verify(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> VerifyResponse:
        """Verify EIP-3009 payment payload.

        Validates:
        - Scheme and network match
        - Signature and nonce shape
        - Recipient matches
        - Asset is known or carries its EIP-712 domain
        - Amount is sufficient
        - Authorization window (validBefore/validAfter)
        - Signature is valid (EOA or EIP-1271)
        - Payer balance is sufficient (optional)

        Args:
            payload: Payment payload.
            requirements: Payment requirements.

        Returns:
            VerifyResponse with is_valid and payer.
        """
        network = requirements.network
        signer = self.signer_for(network)
        if (
            payload.scheme != requirements.scheme
            or requirements.scheme != SCHEME_EXACT
            or payload.network != network
            or not is_family(network, Family.EVM)
            or signer is None
        ):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_NETWORK)

        evm_payload = payload.payload
        if not isinstance(evm_payload, ExactEvmPayload):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_PAYLOAD)

        authorization = evm_payload.authorization
        payer = authorization.from_address

        if not is_hex_string(evm_payload.signature):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_SIGNATURE, payer=payer)

        if not is_bytes32(authorization.nonce) or not is_valid_address(payer):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_PAYLOAD, payer=payer)

        # Validate recipient
        if authorization.to.lower() != requirements.pay_to.lower():
            return VerifyResponse(is_valid=False, invalid_reason=ERR_RECIPIENT_MISMATCH, payer=payer)

        # Validate asset and resolve its EIP-712 domain
        domain = self._resolve_domain(requirements)
        if domain is None:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_ASSET_MISMATCH, payer=payer)
        token_name, token_version = domain

        # Validate amount
        try:
            required = int(requirements.max_amount_required)
        except ValueError:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_AMOUNT_MISMATCH, payer=payer)
        if authorization.value < required:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_AMOUNT_MISMATCH, payer=payer)

        # Check validBefore is far enough in the future, validAfter not in the future
        now = int(self._clock())
        if authorization.valid_before < now + self._config.validity_buffer:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_PAYMENT_EXPIRED, payer=payer)
        if authorization.valid_after > now:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_PAYMENT_NOT_YET_VALID, payer=payer)

        # Verify signature
        try:
            hash_bytes = hash_eip3009_authorization(
                authorization,
                get_evm_chain_id(network),
                requirements.asset,
                token_name,
                token_version,
            )
            valid = verify_payer_signature(signer, payer, hash_bytes, hex_to_bytes(evm_payload.signature))
        except Exception as e:
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_INVALID_SIGNATURE,
                invalid_message=str(e),
                payer=payer,
            )
        if not valid:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_SIGNATURE, payer=payer)

        # Check balance
        if self._config.check_balance:
            try:
                balance = signer.get_balance(payer, requirements.asset)
            except Exception as e:
                logger.warning("Balance check for %s on %s failed: %s", payer, network, e)
            else:
                if balance < required:
                    return VerifyResponse(
                        is_valid=False, invalid_reason=ERR_INSUFFICIENT_FUNDS, payer=payer
                    )

        return VerifyResponse(is_valid=True, payer=payer)

    def settle(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettleResponse:
        """Settle EIP-3009 payment on-chain.

        Args:
            payload: Verified payment payload.
            requirements: Payment requirements.

        Returns:
            SettleResponse with success, transaction, and payer.
        """
        network = requirements.network

        # First verify
        verify_result = self.verify(payload, requirements)
        if not verify_result.is_valid:
            return SettleResponse(
                success=False,
                error_reason=verify_result.invalid_reason,
                error_message=verify_result.invalid_message,
                network=network,
                payer=verify_result.payer,
                transaction="",
            )

        evm_payload = payload.payload
        authorization = evm_payload.authorization
        payer = authorization.from_address
        signer = self.signer_for(network)
        signature = hex_to_bytes(evm_payload.signature)
        common_args = (
            normalize_address(payer),
            normalize_address(authorization.to),
            authorization.value,
            authorization.valid_after,
            authorization.valid_before,
            hex_to_bytes(authorization.nonce),
        )

        try:
            if len(signature) == 65:
                r, s, v = signature[:32], signature[32:64], signature[64]
                tx_hash = signer.write_contract(
                    requirements.asset,
                    TRANSFER_WITH_AUTHORIZATION_VRS_ABI,
                    "transferWithAuthorization",
                    *common_args,
                    v,
                    r,
                    s,
                )
            else:
                tx_hash = signer.write_contract(
                    requirements.asset,
                    TRANSFER_WITH_AUTHORIZATION_BYTES_ABI,
                    "transferWithAuthorization",
                    *common_args,
                    signature,
                )
        except Exception as e:
            logger.error("transferWithAuthorization submission on %s failed: %s", network, e)
            return SettleResponse(
                success=False,
                error_reason=ERR_EXCHANGE_ERROR,
                error_message=str(e),
                network=network,
                payer=payer,
                transaction="",
            )

        try:
            receipt = signer.wait_for_transaction_receipt(tx_hash)
        except Exception as e:
            logger.error("Receipt for %s on %s unavailable: %s", tx_hash, network, e)
            return SettleResponse(
                success=False,
                error_reason=ERR_TX_UNCONFIRMED,
                error_message=str(e),
                transaction=tx_hash,
                network=network,
                payer=payer,
            )

        if receipt.status != TX_STATUS_SUCCESS:
            return SettleResponse(
                success=False,
                error_reason=ERR_TRANSACTION_FAILED,
                transaction=tx_hash,
                network=network,
                payer=payer,
            )

        return SettleResponse(
            success=True,
            transaction=tx_hash,
            network=network,
            payer=payer,
        )

    def _resolve_domain(self, requirements: PaymentRequirements) -> tuple[str, str] | None:
        """Get the token's EIP-712 (name, version), or None for an unknown asset."""
        if not is_valid_address(requirements.asset):
            return None

        extra = requirements.get_extra()
        asset_info = get_asset_info(requirements.network, requirements.asset)
        name = extra.get("name") or (asset_info["name"] if asset_info else None)
        version = extra.get("version") or (asset_info["version"] if asset_info else None)
        if not isinstance(name, str) or not isinstance(version, str):
            return None
        return name, version
