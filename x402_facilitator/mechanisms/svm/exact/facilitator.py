"""SVM facilitator implementation for the Exact payment scheme."""

import logging
import random
from typing import Any

from solders.pubkey import Pubkey

from ....networks import Family, is_family
from ....schemas import (
    ERR_AMOUNT_MISMATCH,
    ERR_ASSET_MISMATCH,
    ERR_EXCHANGE_ERROR,
    ERR_INVALID_NETWORK,
    ERR_INVALID_PAYLOAD,
    ERR_RECIPIENT_MISMATCH,
    ERR_TX_UNCONFIRMED,
    SCHEME_EXACT,
    ExactSvmPayload,
    Network,
    PaymentPayload,
    PaymentRequirements,
    SettleResponse,
    VerifyResponse,
)
from ..constants import (
    COMPUTE_BUDGET_PROGRAM_ADDRESS,
    ERR_COMPUTE_PRICE_TOO_HIGH,
    ERR_FEE_PAYER_NOT_MANAGED,
    ERR_FEE_PAYER_TRANSFERRING,
    ERR_INVALID_COMPUTE_LIMIT,
    ERR_INVALID_COMPUTE_PRICE,
    ERR_INVALID_INSTRUCTION_COUNT,
    ERR_NO_TRANSFER_INSTRUCTION,
    ERR_SIMULATION_FAILED,
    ERR_TRANSACTION_DECODE_FAILED,
    ERR_UNKNOWN_OPTIONAL_INSTRUCTION,
    LIGHTHOUSE_PROGRAM_ADDRESS,
    MAX_COMPUTE_UNIT_PRICE_MICROLAMPORTS,
    MEMO_PROGRAM_ADDRESS,
    SET_COMPUTE_UNIT_LIMIT_DISCRIMINATOR,
    SET_COMPUTE_UNIT_PRICE_DISCRIMINATOR,
    TRANSFER_CHECKED_DISCRIMINATOR,
)
from ..signer import FacilitatorSvmSigner
from ..utils import decode_transaction, derive_ata, is_token_program

logger = logging.getLogger(__name__)

MIN_INSTRUCTIONS = 3
MAX_INSTRUCTIONS = 6


class ExactSvmScheme:
    """SVM facilitator implementation for the Exact payment scheme.

    Verifies and settles SPL token TransferChecked payments on Solana
    networks. The facilitator co-signs as fee payer.

    Attributes:
        scheme: The scheme identifier ("exact").
        family: The network family (Family.SVM).
    """

    scheme = SCHEME_EXACT
    family = Family.SVM

    def __init__(self, signer: FacilitatorSvmSigner):
        """Create ExactSvmScheme facilitator.

        Args:
            signer: SVM signer for verification and settlement.
        """
        self._signer = signer

    def get_extra(self, network: Network) -> dict[str, Any] | None:
        """Get mechanism-specific extra data for the supported kinds endpoint.

        For SVM, this includes a randomly selected fee payer address.

        Args:
            network: Network identifier (unused for SVM).

        Returns:
            Extra data with feePayer address.
        """
        addresses = self._signer.get_addresses()
        if not addresses:
            return None
        return {"feePayer": random.choice(addresses)}

    def get_signers(self, network: Network) -> list[str]:
        """Get facilitator fee payer addresses."""
        return list(self._signer.get_addresses())

    def verify(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> VerifyResponse:
        """Verify SPL token payment payload.

        Validates:
        - Scheme and network match
        - Fee payer is managed by this facilitator
        - Transaction structure (3-6 instructions)
        - Compute budget instructions are valid and the price is capped
        - TransferChecked instruction:
          - Token program is known (Token or Token-2022)
          - Destination ATA matches requirements.pay_to
          - Mint matches requirements.asset
          - Amount >= requirements.max_amount_required
          - Authority is not the facilitator
        - Simulates transaction to catch runtime errors

        Args:
            payload: Payment payload from client.
            requirements: Payment requirements.

        Returns:
            VerifyResponse with is_valid and payer.
        """
        network = requirements.network
        if (
            payload.scheme != requirements.scheme
            or requirements.scheme != SCHEME_EXACT
            or payload.network != network
            or not is_family(network, Family.SVM)
        ):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_NETWORK)

        svm_payload = payload.payload
        if not isinstance(svm_payload, ExactSvmPayload):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_PAYLOAD)

        fee_payer = requirements.get_extra().get("feePayer")
        if not fee_payer or not isinstance(fee_payer, str):
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_INVALID_PAYLOAD,
                invalid_message="requirements.extra.feePayer is required",
            )

        signer_addresses = self._signer.get_addresses()
        if fee_payer not in signer_addresses:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_FEE_PAYER_NOT_MANAGED)

        # Parse and validate transaction structure
        try:
            tx = decode_transaction(svm_payload.transaction)
        except ValueError as e:
            return VerifyResponse(
                is_valid=False, invalid_reason=ERR_TRANSACTION_DECODE_FAILED, invalid_message=str(e)
            )

        message = tx.message
        instructions = message.instructions
        static_accounts = list(message.account_keys)

        # ComputeLimit + ComputePrice + TransferChecked + optional Lighthouse/Memo
        if not MIN_INSTRUCTIONS <= len(instructions) <= MAX_INSTRUCTIONS:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_INSTRUCTION_COUNT)

        compute_budget_program = Pubkey.from_string(COMPUTE_BUDGET_PROGRAM_ADDRESS)

        cu_limit_ix = instructions[0]
        cu_limit_data = bytes(cu_limit_ix.data)
        if (
            static_accounts[cu_limit_ix.program_id_index] != compute_budget_program
            or len(cu_limit_data) < 1
            or cu_limit_data[0] != SET_COMPUTE_UNIT_LIMIT_DISCRIMINATOR
        ):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_COMPUTE_LIMIT)

        cu_price_ix = instructions[1]
        cu_price_data = bytes(cu_price_ix.data)
        if (
            static_accounts[cu_price_ix.program_id_index] != compute_budget_program
            or len(cu_price_data) < 9
            or cu_price_data[0] != SET_COMPUTE_UNIT_PRICE_DISCRIMINATOR
        ):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_INVALID_COMPUTE_PRICE)

        # microLamports is a little-endian u64
        micro_lamports = int.from_bytes(cu_price_data[1:9], "little")
        if micro_lamports > MAX_COMPUTE_UNIT_PRICE_MICROLAMPORTS:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_COMPUTE_PRICE_TOO_HIGH)

        # TransferChecked: accounts [source, mint, destination, owner],
        # data [12, u64 amount, u8 decimals]
        transfer_ix = instructions[2]
        transfer_program = static_accounts[transfer_ix.program_id_index]
        transfer_accounts = list(transfer_ix.accounts)
        transfer_data = bytes(transfer_ix.data)
        if (
            not is_token_program(transfer_program)
            or len(transfer_accounts) < 4
            or len(transfer_data) < 10
            or transfer_data[0] != TRANSFER_CHECKED_DISCRIMINATOR
        ):
            return VerifyResponse(is_valid=False, invalid_reason=ERR_NO_TRANSFER_INSTRUCTION)

        payer = str(static_accounts[transfer_accounts[3]])

        allowed_optional = (
            Pubkey.from_string(LIGHTHOUSE_PROGRAM_ADDRESS),
            Pubkey.from_string(MEMO_PROGRAM_ADDRESS),
        )
        for position, optional_ix in enumerate(instructions[3:], start=4):
            if static_accounts[optional_ix.program_id_index] not in allowed_optional:
                return VerifyResponse(
                    is_valid=False,
                    invalid_reason=ERR_UNKNOWN_OPTIONAL_INSTRUCTION,
                    invalid_message=f"instruction {position} targets an unexpected program",
                    payer=payer,
                )

        # Validate recipient
        try:
            expected_dest_ata = derive_ata(requirements.pay_to, requirements.asset, str(transfer_program))
        except ValueError:
            expected_dest_ata = None
        if str(static_accounts[transfer_accounts[2]]) != expected_dest_ata:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_RECIPIENT_MISMATCH, payer=payer)

        # Validate asset
        if str(static_accounts[transfer_accounts[1]]) != requirements.asset:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_ASSET_MISMATCH, payer=payer)

        # Validate amount
        amount = int.from_bytes(transfer_data[1:9], "little")
        try:
            required = int(requirements.max_amount_required)
        except ValueError:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_AMOUNT_MISMATCH, payer=payer)
        if amount < required:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_AMOUNT_MISMATCH, payer=payer)

        # The facilitator's own accounts must never be the transfer authority
        if payer in signer_addresses:
            return VerifyResponse(is_valid=False, invalid_reason=ERR_FEE_PAYER_TRANSFERRING, payer=payer)

        try:
            fully_signed_tx = self._signer.sign_transaction(svm_payload.transaction, fee_payer, network)
            self._signer.simulate_transaction(fully_signed_tx, network)
        except Exception as e:
            return VerifyResponse(
                is_valid=False,
                invalid_reason=ERR_SIMULATION_FAILED,
                invalid_message=str(e),
                payer=payer,
            )

        return VerifyResponse(is_valid=True, payer=payer)

    def settle(
        self,
        payload: PaymentPayload,
        requirements: PaymentRequirements,
    ) -> SettleResponse:
        """Settle SPL token payment on-chain.

        - Re-verifies payment
        - Signs transaction with fee payer
        - Sends transaction to network
        - Waits for confirmation

        Args:
            payload: Verified payment payload.
            requirements: Payment requirements.

        Returns:
            SettleResponse with success, transaction, and payer.
        """
        network = requirements.network

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

        payer = verify_result.payer
        fee_payer = requirements.get_extra()["feePayer"]

        try:
            fully_signed_tx = self._signer.sign_transaction(payload.payload.transaction, fee_payer, network)
            signature = self._signer.send_transaction(fully_signed_tx, network)
        except Exception as e:
            logger.error("SVM transaction submission on %s failed: %s", network, e)
            return SettleResponse(
                success=False,
                error_reason=ERR_EXCHANGE_ERROR,
                error_message=str(e),
                network=network,
                payer=payer,
                transaction="",
            )

        try:
            self._signer.confirm_transaction(signature, network)
        except Exception as e:
            logger.error("SVM transaction %s on %s unconfirmed: %s", signature, network, e)
            return SettleResponse(
                success=False,
                error_reason=ERR_TX_UNCONFIRMED,
                error_message=str(e),
                transaction=signature,
                network=network,
                payer=payer,
            )

        return SettleResponse(
            success=True,
            transaction=signature,
            network=network,
            payer=payer,
        )
