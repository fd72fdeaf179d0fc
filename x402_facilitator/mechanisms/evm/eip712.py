"""EIP-712 typed data for EIP-3009 TransferWithAuthorization."""

from typing import Any

from eth_account.messages import encode_typed_data
from eth_utils import keccak

from ...schemas import ExactEvmAuthorization
from .types import TypedDataDomain, TypedDataField

AUTHORIZATION_PRIMARY_TYPE = "TransferWithAuthorization"

AUTHORIZATION_TYPES: dict[str, list[TypedDataField]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    AUTHORIZATION_PRIMARY_TYPE: [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "validAfter", "type": "uint256"},
        {"name": "validBefore", "type": "uint256"},
        {"name": "nonce", "type": "bytes32"},
    ],
}


def build_typed_data_for_signing(
    authorization: ExactEvmAuthorization,
    chain_id: int,
    verifying_contract: str,
    token_name: str,
    token_version: str,
) -> dict[str, Any]:
    """Build the full EIP-712 message for an authorization.

    Args:
        authorization: EIP-3009 authorization.
        chain_id: Chain id of the token contract.
        verifying_contract: Token contract address.
        token_name: EIP-712 domain name of the token (e.g., "USD Coin").
        token_version: EIP-712 domain version of the token (e.g., "2").

    Returns:
        Dict usable as ``encode_typed_data(full_message=...)``.
    """
    domain: TypedDataDomain = {
        "name": token_name,
        "version": token_version,
        "chainId": chain_id,
        "verifyingContract": verifying_contract,
    }
    return {
        "types": AUTHORIZATION_TYPES,
        "primaryType": AUTHORIZATION_PRIMARY_TYPE,
        "domain": domain,
        "message": {
            "from": authorization.from_address,
            "to": authorization.to,
            "value": authorization.value,
            "validAfter": authorization.valid_after,
            "validBefore": authorization.valid_before,
            "nonce": bytes.fromhex(authorization.nonce.removeprefix("0x")),
        },
    }


def hash_eip3009_authorization(
    authorization: ExactEvmAuthorization,
    chain_id: int,
    verifying_contract: str,
    token_name: str,
    token_version: str,
) -> bytes:
    """Compute the 32-byte EIP-712 digest a payer signs for an authorization."""
    signable = encode_typed_data(
        full_message=build_typed_data_for_signing(
            authorization, chain_id, verifying_contract, token_name, token_version
        )
    )
    return keccak(b"\x19" + signable.version + signable.header + signable.body)
