"""Hyperliquid signer protocol and eth_account-backed implementation."""

from typing import Any, Protocol

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import to_hex

from .constants import (
    SIGN_TRANSACTION_DOMAIN_NAME,
    SIGN_TRANSACTION_DOMAIN_VERSION,
    SIGN_TRANSACTION_VERIFYING_CONTRACT,
)

EIP712_DOMAIN_TYPE = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]


class ClientHyperliquidSigner(Protocol):
    """Client-side signer for Hyperliquid user-signed actions.

    Implement this protocol to integrate with your wallet provider.
    """

    @property
    def address(self) -> str:
        """The signer's address (0x...)."""
        ...

    def sign_user_signed_action(
        self,
        action: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
    ) -> dict[str, Any]:
        """Sign a user-signed action.

        Args:
            action: Action carrying ``signatureChainId`` and the typed fields.
            types: Type definitions for the primary type.
            primary_type: Primary type name (e.g., "HyperliquidTransaction:SpotSend").

        Returns:
            Split signature ``{"r", "s", "v"}``.
        """
        ...


def user_signed_typed_data(
    action: dict[str, Any],
    types: dict[str, list[dict[str, str]]],
    primary_type: str,
) -> dict[str, Any]:
    """Build the EIP-712 message for a user-signed action.

    The domain chain id comes from the action's hex ``signatureChainId``.
    """
    return {
        "domain": {
            "name": SIGN_TRANSACTION_DOMAIN_NAME,
            "version": SIGN_TRANSACTION_DOMAIN_VERSION,
            "chainId": int(action["signatureChainId"], 16),
            "verifyingContract": SIGN_TRANSACTION_VERIFYING_CONTRACT,
        },
        "types": {"EIP712Domain": EIP712_DOMAIN_TYPE, **types},
        "primaryType": primary_type,
        "message": action,
    }


class EthAccountHyperliquidSigner:
    """ClientHyperliquidSigner backed by an eth_account local key.

    Args:
        private_key: Hex private key.
    """

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_user_signed_action(
        self,
        action: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
    ) -> dict[str, Any]:
        encoded = encode_typed_data(full_message=user_signed_typed_data(action, types, primary_type))
        signed = self._account.sign_message(encoded)
        return {"r": to_hex(signed.r), "s": to_hex(signed.s), "v": signed.v}


def recover_user_signed_action(
    action: dict[str, Any],
    types: dict[str, list[dict[str, str]]],
    primary_type: str,
    signature: dict[str, Any],
) -> str:
    """Recover the address that signed a user-signed action."""
    encoded = encode_typed_data(full_message=user_signed_typed_data(action, types, primary_type))
    vrs = (signature["v"], int(signature["r"], 16), int(signature["s"], 16))
    return Account.recover_message(encoded, vrs=vrs)
