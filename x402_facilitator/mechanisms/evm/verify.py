"""Signature verification for EOA and EIP-1271 payers."""

from eth_keys import keys

from .constants import EIP1271_MAGIC_VALUE, IS_VALID_SIGNATURE_ABI
from .signer import FacilitatorEvmSigner


def verify_eoa_signature(
    hash: bytes,
    signature: bytes,
    expected_address: str,
) -> bool:
    """Verify ECDSA signature from EOA.

    Uses secp256k1 public key recovery.
    Handles Ethereum v value adjustment (27/28 -> 0/1).

    Args:
        hash: 32-byte message hash.
        signature: 65-byte ECDSA signature (r, s, v).
        expected_address: Expected signer address.

    Returns:
        True if signature is valid.

    Raises:
        ValueError: If signature length or v value is invalid.
    """
    if len(signature) != 65:
        raise ValueError(f"Invalid EOA signature length: expected 65, got {len(signature)}")

    r = signature[:32]
    s = signature[32:64]
    v = signature[64]

    if v >= 27:
        v = v - 27

    if v not in (0, 1):
        raise ValueError(f"Invalid v value: {v}")

    try:
        sig = keys.Signature(signature_bytes=r + s + bytes([v]))
        public_key = sig.recover_public_key_from_msg_hash(hash)
        return public_key.to_checksum_address().lower() == expected_address.lower()
    except Exception:
        return False


def verify_eip1271_signature(
    signer: FacilitatorEvmSigner,
    wallet: str,
    hash: bytes,
    signature: bytes,
) -> bool:
    """Verify EIP-1271 smart contract wallet signature.

    Calls isValidSignature(bytes32, bytes) on the wallet contract.

    Args:
        signer: Facilitator signer for contract calls.
        wallet: Smart wallet address.
        hash: 32-byte message hash.
        signature: Signature bytes (format is wallet-specific).

    Returns:
        True if contract returns magic value 0x1626ba7e.
    """
    try:
        result = signer.read_contract(
            wallet,
            IS_VALID_SIGNATURE_ABI,
            "isValidSignature",
            hash,
            signature,
        )
    except Exception:
        return False

    if isinstance(result, bytes):
        return result[:4] == EIP1271_MAGIC_VALUE
    if isinstance(result, str):
        return bytes.fromhex(result.removeprefix("0x"))[:4] == EIP1271_MAGIC_VALUE
    return False


def verify_payer_signature(
    signer: FacilitatorEvmSigner,
    payer: str,
    hash: bytes,
    signature: bytes,
) -> bool:
    """Verify a payer's signature, as an EOA first and then via EIP-1271.

    A 65-byte signature that recovers to the payer is accepted without
    touching the chain. Otherwise the payer must be a deployed contract
    that accepts the signature.

    Args:
        signer: Facilitator signer for blockchain interactions.
        payer: Expected signer address.
        hash: 32-byte message hash.
        signature: Signature bytes.

    Returns:
        True if the signature is valid for the payer.
    """
    if len(signature) == 65:
        try:
            if verify_eoa_signature(hash, signature, payer):
                return True
        except ValueError:
            pass

    code = signer.get_code(payer)
    if len(code) == 0:
        return False
    return verify_eip1271_signature(signer, payer, hash, signature)
