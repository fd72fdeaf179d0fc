"""SVM utility functions for transaction decoding and address derivation."""

import base64
import binascii

from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ADDRESS,
    TOKEN_2022_PROGRAM_ADDRESS,
    TOKEN_PROGRAM_ADDRESS,
    TRANSFER_CHECKED_DISCRIMINATOR,
)
from .types import TransactionInfo


def is_token_program(program: Pubkey) -> bool:
    """Check whether a program id is the Token or Token-2022 program."""
    return str(program) in (TOKEN_PROGRAM_ADDRESS, TOKEN_2022_PROGRAM_ADDRESS)


def decode_transaction(transaction: str) -> VersionedTransaction:
    """Decode a base64 encoded transaction.

    Args:
        transaction: Base64 encoded serialized VersionedTransaction.

    Returns:
        Decoded VersionedTransaction object.

    Raises:
        ValueError: If transaction cannot be decoded.
    """
    try:
        tx_bytes = base64.b64decode(transaction, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("transaction is not valid base64") from e
    try:
        return VersionedTransaction.from_bytes(tx_bytes)
    except Exception as e:
        raise ValueError(f"transaction could not be deserialized: {e}") from e


def encode_transaction(tx: VersionedTransaction) -> str:
    """Encode a VersionedTransaction as base64."""
    return base64.b64encode(bytes(tx)).decode("utf-8")


def extract_transaction_info(tx: VersionedTransaction) -> TransactionInfo | None:
    """Extract transfer information from a parsed Solana transaction.

    The first token program instruction carrying TransferChecked data wins.

    Args:
        tx: The decoded versioned transaction.

    Returns:
        TransactionInfo if transfer found, None otherwise.
    """
    message = tx.message
    static_accounts = list(message.account_keys)
    if not static_accounts:
        return None

    # Fee payer is always the first account
    fee_payer = str(static_accounts[0])

    for ix in message.instructions:
        program_address = static_accounts[ix.program_id_index]
        if not is_token_program(program_address):
            continue

        # TransferChecked account order: [source, mint, destination, owner, ...]
        account_indices = list(ix.accounts)
        if len(account_indices) < 4:
            continue

        # TransferChecked data: [12, u64 amount (little-endian), u8 decimals]
        ix_data = bytes(ix.data)
        if len(ix_data) < 10 or ix_data[0] != TRANSFER_CHECKED_DISCRIMINATOR:
            continue

        source_index, mint_index, dest_index, owner_index = account_indices[:4]
        return TransactionInfo(
            fee_payer=fee_payer,
            payer=str(static_accounts[owner_index]),
            source_ata=str(static_accounts[source_index]),
            destination_ata=str(static_accounts[dest_index]),
            mint=str(static_accounts[mint_index]),
            amount=int.from_bytes(ix_data[1:9], "little"),
            decimals=ix_data[9],
            token_program=str(program_address),
        )

    return None


def derive_ata(owner: str, mint: str, token_program: str | None = None) -> str:
    """Derive the Associated Token Account (ATA) address.

    Args:
        owner: Owner wallet address.
        mint: Token mint address.
        token_program: Optional token program address (defaults to Token Program).

    Returns:
        ATA address as base58 string.
    """
    program_pubkey = Pubkey.from_string(token_program or TOKEN_PROGRAM_ADDRESS)

    # PDA derivation: [owner, token_program, mint]
    seeds = [
        bytes(Pubkey.from_string(owner)),
        bytes(program_pubkey),
        bytes(Pubkey.from_string(mint)),
    ]
    ata, _ = Pubkey.find_program_address(seeds, Pubkey.from_string(ASSOCIATED_TOKEN_PROGRAM_ADDRESS))

    return str(ata)
