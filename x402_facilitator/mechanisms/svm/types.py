"""SVM-specific data types."""

from dataclasses import dataclass


@dataclass
class TransactionInfo:
    """Information extracted from a parsed Solana transaction."""

    fee_payer: str  # Base58 encoded fee payer address
    payer: str  # Base58 encoded token payer (authority) address
    source_ata: str  # Source associated token account
    destination_ata: str  # Destination associated token account
    mint: str  # Token mint address
    amount: int  # Transfer amount in smallest unit
    decimals: int  # Token decimals
    token_program: str  # Token program address (Token or Token-2022)
