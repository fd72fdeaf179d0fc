"""Exact Hyperliquid payment scheme for x402."""

from .client import ExactHyperliquidClientScheme
from .facilitator import (
    ExactHyperliquidScheme,
    ExactHyperliquidSchemeConfig,
    extract_exchange_tx_hash,
)

__all__ = [
    "ExactHyperliquidScheme",
    "ExactHyperliquidSchemeConfig",
    "ExactHyperliquidClientScheme",
    "extract_exchange_tx_hash",
]
