"""Hyperliquid-specific payload and record types."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class HyperliquidTokenInfo:
    """Spot token metadata returned by the info endpoint."""

    decimals: int
    symbol: str | None = None
    name: str | None = None
    token_id: str | None = None


class ConfirmationResult(str, Enum):
    """Outcome of polling the explorer for a transaction."""

    CONFIRMED = "confirmed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
