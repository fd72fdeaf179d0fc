"""Hyperliquid utility functions for amount, token id, and freshness handling."""

import math
import re
import time
from typing import Any

from ...schemas import ExactHlPayload
from .constants import NETWORK_CONFIGS, TX_HASH_REGEX

_DECIMAL_AMOUNT = re.compile(r"^\d+(\.\d+)?$")
_TX_HASH = re.compile(TX_HASH_REGEX)


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def get_chain_label(network: str) -> str:
    """Get the hyperliquidChain label ("Mainnet"/"Testnet") for a network.

    Raises:
        ValueError: If the network is not a Hyperliquid network.
    """
    if network not in NETWORK_CONFIGS:
        raise ValueError(f"Unsupported Hyperliquid network: {network}")
    return NETWORK_CONFIGS[network]["chain_label"]


def get_signature_chain_id(network: str) -> str:
    """Get the hex EIP-712 signatureChainId used for a network's user-signed actions."""
    if network not in NETWORK_CONFIGS:
        raise ValueError(f"Unsupported Hyperliquid network: {network}")
    return NETWORK_CONFIGS[network]["signature_chain_id"]


def decimal_to_atomic(value: str, decimals: int) -> int:
    """Convert a decimal string to atomic units.

    The fractional part is truncated or zero-padded to exactly ``decimals``
    digits, so "1.0000019" with 6 decimals is 1000001.

    Args:
        value: Decimal string (e.g., "1.5").
        decimals: Token decimals.

    Returns:
        Amount in atomic units.

    Raises:
        ValueError: If value is not a plain non-negative decimal.
    """
    sanitized = value.strip()
    if not _DECIMAL_AMOUNT.match(sanitized):
        raise ValueError(f"Invalid decimal amount: {value!r}")

    whole, _, fraction = sanitized.partition(".")
    fraction = fraction[:decimals].ljust(decimals, "0")
    return int(whole) * 10**decimals + int(fraction or "0")


def amount_meets_requirement(payload_amount: str, required_atomic: str, decimals: int | None) -> bool:
    """Check a decimal payload amount against an atomic requirement.

    When decimals are unknown both values are compared as floats, which
    loses precision past 2**53.

    Args:
        payload_amount: Decimal amount from the signed action.
        required_atomic: maxAmountRequired (atomic units).
        decimals: Token decimals, or None if unknown.

    Returns:
        True if the payload amount covers the requirement.
    """
    if decimals is None or decimals < 0:
        try:
            paid, required = float(payload_amount), float(required_atomic)
        except (TypeError, ValueError):
            return False
        return math.isfinite(paid) and math.isfinite(required) and paid >= required

    try:
        return decimal_to_atomic(payload_amount, decimals) >= int(required_atomic)
    except ValueError:
        return False


def format_decimal_amount(amount: str, decimals: int | None) -> str:
    """Convert an atomic amount string to a trimmed decimal string.

    Args:
        amount: Atomic amount (e.g., "1234").
        decimals: Token decimals; non-positive or None returns amount unchanged.

    Returns:
        Decimal string (e.g., "1.234"), without trailing zeros.
    """
    if decimals is None or decimals <= 0:
        return amount

    whole, remainder = divmod(int(amount), 10**decimals)
    if remainder == 0:
        return str(whole)
    return f"{whole}.{str(remainder).rjust(decimals, '0').rstrip('0')}"


def within_ttl(action_time: Any, max_timeout_seconds: int, now: int | None = None) -> bool:
    """Check that an action timestamp is still inside its freshness window.

    Args:
        action_time: The action's ``time`` field (milliseconds).
        max_timeout_seconds: Freshness budget.
        now: Current time in milliseconds (defaults to the wall clock).

    Returns:
        True if ``action_time + max_timeout_seconds * 1000 >= now``.
        A missing or non-numeric time is never fresh.
    """
    if isinstance(action_time, bool) or not isinstance(action_time, (int, float)):
        return False
    if not math.isfinite(action_time):
        return False
    if now is None:
        now = now_ms()
    return now <= action_time + max_timeout_seconds * 1000


def extract_payer(payload: ExactHlPayload) -> str | None:
    """Get the payer: explicit ``user`` field first, else ``action.user``."""
    if isinstance(payload.user, str):
        return payload.user
    user = payload.action.get("user")
    return user if isinstance(user, str) else None


def extract_token_id(asset: str) -> str | None:
    """Get a bare hex token id suitable for a tokenDetails lookup.

    Only an asset without a ``SYMBOL:`` prefix yields an id; compound
    token strings already carry the symbol and are not looked up.
    """
    if not asset or ":" in asset:
        return None
    return asset if asset.lower().startswith("0x") else None


def is_tx_hash(value: Any) -> bool:
    """Check if value is a 0x-prefixed 32-byte hex transaction hash."""
    return isinstance(value, str) and _TX_HASH.match(value) is not None


def get_decimals_hint(extra: dict[str, Any]) -> int | None:
    """Get ``extra.decimals`` when it is an integer."""
    decimals = extra.get("decimals")
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        return None
    return decimals
