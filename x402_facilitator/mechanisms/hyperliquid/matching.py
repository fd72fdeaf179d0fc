"""Locating a submitted payment in a user's Hyperliquid transaction history.

The exchange acknowledgment does not always carry a transaction hash, so
settlement reconciles the signed action against the payer's recent
transactions by comparing fields. This is a best-effort match, not a
cryptographic binding: two transfers with identical destination, token,
amount and timestamp are indistinguishable.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from ...schemas import ExactHlPayload, PaymentRequirements
from .constants import USER_TRANSACTION_FIELDS
from .utils import is_tx_hash


def _stringify(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return repr(value)
    return None


def _equals_ignore_case(a: Any, b: Any) -> bool:
    left, right = _stringify(a), _stringify(b)
    return left is not None and right is not None and left.lower() == right.lower()


def _values_match(candidate: Any, expected: Any) -> bool:
    # Fields absent from the signed action are not compared
    if expected is None:
        return True
    return _equals_ignore_case(candidate, expected)


def _to_number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def amounts_match(tx_amount: Any, payload_amount: Any, decimals: int | None = None) -> bool:
    """Compare two amounts numerically.

    With known decimals, an atomic amount on one side also matches the
    equivalent decimal amount on the other.
    """
    tx_value, payload_value = _to_decimal(tx_amount), _to_decimal(payload_amount)
    if tx_value is None or payload_value is None:
        return False
    if tx_value == payload_value:
        return True
    if decimals is None or decimals < 0:
        return False
    scale = Decimal(10) ** decimals
    return tx_value == payload_value * scale or tx_value * scale == payload_value


def get_tx_action(tx: Any) -> dict[str, Any] | None:
    """Get the action record of a history entry (the entry itself if it has none)."""
    if not isinstance(tx, dict):
        return None
    candidate = tx.get("action", tx)
    if candidate is None:
        candidate = tx
    return candidate if isinstance(candidate, dict) else None


def get_tx_timestamp(tx: dict[str, Any]) -> int | float:
    """Get the action time of a history entry, else its block time, else 0."""
    action = tx.get("action")
    if isinstance(action, dict):
        action_time = _to_number(action.get("time"))
        if action_time is not None:
            return action_time
    return _to_number(tx.get("time")) or 0


def transaction_matches_payment(
    tx: dict[str, Any],
    payload: ExactHlPayload,
    requirements: PaymentRequirements,
    decimals: int | None = None,
) -> bool:
    """Check whether a history entry looks like the submitted payment.

    Args:
        tx: One entry of the payer's userDetails history.
        payload: The submitted payload.
        requirements: The requirements the payload was settled against.
        decimals: Token decimals, when known.

    Returns:
        True if destination, token, amount and every chain/type/time field
        present on the signed action agree.
    """
    action = get_tx_action(tx)
    if action is None:
        return False
    payload_action = payload.action

    if not _equals_ignore_case(action.get("destination"), requirements.pay_to):
        return False
    if not _equals_ignore_case(action.get("token"), requirements.asset):
        return False
    if not amounts_match(action.get("amount"), payload_action.get("amount"), decimals):
        return False

    for key in ("signatureChainId", "hyperliquidChain", "type"):
        if not _values_match(action.get(key), payload_action.get(key)):
            return False

    tx_time = _to_number(action.get("time"))
    if tx_time is None:
        tx_time = _to_number(tx.get("time"))
    payload_time = _to_number(payload_action.get("time"))
    nonce = payload.nonce
    if payload_time is None and nonce is None:
        return True
    return tx_time is not None and tx_time in (payload_time, nonce)


def extract_user_transactions(details: Any) -> list[dict[str, Any]]:
    """Get the transaction list from a userDetails response.

    The first list found among the known collection fields wins.
    """
    if not isinstance(details, dict):
        return []
    for field_name in USER_TRANSACTION_FIELDS:
        txs = details.get(field_name)
        if isinstance(txs, list):
            return [tx for tx in txs if isinstance(tx, dict)]
    return []


def find_matching_hash(
    details: Any,
    payload: ExactHlPayload,
    requirements: PaymentRequirements,
    decimals: int | None = None,
) -> str | None:
    """Get the hash of the most recent history entry matching the payment.

    Returns:
        A 0x-prefixed 32-byte transaction hash, or None if nothing matches.
    """
    matches = [
        tx
        for tx in extract_user_transactions(details)
        if transaction_matches_payment(tx, payload, requirements, decimals)
    ]
    matches.sort(key=get_tx_timestamp, reverse=True)

    for tx in matches:
        if is_tx_hash(tx.get("hash")):
            return tx["hash"]
    return None
