"""EVM-specific record types."""

from dataclasses import dataclass
from typing import Any, TypedDict


class TypedDataDomain(TypedDict):
    """EIP-712 domain separator fields."""

    name: str
    version: str
    chainId: int
    verifyingContract: str


class TypedDataField(TypedDict):
    """A single EIP-712 struct member."""

    name: str
    type: str


@dataclass
class TransactionReceipt:
    """Mined transaction summary returned by a facilitator signer."""

    status: int
    block_number: int | None = None
    tx_hash: str | None = None
    raw: Any = None
