"""Foundation types for the x402 facilitator."""

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Current protocol version
X402_VERSION: int = 1

# Only scheme currently defined by the protocol
SCHEME_EXACT = "exact"

# Type aliases
Network: TypeAlias = str
"""Registry-known network name (e.g., "base-sepolia", "solana", "hyperliquid")."""


class BaseX402Model(BaseModel):
    """Base class for all x402 models with camelCase JSON serialization.

    All Pydantic models in the package should inherit from this class.
    Subclasses only declare model_config to add options (pydantic merges it).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
