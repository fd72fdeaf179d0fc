"""Read-through cache of Hyperliquid token metadata."""

import threading

from .types import HyperliquidTokenInfo


class TokenInfoCache:
    """Populate-once cache of token info keyed by network and token id.

    Entries are never invalidated; a miss only means the caller performs a
    fresh lookup. Safe to share between threads.
    """

    def __init__(self) -> None:
        self._entries: dict[str, HyperliquidTokenInfo] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(network: str, token_id: str) -> str:
        return f"{network}:{token_id.lower()}"

    def get(self, network: str, token_id: str) -> HyperliquidTokenInfo | None:
        """Get cached token info, or None on a miss."""
        with self._lock:
            return self._entries.get(self._key(network, token_id))

    def populate(self, network: str, token_id: str, info: HyperliquidTokenInfo) -> HyperliquidTokenInfo:
        """Store token info unless an entry already exists.

        Returns:
            The cached entry (the existing one if the key was already populated).
        """
        with self._lock:
            return self._entries.setdefault(self._key(network, token_id), info)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

