"""Fee payer protocol consumed by the SVM exact scheme."""

from typing import Protocol

from ...schemas import Network


class FacilitatorSvmSigner(Protocol):
    """Fee payer keys plus an RPC connection per Solana network.

    The scheme never builds or parses signatures itself: it hands the
    client's partially signed transaction to this object for co-signing,
    simulation and submission. Any exception raised here is reported as a
    failed verification or settlement, never re-raised.
    """

    def get_addresses(self) -> list[str]:
        """Base58 fee payer addresses the facilitator controls."""
        ...

    def sign_transaction(self, tx_base64: str, fee_payer: str, network: Network) -> str:
        """Add the fee payer signature to a client transaction.

        Args:
            tx_base64: Transaction as sent by the client.
            fee_payer: One of ``get_addresses()``, picked by the requirements.
            network: Solana network name.

        Returns:
            Base64 transaction carrying every required signature.
        """
        ...

    def simulate_transaction(self, tx_base64: str, network: Network) -> None:
        """Dry-run a fully signed transaction; raise if it would fail."""
        ...

    def send_transaction(self, tx_base64: str, network: Network) -> str:
        """Submit a fully signed transaction and return its base58 signature."""
        ...

    def confirm_transaction(self, signature: str, network: Network) -> None:
        """Block until the transaction is confirmed; raise on failure or timeout."""
        ...
