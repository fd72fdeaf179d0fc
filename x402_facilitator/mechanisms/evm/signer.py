"""Chain access protocol consumed by the EVM exact scheme."""

from typing import Any, Protocol

from .types import TransactionReceipt


class FacilitatorEvmSigner(Protocol):
    """Settlement key plus an RPC connection to one EVM network.

    ``FacilitatorWeb3Signer`` is the bundled implementation; a remote signing
    service only has to provide these six calls.
    """

    def get_addresses(self) -> list[str]:
        """Checksummed addresses that pay settlement gas."""
        ...

    def read_contract(self, address: str, abi: list[dict[str, Any]], function_name: str, *args: Any) -> Any:
        """Call a view function and return its decoded result."""
        ...

    def write_contract(self, address: str, abi: list[dict[str, Any]], function_name: str, *args: Any) -> str:
        """Sign and broadcast a contract call.

        Args:
            address: Contract address.
            abi: ABI containing ``function_name``.
            function_name: Function to invoke.
            *args: Positional arguments in ABI order.

        Returns:
            0x-prefixed transaction hash.
        """
        ...

    def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Block until ``tx_hash`` is mined; raise on timeout."""
        ...

    def get_balance(self, address: str, token_address: str) -> int:
        """ERC-20 balance of ``address`` in atomic units."""
        ...

    def get_code(self, address: str) -> bytes:
        """Deployed bytecode at ``address`` (empty for an EOA)."""
        ...
