"""web3.py-backed facilitator signer."""

from typing import Any

from eth_account import Account
from web3 import Web3

from .constants import BALANCE_OF_ABI
from .types import TransactionReceipt

DEFAULT_RECEIPT_TIMEOUT_SECONDS = 120
GAS_LIMIT_MULTIPLIER = 1.2


class FacilitatorWeb3Signer:
    """FacilitatorEvmSigner that signs locally and talks to one RPC endpoint.

    Args:
        private_key: Hex private key of the account paying settlement gas.
        rpc_url: JSON-RPC endpoint of the network.
        receipt_timeout: Seconds to wait for a receipt.
    """

    def __init__(
        self,
        private_key: str,
        rpc_url: str,
        receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT_SECONDS,
    ):
        self._account = Account.from_key(private_key)
        self._w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._receipt_timeout = receipt_timeout

    @property
    def address(self) -> str:
        return self._account.address

    def get_addresses(self) -> list[str]:
        return [self._account.address]

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        return self._w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def read_contract(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        *args: Any,
    ) -> Any:
        contract = self._contract(address, abi)
        return contract.functions[function_name](*args).call()

    def write_contract(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function_name: str,
        *args: Any,
    ) -> str:
        contract = self._contract(address, abi)
        fn = contract.functions[function_name](*args)
        sender = self._account.address
        estimated_gas = fn.estimate_gas({"from": sender})

        tx = fn.build_transaction(
            {
                "from": sender,
                "nonce": self._w3.eth.get_transaction_count(sender, "pending"),
                "gas": int(estimated_gas * GAS_LIMIT_MULTIPLIER),
                "gasPrice": self._w3.eth.gas_price,
                "chainId": self._w3.eth.chain_id,
            }
        )

        signed = self._account.sign_transaction(tx)
        tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        return Web3.to_hex(tx_hash)

    def wait_for_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        receipt = self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self._receipt_timeout)
        return TransactionReceipt(
            status=receipt["status"],
            block_number=receipt.get("blockNumber"),
            tx_hash=tx_hash,
            raw=receipt,
        )

    def get_balance(self, address: str, token_address: str) -> int:
        return self.read_contract(token_address, BALANCE_OF_ABI, "balanceOf", Web3.to_checksum_address(address))

    def get_code(self, address: str) -> bytes:
        return bytes(self._w3.eth.get_code(Web3.to_checksum_address(address)))
