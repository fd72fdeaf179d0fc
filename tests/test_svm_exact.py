"""Tests for the SVM exact scheme (SPL TransferChecked)."""

import pytest
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from x402_facilitator.mechanisms.svm import (
    COMPUTE_BUDGET_PROGRAM_ADDRESS,
    ERR_COMPUTE_PRICE_TOO_HIGH,
    ERR_FEE_PAYER_NOT_MANAGED,
    ERR_FEE_PAYER_TRANSFERRING,
    ERR_INVALID_INSTRUCTION_COUNT,
    ERR_SIMULATION_FAILED,
    ERR_TRANSACTION_DECODE_FAILED,
    ERR_UNKNOWN_OPTIONAL_INSTRUCTION,
    MEMO_PROGRAM_ADDRESS,
    TOKEN_PROGRAM_ADDRESS,
    USDC_DEVNET_ADDRESS,
    decode_transaction,
    derive_ata,
    encode_transaction,
    extract_transaction_info,
)
from x402_facilitator.mechanisms.svm.exact import ExactSvmScheme
from x402_facilitator.schemas import ExactSvmPayload, PaymentPayload, PaymentRequirements

NETWORK = "solana-devnet"
SIGNATURE = "5" * 88

fee_payer = Keypair()
owner = Keypair()
merchant = Keypair().pubkey()
compute_budget = Pubkey.from_string(COMPUTE_BUDGET_PROGRAM_ADDRESS)
token_program = Pubkey.from_string(TOKEN_PROGRAM_ADDRESS)
usdc = Pubkey.from_string(USDC_DEVNET_ADDRESS)


class FakeSvmSigner:
    """Fee payer signer that records calls instead of talking to an RPC node."""

    def __init__(self, addresses=None):
        self.addresses = addresses if addresses is not None else [str(fee_payer.pubkey())]
        self.simulate_error = None
        self.send_error = None
        self.confirm_error = None
        self.sent = []

    def get_addresses(self):
        return self.addresses

    def sign_transaction(self, tx_base64, fee_payer, network):
        return tx_base64

    def simulate_transaction(self, tx_base64, network):
        if self.simulate_error:
            raise self.simulate_error

    def send_transaction(self, tx_base64, network):
        if self.send_error:
            raise self.send_error
        self.sent.append(tx_base64)
        return SIGNATURE

    def confirm_transaction(self, signature, network):
        if self.confirm_error:
            raise self.confirm_error


def transfer_checked(amount=1_000_000, mint=usdc, destination=None, authority=owner):
    source = Pubkey.from_string(derive_ata(str(authority.pubkey()), str(mint)))
    destination = destination or Pubkey.from_string(derive_ata(str(merchant), str(mint)))
    return Instruction(
        token_program,
        bytes([12]) + amount.to_bytes(8, "little") + bytes([6]),
        [
            AccountMeta(source, is_signer=False, is_writable=True),
            AccountMeta(mint, is_signer=False, is_writable=False),
            AccountMeta(destination, is_signer=False, is_writable=True),
            AccountMeta(authority.pubkey(), is_signer=True, is_writable=False),
        ],
    )


def build_transaction(price=1, transfer=None, extra_instructions=(), authority=owner):
    instructions = [
        Instruction(compute_budget, bytes([2]) + (200_000).to_bytes(4, "little"), []),
        Instruction(compute_budget, bytes([3]) + price.to_bytes(8, "little"), []),
        transfer or transfer_checked(authority=authority),
        *extra_instructions,
    ]
    message = MessageV0.try_compile(fee_payer.pubkey(), instructions, [], Hash.default())
    signers = [fee_payer] if authority is fee_payer else [fee_payer, authority]
    return encode_transaction(VersionedTransaction(message, signers))


def make_payload(transaction=None):
    return PaymentPayload(
        scheme="exact",
        network=NETWORK,
        payload=ExactSvmPayload(transaction=transaction or build_transaction()),
    )


def make_requirements(**overrides):
    fields = {
        "scheme": "exact",
        "network": NETWORK,
        "max_amount_required": "1000000",
        "resource": "https://api.example.com/premium",
        "pay_to": str(merchant),
        "max_timeout_seconds": 60,
        "asset": USDC_DEVNET_ADDRESS,
        "extra": {"feePayer": str(fee_payer.pubkey())},
    }
    fields.update(overrides)
    return PaymentRequirements(**fields)


@pytest.fixture
def signer():
    return FakeSvmSigner()


@pytest.fixture
def scheme(signer):
    return ExactSvmScheme(signer)


class TestVerify:
    def test_valid_transfer(self, scheme):
        result = scheme.verify(make_payload(), make_requirements())

        assert result.is_valid
        assert result.payer == str(owner.pubkey())

    def test_memo_instruction_allowed(self, scheme):
        memo = Instruction(Pubkey.from_string(MEMO_PROGRAM_ADDRESS), b"order-42", [])

        result = scheme.verify(make_payload(build_transaction(extra_instructions=[memo])), make_requirements())

        assert result.is_valid

    def test_missing_fee_payer(self, scheme):
        result = scheme.verify(make_payload(), make_requirements(extra=None))

        assert result.invalid_reason == "invalid_payload"

    def test_fee_payer_not_managed(self, scheme):
        requirements = make_requirements(extra={"feePayer": str(Keypair().pubkey())})

        result = scheme.verify(make_payload(), requirements)

        assert result.invalid_reason == ERR_FEE_PAYER_NOT_MANAGED

    def test_garbage_transaction(self, scheme):
        result = scheme.verify(make_payload("bm90IGEgdHJhbnNhY3Rpb24="), make_requirements())

        assert result.invalid_reason == ERR_TRANSACTION_DECODE_FAILED

    def test_too_many_instructions(self, scheme):
        memos = [Instruction(Pubkey.from_string(MEMO_PROGRAM_ADDRESS), b"x", [])] * 4

        result = scheme.verify(make_payload(build_transaction(extra_instructions=memos)), make_requirements())

        assert result.invalid_reason == ERR_INVALID_INSTRUCTION_COUNT

    def test_compute_price_capped(self, scheme):
        result = scheme.verify(make_payload(build_transaction(price=5_000_001)), make_requirements())

        assert result.invalid_reason == ERR_COMPUTE_PRICE_TOO_HIGH

    def test_unknown_optional_instruction(self, scheme):
        system = Instruction(Pubkey.from_string("11111111111111111111111111111111"), b"", [])

        result = scheme.verify(make_payload(build_transaction(extra_instructions=[system])), make_requirements())

        assert result.invalid_reason == ERR_UNKNOWN_OPTIONAL_INSTRUCTION

    def test_wrong_recipient(self, scheme):
        result = scheme.verify(make_payload(), make_requirements(pay_to=str(Keypair().pubkey())))

        assert result.invalid_reason == "recipient_mismatch"

    def test_wrong_mint(self, scheme):
        other_mint = Keypair().pubkey()
        destination = Pubkey.from_string(derive_ata(str(merchant), USDC_DEVNET_ADDRESS))
        transfer = transfer_checked(mint=other_mint, destination=destination)

        result = scheme.verify(make_payload(build_transaction(transfer=transfer)), make_requirements())

        assert result.invalid_reason == "asset_mismatch"

    def test_amount_short(self, scheme):
        transfer = transfer_checked(amount=999_999)

        result = scheme.verify(make_payload(build_transaction(transfer=transfer)), make_requirements())

        assert result.invalid_reason == "amount_mismatch"

    def test_fee_payer_cannot_be_authority(self, scheme):
        transaction = build_transaction(authority=fee_payer)

        result = scheme.verify(make_payload(transaction), make_requirements())

        assert result.invalid_reason == ERR_FEE_PAYER_TRANSFERRING

    def test_simulation_failure(self, scheme, signer):
        signer.simulate_error = RuntimeError("insufficient funds for rent")

        result = scheme.verify(make_payload(), make_requirements())

        assert result.invalid_reason == ERR_SIMULATION_FAILED
        assert result.invalid_message == "insufficient funds for rent"

    def test_evm_network_rejected(self, scheme):
        result = scheme.verify(make_payload(), make_requirements(network="base"))

        assert result.invalid_reason == "invalid_network"


class TestSettle:
    def test_success(self, scheme, signer):
        payload = make_payload()

        result = scheme.settle(payload, make_requirements())

        assert result.success
        assert result.transaction == SIGNATURE
        assert result.payer == str(owner.pubkey())
        assert signer.sent == [payload.payload.transaction]

    def test_invalid_payment_not_sent(self, scheme, signer):
        transfer = transfer_checked(amount=1)

        result = scheme.settle(make_payload(build_transaction(transfer=transfer)), make_requirements())

        assert result.error_reason == "amount_mismatch"
        assert result.transaction == ""
        assert signer.sent == []

    def test_send_failure(self, scheme, signer):
        signer.send_error = RuntimeError("blockhash not found")

        result = scheme.settle(make_payload(), make_requirements())

        assert result.error_reason == "exchange_error"
        assert result.transaction == ""

    def test_confirmation_failure(self, scheme, signer):
        signer.confirm_error = TimeoutError("not confirmed")

        result = scheme.settle(make_payload(), make_requirements())

        assert result.error_reason == "tx_unconfirmed"
        assert result.transaction == SIGNATURE


def test_get_extra_picks_managed_fee_payer(scheme):
    assert scheme.get_extra(NETWORK) == {"feePayer": str(fee_payer.pubkey())}
    assert ExactSvmScheme(FakeSvmSigner(addresses=[])).get_extra(NETWORK) is None


def test_extract_transaction_info():
    info = extract_transaction_info(decode_transaction(build_transaction()))

    assert info.fee_payer == str(fee_payer.pubkey())
    assert info.payer == str(owner.pubkey())
    assert info.mint == USDC_DEVNET_ADDRESS
    assert info.amount == 1_000_000
    assert info.decimals == 6
    assert info.destination_ata == derive_ata(str(merchant), USDC_DEVNET_ADDRESS)
