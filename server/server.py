import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from x402_facilitator import (
    PaymentError,
    PaymentRequirements,
    x402Facilitator,
)
from x402_facilitator.codec import decode_payment, parse_payment_payload
from x402_facilitator.mechanisms.evm.exact import ExactEvmScheme
from x402_facilitator.mechanisms.evm.signers import FacilitatorWeb3Signer
from x402_facilitator.mechanisms.hyperliquid.cache import TokenInfoCache
from x402_facilitator.mechanisms.hyperliquid.exact import (
    ExactHyperliquidScheme,
    ExactHyperliquidSchemeConfig,
)
from x402_facilitator.networks import Family, family_config, networks_for
from x402_facilitator.schemas import ERR_INVALID_PAYLOAD, InvalidPayloadError

# Load environment
load_dotenv()

logger = logging.getLogger(__name__)


def _private_key(name):
    key = os.getenv(name)
    if not key:
        return None
    # Add 0x prefix if not present
    if not key.startswith("0x"):
        key = "0x" + key
    return key


def build_facilitator_from_env():
    """Build a facilitator from environment variables.

    Hyperliquid is always served. EVM networks are served when
    EVM_PRIVATE_KEY is set; EVM_RPC_URL_<NETWORK> overrides the RPC of one
    network (dashes become underscores, e.g. EVM_RPC_URL_BASE_SEPOLIA).
    """
    facilitator = x402Facilitator()

    hl_config = ExactHyperliquidSchemeConfig(
        exchange_url=os.getenv("HYPERLIQUID_EXCHANGE_URL"),
        info_url=os.getenv("HYPERLIQUID_INFO_URL"),
        explorer_url=os.getenv("HYPERLIQUID_EXPLORER_URL"),
    )
    token_cache = TokenInfoCache()
    facilitator.register(
        Family.HYPERLIQUID, ExactHyperliquidScheme(config=hl_config, token_cache=token_cache)
    )

    evm_key = _private_key("EVM_PRIVATE_KEY")
    if evm_key:
        signers = {}
        for network in networks_for(Family.EVM):
            env_name = "EVM_RPC_URL_" + network.upper().replace("-", "_")
            rpc_url = os.getenv(env_name) or family_config(network).base_endpoints["rpc"]
            signers[network] = FacilitatorWeb3Signer(evm_key, rpc_url)
        facilitator.register(Family.EVM, ExactEvmScheme(signers))
    else:
        logger.info("EVM_PRIVATE_KEY not set, EVM networks disabled")

    return facilitator


def _parse_body(data):
    """Extract (payload, requirements) from a verify/settle request body.

    Raises:
        PaymentError: If the body is malformed.
    """
    if not isinstance(data, dict):
        raise InvalidPayloadError("request body must be a JSON object")

    try:
        requirements = PaymentRequirements.model_validate(data.get("paymentRequirements"))
    except ValidationError as e:
        raise InvalidPayloadError(f"paymentRequirements: {e}") from e

    if data.get("paymentHeader") is not None:
        header = data["paymentHeader"]
        if not isinstance(header, str):
            raise InvalidPayloadError("paymentHeader must be a string")
        payload = decode_payment(header)
    else:
        envelope = data.get("paymentPayload")
        if not isinstance(envelope, dict):
            raise InvalidPayloadError("paymentPayload or paymentHeader required")
        payload = parse_payment_payload(envelope)

    return payload, requirements


def create_app(facilitator=None):
    """Create the facilitator HTTP app.

    Args:
        facilitator: Facilitator to serve (built from the environment if None).
    """
    if facilitator is None:
        facilitator = build_facilitator_from_env()

    app = Flask(__name__)
    CORS(app)

    # Health check
    @app.route("/")
    def home():
        return jsonify({"status": "ok", "families": [f.value for f in facilitator.registered_families()]})

    # Supported payment kinds
    @app.route("/supported", methods=["GET"])
    def supported():
        return jsonify(facilitator.get_supported().model_dump(by_alias=True, exclude_none=True))

    @app.route("/verify", methods=["POST"])
    def verify():
        try:
            payload, requirements = _parse_body(request.get_json(silent=True))
        except PaymentError as e:
            return jsonify({"error": getattr(e, "reason", ERR_INVALID_PAYLOAD), "message": str(e)}), 400

        result = facilitator.verify(payload, requirements)
        return jsonify(result.model_dump(by_alias=True, exclude_none=True))

    @app.route("/settle", methods=["POST"])
    def settle():
        try:
            payload, requirements = _parse_body(request.get_json(silent=True))
        except PaymentError as e:
            return jsonify({"error": getattr(e, "reason", ERR_INVALID_PAYLOAD), "message": str(e)}), 400

        result = facilitator.settle(payload, requirements)
        logger.info(
            "Settlement on %s: success=%s transaction=%s",
            result.network,
            result.success,
            result.transaction,
        )
        return jsonify(result.model_dump(by_alias=True, exclude_none=True))

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
