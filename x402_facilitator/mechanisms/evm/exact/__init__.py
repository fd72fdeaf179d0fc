"""Exact EVM payment scheme for x402."""

from .facilitator import ExactEvmScheme, ExactEvmSchemeConfig

__all__ = [
    "ExactEvmScheme",
    "ExactEvmSchemeConfig",
]
