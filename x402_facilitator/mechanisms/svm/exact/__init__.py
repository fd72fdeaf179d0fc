"""Exact SVM payment scheme for x402."""

from .facilitator import ExactSvmScheme

__all__ = ["ExactSvmScheme"]
