"""
Credential helpers for the Proposal Gateway.
"""

from .token_issuer import Credential, TokenIssuer, decode_claims, has_plan_access

__all__ = [
    "Credential",
    "TokenIssuer",
    "decode_claims",
    "has_plan_access",
]
