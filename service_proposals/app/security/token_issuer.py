"""
Bearer credential issuance for outbound engine calls.

Tokens are JWT-shaped but NOT signed: the header segment is fixed, the
payload is base64-encoded JSON claims and the signature segment is a
constant placeholder. They exist only to propagate subject and plan to
the engine and must never be trusted for integrity.
"""

import base64
import binascii
import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from shared.errors import AuthenticationError, ValidationError
from shared.logging import get_logger


# base64 of {"alg":"HS256","typ":"JWT"}
TOKEN_HEADER = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
PLACEHOLDER_SIGNATURE = "fake_signature_for_demo_purposes"


class Credential(BaseModel):
    """Immutable bearer credential scoped to a single orchestration call."""

    model_config = ConfigDict(frozen=True)

    subject: str
    plan: str
    token: str

    def __str__(self) -> str:
        return self.token

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


class TokenIssuer:
    """Builds structurally valid, unsigned bearer tokens."""

    def __init__(self):
        self.logger = get_logger("proposals.token_issuer")

    def issue(self, subject: str, plan: str) -> Credential:
        """Issue a credential for ``subject`` on ``plan`` (plan is upper-cased)."""
        if not subject or not subject.strip():
            raise ValidationError("Credential subject must not be empty")

        normalized_plan = plan.upper()
        claims = json.dumps({"user": subject, "plan": normalized_plan}, separators=(",", ":"))
        payload = base64.b64encode(claims.encode("utf-8")).decode("ascii")

        token = f"{TOKEN_HEADER}.{payload}.{PLACEHOLDER_SIGNATURE}"
        self.logger.debug("Issued access token", subject=subject, plan=normalized_plan)
        return Credential(subject=subject, plan=normalized_plan, token=token)


def decode_claims(token: str) -> Dict[str, Any]:
    """Decode the claims segment of a token issued by :class:`TokenIssuer`."""
    if token.startswith("Bearer "):
        token = token[7:]

    parts = token.split(".")
    if len(parts) < 2:
        raise AuthenticationError("Malformed token", details={"segments": len(parts)})

    try:
        raw = base64.b64decode(parts[1], validate=True)
        claims = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise AuthenticationError("Token claims could not be decoded", details={"error": str(e)}) from e

    if not isinstance(claims, dict):
        raise AuthenticationError("Token claims must be an object")
    return claims


def has_plan_access(token: str, required_plan: str) -> bool:
    """Check whether the token's plan claim matches ``required_plan``."""
    try:
        claims = decode_claims(token)
    except AuthenticationError:
        return False
    return str(claims.get("plan", "")).upper() == required_plan.upper()
