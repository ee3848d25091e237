"""
Unit tests for bearer credential issuance.
"""

import base64
import json

import pytest

from service_proposals.app.security.token_issuer import (
    PLACEHOLDER_SIGNATURE,
    TOKEN_HEADER,
    Credential,
    TokenIssuer,
    decode_claims,
    has_plan_access,
)
from shared.errors import AuthenticationError, ValidationError


class TestTokenIssuer:
    """Test cases for TokenIssuer."""

    @pytest.fixture
    def issuer(self):
        return TokenIssuer()

    @pytest.mark.parametrize("subject,plan", [
        ("Lucas_Duran_SaaS", "PRO"),
        ("user-123", "vip"),
        ("a.b.c", "Starter"),
        ("josé", "pro"),
    ])
    def test_issue_produces_three_segments(self, issuer, subject, plan):
        """Token has header, claims and signature segments; claims round-trip."""
        credential = issuer.issue(subject, plan)

        segments = credential.token.split(".")
        assert len(segments) == 3

        claims = json.loads(base64.b64decode(segments[1]))
        assert claims["user"] == subject
        assert claims["plan"] == plan.upper()

    def test_header_and_signature_are_fixed(self, issuer):
        """Header declares HS256/JWT and the signature is the placeholder."""
        header, _, signature = issuer.issue("user-1", "pro").token.split(".")

        assert header == TOKEN_HEADER
        assert json.loads(base64.b64decode(header)) == {"alg": "HS256", "typ": "JWT"}
        assert signature == PLACEHOLDER_SIGNATURE

    def test_credential_attributes(self, issuer):
        """Credential keeps subject and normalized plan."""
        credential = issuer.issue("user-1", "starter")

        assert credential.subject == "user-1"
        assert credential.plan == "STARTER"
        assert str(credential) == credential.token
        assert credential.authorization_header == f"Bearer {credential.token}"

    def test_credential_is_immutable(self, issuer):
        """Issued credentials cannot be modified."""
        credential = issuer.issue("user-1", "pro")

        with pytest.raises(Exception):
            credential.plan = "VIP"

    @pytest.mark.parametrize("subject", ["", "   "])
    def test_issue_rejects_empty_subject(self, issuer, subject):
        """A subject is required."""
        with pytest.raises(ValidationError):
            issuer.issue(subject, "PRO")


class TestClaimDecoding:
    """Test cases for decode_claims and has_plan_access."""

    @pytest.fixture
    def credential(self) -> Credential:
        return TokenIssuer().issue("user-123", "vip")

    def test_decode_claims(self, credential):
        """Claims decode from a raw token."""
        assert decode_claims(credential.token) == {"user": "user-123", "plan": "VIP"}

    def test_decode_claims_with_bearer_prefix(self, credential):
        """A full Authorization header value is accepted."""
        assert decode_claims(credential.authorization_header)["plan"] == "VIP"

    @pytest.mark.parametrize("token", ["no-dots", "header.%%%not-base64%%%.sig", "header.bm90IGpzb24=.sig"])
    def test_decode_claims_malformed(self, token):
        """Malformed tokens raise AuthenticationError."""
        with pytest.raises(AuthenticationError):
            decode_claims(token)

    def test_has_plan_access(self, credential):
        """Plan check matches case-insensitively."""
        assert has_plan_access(credential.token, "VIP") is True
        assert has_plan_access(credential.token, "vip") is True
        assert has_plan_access(credential.token, "PRO") is False

    def test_has_plan_access_never_raises(self):
        """Malformed tokens simply lack access."""
        assert has_plan_access("garbage", "VIP") is False
