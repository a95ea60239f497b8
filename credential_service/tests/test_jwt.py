"""
Test cases for token issuance.
"""
from datetime import datetime, timedelta, timezone
import jwt
import pytest

from credential_service.auth.errors import TokenGenerationFailed
from credential_service.auth.jwt import TokenClaims, TokenIssuer

SECRET = "unit-test-secret"
CLAIMS = TokenClaims(sub="1", email="a@b.com")


def test_issue_and_decode():
    issuer = TokenIssuer(secret=SECRET)
    token = issuer.issue(CLAIMS)
    assert isinstance(token, str) and token
    assert issuer.decode(token) == CLAIMS


def test_token_expires_after_one_day():
    token = TokenIssuer(secret=SECRET).issue(CLAIMS)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["sub"] == "1"
    assert payload["email"] == "a@b.com"
    assert payload["exp"] - payload["iat"] == 86400


def test_custom_lifetime():
    token = TokenIssuer(secret=SECRET, expires_delta=timedelta(minutes=5)).issue(CLAIMS)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["exp"] - payload["iat"] == 300


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_raises_token_generation_failed(secret):
    with pytest.raises(TokenGenerationFailed):
        TokenIssuer(secret=secret).issue(CLAIMS)


def test_signing_failure_raises_token_generation_failed():
    with pytest.raises(TokenGenerationFailed):
        TokenIssuer(secret=SECRET, algorithm="NOT-AN-ALGORITHM").issue(CLAIMS)


def test_decode_rejects_wrong_secret():
    token = TokenIssuer(secret=SECRET).issue(CLAIMS)
    assert TokenIssuer(secret="other-secret").decode(token) is None


def test_decode_rejects_expired_token():
    expired = jwt.encode(
        {"sub": "1", "email": "a@b.com", "exp": datetime.now(timezone.utc) - timedelta(seconds=1)},
        SECRET,
        algorithm="HS256",
    )
    assert TokenIssuer(secret=SECRET).decode(expired) is None


def test_decode_rejects_garbage_and_missing_claims():
    issuer = TokenIssuer(secret=SECRET)
    assert issuer.decode("invalid.token.here") is None
    assert issuer.decode(jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")) is None
