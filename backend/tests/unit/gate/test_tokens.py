"""Unit tests for session token creation and validation"""

from datetime import datetime, timezone

import jwt
import pytest

from dataroom.gate.tokens import create_session_token, decode_session_token

SECRET = "test-jwt-secret-key-256-bits-minimum-length-required-for-security"


class TestCreateSessionToken:
    """Test create_session_token"""

    def test_token_carries_session_id(self):
        issued = create_session_token("session-abc", SECRET)
        payload = decode_session_token(issued.token, SECRET)
        assert payload["sid"] == "session-abc"
        assert payload["exp"] - payload["iat"] == 3600

    def test_expiry(self):
        issued = create_session_token("session-abc", SECRET, expiry_minutes=15)
        assert issued.expires_in == 900
        assert issued.expires_at > datetime.now(timezone.utc)

    def test_missing_secret(self):
        with pytest.raises(ValueError):
            create_session_token("session-abc", "")


class TestDecodeSessionToken:
    """Test decode_session_token"""

    def test_wrong_secret(self):
        issued = create_session_token("session-abc", SECRET)
        with pytest.raises(jwt.InvalidTokenError):
            decode_session_token(issued.token, "another-secret-of-sufficient-length-for-hs256")

    def test_expired_token(self):
        issued = create_session_token("session-abc", SECRET, expiry_minutes=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_session_token(issued.token, SECRET)

    def test_tampered_token(self):
        issued = create_session_token("session-abc", SECRET)
        header, payload, signature = issued.token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(jwt.InvalidTokenError):
            decode_session_token(tampered, SECRET)

    def test_missing_session_claim(self):
        token = jwt.encode({"exp": 4102444800}, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError):
            decode_session_token(token, SECRET)
