"""
Tests for password hashing and access tokens.
"""

from datetime import timedelta

from utils.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    validate_password_strength,
    verify_password,
)


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_and_verify(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_minimum_length(self):
        is_valid, issues = validate_password_strength("abc")
        assert not is_valid
        assert len(issues) == 1

    def test_bcrypt_byte_limit(self):
        is_valid, issues = validate_password_strength("x" * 73)
        assert not is_valid
        assert "72 bytes" in issues[0]

    def test_valid_password(self):
        assert validate_password_strength("secret123") == (True, [])


class TestTokens:
    """Tests for JWT helpers."""

    def test_round_trip(self):
        claims = decode_access_token(create_access_token("user-1", "client"))

        assert claims["sub"] == "user-1"
        assert claims["role"] == "client"
        assert claims["type"] == "access"
        assert "exp" in claims

    def test_expired_token(self):
        token = create_access_token("user-1", "client", expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None

    def test_garbage_token(self):
        assert decode_access_token("not-a-token") is None

    def test_tampered_payload(self):
        header, _, signature = create_access_token("user-1", "client").split(".")
        forged_payload = create_access_token("user-2", "admin").split(".")[1]
        assert decode_access_token(".".join([header, forged_payload, signature])) is None

    def test_other_token_types_rejected(self):
        from jose import jwt

        from config.settings import settings

        token = jwt.encode(
            {"sub": "user-1", "type": "refresh"},
            settings.auth.secret_key.get_secret_value(),
            algorithm=settings.auth.algorithm,
        )
        assert decode_access_token(token) is None
