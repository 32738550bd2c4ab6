"""
Tests for password hashing and session token signing
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from livestockmart.domain.errors import InvalidSession
from livestockmart.infrastructure.security.passwords import BcryptPasswordHasher
from livestockmart.infrastructure.security.tokens import JwtTokenSigner

from conftest import TEST_SECRET


class TestBcryptPasswordHasher:
    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher(rounds=10)
        hashed = hasher.hash("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2b$10$")
        assert hasher.verify("secret123", hashed)
        assert not hasher.verify("secret124", hashed)

    def test_hashes_are_salted(self):
        hasher = BcryptPasswordHasher(rounds=10)
        assert hasher.hash("secret123") != hasher.hash("secret123")

    def test_malformed_hash_does_not_verify(self):
        assert not BcryptPasswordHasher().verify("secret123", "not-a-bcrypt-hash")


class TestJwtTokenSigner:
    def test_round_trip_embeds_only_the_subject(self):
        signer = JwtTokenSigner(TEST_SECRET)
        token = signer.sign("user-1", timedelta(days=7))
        assert signer.verify(token) == "user-1"

        claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert set(claims) == {"sub", "iat", "exp"}
        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60

    def test_expired_token(self):
        signer = JwtTokenSigner(TEST_SECRET)
        token = signer.sign("user-1", timedelta(seconds=-5))
        with pytest.raises(InvalidSession):
            signer.verify(token)

    def test_foreign_signature(self):
        other = JwtTokenSigner("another-signing-secret-with-enough-bytes-for-hs256")
        token = other.sign("user-1", timedelta(days=1))
        with pytest.raises(InvalidSession):
            JwtTokenSigner(TEST_SECRET).verify(token)

    def test_garbage_and_missing_claims(self):
        signer = JwtTokenSigner(TEST_SECRET)
        with pytest.raises(InvalidSession):
            signer.verify("not-a-token")
        now = datetime.now(tz=timezone.utc)
        no_subject = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(InvalidSession):
            signer.verify(no_subject)

    def test_requires_secret(self):
        with pytest.raises(RuntimeError):
            JwtTokenSigner("")
