"""Unit tests for session token issuance and verification."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_errors.errors import InvalidToken, TokenExpired, Unauthenticated
from taskboard.c2_auth_service.token_codec import SessionTokenCodec

SECRET = "unit-test-secret"
START = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock(START)


@pytest.fixture
def codec(clock):
    return SessionTokenCodec(SECRET, ttl=timedelta(hours=24), clock=clock)


class TestSessionTokenCodec:
    """Test token round trip, tampering and expiry."""

    def test_round_trip(self, codec):
        user_id = UserId.new()
        token = codec.issue(user_id)

        assert isinstance(token, str)
        assert codec.verify(token) == user_id

    def test_claims(self, codec):
        user_id = UserId.new()
        claims = jwt.get_unverified_claims(codec.issue(user_id))

        assert claims["sub"] == str(user_id)
        assert claims["iat"] == int(START.timestamp())
        assert claims["exp"] == int((START + timedelta(hours=24)).timestamp())

    def test_valid_just_before_expiry(self, codec, clock):
        token = codec.issue(UserId.new())
        clock.now = START + timedelta(hours=24) - timedelta(seconds=1)

        codec.verify(token)

    def test_expired_after_ttl(self, codec, clock):
        token = codec.issue(UserId.new())
        clock.now = START + timedelta(hours=24, seconds=1)

        with pytest.raises(TokenExpired):
            codec.verify(token)

    def test_expired_exactly_at_ttl(self, codec, clock):
        token = codec.issue(UserId.new())
        clock.now = START + timedelta(hours=24)

        with pytest.raises(TokenExpired):
            codec.verify(token)

    def test_wrong_secret_is_invalid(self, codec, clock):
        other = SessionTokenCodec("another-secret", clock=clock)
        token = other.issue(UserId.new())

        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_tampered_payload_is_invalid(self, codec):
        token = codec.issue(UserId.new())
        header, payload, signature = token.split(".")
        forged = jwt.encode({"sub": str(UserId.new()), "exp": 9999999999}, "guess", algorithm="HS256")
        tampered = ".".join([header, forged.split(".")[1], signature])

        with pytest.raises(InvalidToken):
            codec.verify(tampered)

    def test_expired_and_tampered_fail_distinctly(self, codec, clock):
        token = codec.issue(UserId.new())
        clock.now = START + timedelta(days=2)

        with pytest.raises(TokenExpired) as expired:
            codec.verify(token)
        with pytest.raises(InvalidToken) as invalid:
            codec.verify(token + "x")

        # Both surface to callers as the same unauthenticated error
        assert isinstance(expired.value, Unauthenticated)
        assert isinstance(invalid.value, Unauthenticated)
        assert expired.value.code == invalid.value.code == "unauthenticated"
        assert expired.value.reason != invalid.value.reason

    @pytest.mark.parametrize("garbage", ["", "invalid.token.string", "not-a-jwt"])
    def test_garbage_is_invalid(self, codec, garbage):
        with pytest.raises(InvalidToken):
            codec.verify(garbage)

    def test_missing_expiry_is_invalid(self, codec):
        token = jwt.encode({"sub": str(UserId.new())}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_non_uuid_subject_is_invalid(self, codec):
        exp = int((START + timedelta(hours=1)).timestamp())
        token = jwt.encode({"sub": "user123", "exp": exp}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_requires_secret(self):
        with pytest.raises(ValueError):
            SessionTokenCodec("")
