"""Signed, self-contained session tokens."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt

from taskboard.c1_common_types.identifiers import UserId
from taskboard.c1_errors.errors import InvalidToken, TokenExpired, ValidationFailed

DEFAULT_TOKEN_TTL = timedelta(hours=24)


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class SessionTokenCodec:
    """Issues and verifies bearer tokens binding a user id to an expiry.

    Tokens are JWTs carrying ``sub``, ``iat`` and ``exp``. There is no
    server-side session state, so a token stays valid until it expires.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or system_clock

    def issue(self, subject_id: UserId) -> str:
        issued_at = self._clock()
        claims = {
            "sub": str(subject_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> UserId:
        """Return the subject of a valid token.

        Raises:
            InvalidToken: Bad signature, malformed token or missing claims
            TokenExpired: Signature is valid but the token is past its expiry
        """
        try:
            # Expiry is checked below against the injected clock
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidToken() from e

        expires_at = claims.get("exp")
        if not isinstance(expires_at, (int, float)):
            raise InvalidToken("Session token has no expiry")
        if self._clock().timestamp() >= expires_at:
            raise TokenExpired()

        try:
            return UserId.parse(claims["sub"])
        except (KeyError, ValidationFailed) as e:
            raise InvalidToken("Session token has no valid subject") from e
