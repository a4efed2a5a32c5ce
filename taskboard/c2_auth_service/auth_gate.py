"""Resolves bearer tokens to authenticated identities."""

import logging
from typing import Optional

from taskboard.c1_errors.errors import InvalidToken, TokenExpired, Unauthenticated
from taskboard.c1_user_models.user import User
from taskboard.c2_auth_service.credential_store import CredentialStore
from taskboard.c2_auth_service.token_codec import SessionTokenCodec

logger = logging.getLogger(__name__)


def parse_bearer(authorization: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value.

    Raises:
        Unauthenticated: If the header is absent or not a bearer credential
    """
    if not authorization or not authorization.strip():
        raise Unauthenticated()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated("Malformed authorization header")
    return token


class AuthenticationGate:
    """Turns a raw session token into the request's principal."""

    def __init__(self, codec: SessionTokenCodec, credentials: CredentialStore):
        self.codec = codec
        self.credentials = credentials

    def authenticate(self, raw_token: Optional[str]) -> User:
        if not raw_token:
            raise Unauthenticated()

        try:
            subject_id = self.codec.verify(raw_token)
        except TokenExpired:
            logger.info("Rejected session token: expired")
            raise
        except InvalidToken:
            logger.warning("Rejected session token: invalid signature or format")
            raise

        # Subject may have been removed since the token was issued
        user = self.credentials.get_by_id(subject_id)
        if user is None:
            logger.warning(f"Rejected session token: subject {subject_id} no longer exists")
            raise Unauthenticated("Identity no longer exists")
        return user
