"""C2 Auth Service - credentials, session tokens and the authentication gate."""
from taskboard.c2_auth_service.passwords import hash_password, verify_password
from taskboard.c2_auth_service.token_codec import SessionTokenCodec
from taskboard.c2_auth_service.credential_store import CredentialStore
from taskboard.c2_auth_service.auth_gate import AuthenticationGate, parse_bearer
from taskboard.c2_auth_service.external_identity import ExternalProfile, ExternalIdentityVerifier
__all__ = [
    "hash_password",
    "verify_password",
    "SessionTokenCodec",
    "CredentialStore",
    "AuthenticationGate",
    "parse_bearer",
    "ExternalProfile",
    "ExternalIdentityVerifier",
]
