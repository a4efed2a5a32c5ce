"""Boundary with third-party identity providers."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class ExternalProfile:
    """Profile attributes a provider has already verified."""

    email: str
    name: str
    avatar_url: Optional[str] = None


class ExternalIdentityVerifier(Protocol):
    """Turns a provider credential (e.g. an ID token) into a trusted profile.

    Implementations raise ``InvalidCredentials`` when the credential is not
    accepted. Checking the provider's signature is the implementation's job.
    """

    def verify(self, credential: str) -> ExternalProfile:
        ...
