"""Bearer token authentication."""

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class TokenVerifier(Protocol):
    """Resolves access tokens issued by the identity provider."""

    def verify(self, token: str) -> str | None:
        """Return the user id for a valid token, else None."""


@dataclass
class AuthService:
    """Authenticates API callers from their bearer tokens."""

    verifier: TokenVerifier

    def authenticate(self, authorization: str | None) -> str | None:
        """Return the caller's user id from an Authorization header value."""
        token = parse_bearer_token(authorization)
        if token is None:
            return None
        user_id = self.verifier.verify(token)
        if user_id is None:
            logger.info("Rejected access token")
        return user_id


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from a ``Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
