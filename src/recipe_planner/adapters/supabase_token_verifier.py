"""Access token verification through Supabase Auth."""

import logging
from dataclasses import dataclass

from supabase import Client

from recipe_planner.services.auth import TokenVerifier

logger = logging.getLogger(__name__)


@dataclass
class SupabaseTokenVerifier(TokenVerifier):
    """Resolves Supabase-issued JWTs to user ids."""

    client: Client

    def verify(self, token: str) -> str | None:
        """Return the user id for a valid token, else None."""
        try:
            response = self.client.auth.get_user(token)
        except Exception:
            logger.exception("Supabase token verification failed")
            return None
        if response is None or response.user is None:
            return None
        return str(response.user.id)
