"""Signed-in user context.

The session is an explicit object: built when the user signs in, dropped on
sign-out, and passed to whatever needs it (e.g. the doubt-solver client).
"""

import logging

from pydantic import BaseModel, Field

from edugame.models.schemas import Profile, Role

logger = logging.getLogger(__name__)


class NotSignedInError(Exception):
    """Raised when session data is requested while signed out."""

    pass


class SessionContext(BaseModel):
    """Authenticated user and cached profile data.

    Attributes:
        user_id: Backend user identifier.
        access_token: Bearer token issued at sign-in.
        role: Application role, if resolved.
        profile: Cached profile, if fetched.
    """

    user_id: str = Field(..., min_length=1)
    access_token: str = Field(..., min_length=1)
    role: Role | None = None
    profile: Profile | None = None


class SessionManager:
    """Owns the current session between sign-in and sign-out."""

    def __init__(self) -> None:
        self._current: SessionContext | None = None

    @property
    def is_signed_in(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> SessionContext:
        """Return the active session.

        Raises:
            NotSignedInError: If no user is signed in.
        """
        if self._current is None:
            raise NotSignedInError("No user is signed in")
        return self._current

    def sign_in(self, context: SessionContext) -> SessionContext:
        """Start a session, replacing any previous one."""
        if self._current is not None:
            logger.info(f"Replacing session for user {self._current.user_id}")
        self._current = context
        logger.info(f"Signed in user {context.user_id}")
        return context

    def sign_out(self) -> None:
        """End the session and drop the cached role and profile."""
        if self._current is None:
            return
        logger.info(f"Signed out user {self._current.user_id}")
        self._current = None

    def refresh_profile(self, profile: Profile) -> SessionContext:
        """Replace the cached profile, e.g. after an XP award.

        Raises:
            NotSignedInError: If no user is signed in.
        """
        self._current = self.current.model_copy(update={"profile": profile})
        return self._current
