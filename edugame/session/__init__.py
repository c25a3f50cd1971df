"""User session handling.

Holds the authenticated user, role and cached profile as an explicit
context object with clear sign-in and sign-out boundaries.
"""

from edugame.session.context import NotSignedInError, SessionContext, SessionManager

__all__ = ["NotSignedInError", "SessionContext", "SessionManager"]
