"""Session endpoints: sign in with a backend-issued token, inspect, sign out.

The backend authenticates the user; this API only holds the resulting
session for the doubt-solver page and progress updates.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from edugame.models.schemas import SessionInfo
from edugame.session.context import NotSignedInError, SessionContext, SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


def get_sessions(request: Request) -> SessionManager:
    """Return the session manager owned by the application."""
    return request.app.state.sessions


def _info(context: SessionContext) -> SessionInfo:
    return SessionInfo(user_id=context.user_id, role=context.role, profile=context.profile)


@router.post("", response_model=SessionInfo)
async def sign_in(
    context: SessionContext, sessions: SessionManager = Depends(get_sessions)
) -> SessionInfo:
    """Start a session from a token issued by the backend's auth service."""
    return _info(sessions.sign_in(context))


@router.get("", response_model=SessionInfo)
async def current_session(sessions: SessionManager = Depends(get_sessions)) -> SessionInfo:
    """Return the signed-in user.

    Raises:
        HTTPException: 401 if no user is signed in.
    """
    try:
        return _info(sessions.current)
    except NotSignedInError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(sessions: SessionManager = Depends(get_sessions)) -> None:
    """End the session; a no-op when already signed out."""
    sessions.sign_out()
