"""Progress endpoints for XP awards and level thresholds.

Computes updated gamification fields and refreshes the signed-in user's
cached profile; storing them is left to the backend.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Path

from edugame.api.session import get_sessions
from edugame.gamification.progress import award_xp, level_threshold
from edugame.models.schemas import AwardRequest, LevelInfo, XPAward
from edugame.session.context import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/levels/{level}", response_model=LevelInfo)
async def get_level(level: int = Path(..., ge=1)) -> LevelInfo:
    """Return the XP at which a level is completed.

    Args:
        level: Level number, starting at 1.

    Returns:
        LevelInfo with the level's threshold.
    """
    return LevelInfo(level=level, threshold=level_threshold(level))


@router.post("/award", response_model=XPAward)
async def award(
    request: AwardRequest, sessions: SessionManager = Depends(get_sessions)
) -> XPAward:
    """Award XP to a profile for today's activity.

    When a user is signed in, their cached profile is replaced by the result.

    Args:
        request: Current profile, XP amount and optional reason.
        sessions: Application session manager.

    Returns:
        XPAward with the updated profile and level-up flag.

    Raises:
        422: Invalid profile or non-positive amount.
    """
    today = datetime.now(UTC).date()
    result = award_xp(request.profile, request.amount, today, reason=request.reason)

    if sessions.is_signed_in:
        sessions.refresh_profile(result.profile)
    if request.reason:
        logger.info(f"+{request.amount} XP - {request.reason}")
    return result
