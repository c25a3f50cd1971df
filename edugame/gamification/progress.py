"""XP, level and streak arithmetic.

Pure functions over `Profile`; persisting the result is the caller's job.
"""

import logging
from datetime import date

from edugame.models.schemas import Profile, XPAward

logger = logging.getLogger(__name__)

XP_PER_LEVEL = 100


def level_threshold(level: int) -> int:
    """Return the total XP at which a user leaves `level`.

    Level 1 ends at 100 XP, level 2 at 200 XP, and so on.
    """
    return level * XP_PER_LEVEL


def compute_level(xp: int, current_level: int = 1) -> int:
    """Advance from `current_level` past every threshold `xp` has reached.

    Levels never go down, so a stored level above what `xp` implies is kept.
    """
    level = current_level
    while xp >= level_threshold(level):
        level += 1
    return level


def next_streak(streak_days: int, last_activity: date | None, today: date) -> int:
    """Compute the activity streak after activity on `today`.

    Args:
        streak_days: Streak before today's activity.
        last_activity: Day of the previous activity, if any.
        today: Day of the current activity.

    Returns:
        1 for a first or broken streak, streak + 1 for consecutive days,
        the unchanged streak for a repeat on the same day.
    """
    if last_activity is None:
        return 1

    gap = (today - last_activity).days
    if gap == 1:
        return streak_days + 1
    if gap > 1:
        return 1
    return streak_days


def award_xp(
    profile: Profile,
    amount: int,
    today: date,
    reason: str | None = None,
) -> XPAward:
    """Grant XP and update level, streak and last activity.

    Args:
        profile: Profile before the award.
        amount: XP to grant, must be positive.
        today: Day the activity happened.
        reason: Optional activity label, e.g. "Quiz completed".

    Returns:
        XPAward holding the updated profile.

    Raises:
        ValueError: If amount is not positive.
    """
    if amount <= 0:
        raise ValueError(f"XP amount must be positive, got {amount}")

    new_xp = profile.xp + amount
    new_level = compute_level(new_xp, profile.level)
    updated = profile.model_copy(
        update={
            "xp": new_xp,
            "level": new_level,
            "streak_days": next_streak(
                profile.streak_days, profile.last_activity_date, today
            ),
            "last_activity_date": today,
        }
    )

    leveled_up = new_level > profile.level
    if leveled_up:
        logger.info(f"Level up: {profile.level} -> {new_level} ({new_xp} XP)")

    return XPAward(
        profile=updated,
        amount=amount,
        previous_level=profile.level,
        leveled_up=leveled_up,
        reason=reason,
    )
