"""Gamification rules for student progress.

Responsibilities:
    - XP thresholds per level
    - Level computation after an XP award
    - Daily activity streak tracking
"""

from edugame.gamification.progress import (
    XP_PER_LEVEL,
    award_xp,
    compute_level,
    level_threshold,
    next_streak,
)

__all__ = ["XP_PER_LEVEL", "award_xp", "compute_level", "level_threshold", "next_streak"]
