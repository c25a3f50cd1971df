"""Pydantic models for requests, responses and user progress.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual turn in a doubt-solver conversation
    - DoubtRequest: Payload sent to the doubt-solver function
    - Profile: Gamification fields of a user profile
    - XPAward: Result of awarding XP
    - AwardRequest / LevelInfo: Progress API payloads
    - SessionInfo: Current user without credentials
"""

from edugame.models.schemas import (
    MAX_HISTORY_MESSAGES,
    MAX_QUESTION_LENGTH,
    AwardRequest,
    ChatMessage,
    DoubtRequest,
    LevelInfo,
    Profile,
    Role,
    SessionInfo,
    Subject,
    XPAward,
)

__all__ = [
    "MAX_HISTORY_MESSAGES",
    "MAX_QUESTION_LENGTH",
    "AwardRequest",
    "ChatMessage",
    "DoubtRequest",
    "LevelInfo",
    "Profile",
    "Role",
    "SessionInfo",
    "Subject",
    "XPAward",
]
