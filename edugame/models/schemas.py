from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_QUESTION_LENGTH = 10000
MAX_HISTORY_MESSAGES = 50


class Subject(str, Enum):
    """Subjects the doubt solver has an expert persona for."""

    COMPUTER_SCIENCE = "computer_science"
    STEM = "stem"
    HUMANITIES = "humanities"


class Role(str, Enum):
    """Application role assigned to a user account."""

    STUDENT = "student"
    TEACHER = "teacher"


class ChatMessage(BaseModel):
    """A single turn of a doubt-solver conversation.

    Attributes:
        role: Who wrote the message (user or assistant).
        content: The message text.
    """

    role: Literal["user", "assistant"]
    content: str = Field(..., max_length=MAX_QUESTION_LENGTH)


class DoubtRequest(BaseModel):
    """Request payload for the doubt-solver function.

    Serialized with `by_alias=True` to match the function's camelCase body.

    Attributes:
        question: The student's question.
        subject: Subject persona to answer with.
        conversation_history: Earlier turns of this conversation.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1, max_length=MAX_QUESTION_LENGTH)
    subject: Subject = Subject.COMPUTER_SCIENCE
    conversation_history: list[ChatMessage] = Field(
        default_factory=list,
        max_length=MAX_HISTORY_MESSAGES,
        alias="conversationHistory",
    )

    @field_validator("question", mode="before")
    @classmethod
    def strip_question(cls, v: str) -> str:
        """Strip whitespace from question before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class Profile(BaseModel):
    """Gamification fields of a user profile.

    Attributes:
        full_name: Display name.
        xp: Total experience points earned.
        level: Current level, starting at 1.
        streak_days: Consecutive active days.
        last_activity_date: Day of the most recent XP award.
        avatar_url: Optional avatar location.
    """

    full_name: str = ""
    xp: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    streak_days: int = Field(default=0, ge=0)
    last_activity_date: date | None = None
    avatar_url: str | None = None


class XPAward(BaseModel):
    """Outcome of awarding XP to a profile.

    Attributes:
        profile: The profile after the award.
        amount: XP granted.
        previous_level: Level before the award.
        leveled_up: Whether the award crossed at least one level threshold.
        reason: Optional activity that earned the XP.
    """

    profile: Profile
    amount: int = Field(..., gt=0)
    previous_level: int = Field(..., ge=1)
    leveled_up: bool
    reason: str | None = None


class AwardRequest(BaseModel):
    """Request payload for the XP award endpoint."""

    profile: Profile
    amount: int = Field(..., gt=0)
    reason: str | None = None


class LevelInfo(BaseModel):
    """XP needed to leave a level."""

    level: int = Field(..., ge=1)
    threshold: int = Field(..., ge=0)


class SessionInfo(BaseModel):
    """Signed-in user as reported by the API; never includes the token."""

    user_id: str
    role: Role | None = None
    profile: Profile | None = None
