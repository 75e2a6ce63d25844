"""
Daily Widget Models
Defines the daily spotlight session, widget history and streak structures,
plus the states returned by the daily widget engine.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field

from flashlearn.models.flashcard import Flashcard
from flashlearn.utils.widget_json import decode_string_list


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class DailyWidgetSession(BaseModel):
    """One spotlight session per user per calendar day"""
    id: str  # {user_id}_{date}
    user_id: str
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    current_flashcard_id: Optional[str] = None
    attempted_ids: list[str] = Field(
        default_factory=list,
        description="Flashcards skipped today, excluded until tomorrow"
    )
    is_revealed: bool = False
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_at: Optional[str] = None  # stored createdAt; upsert_item sets it when absent

    @classmethod
    def new(cls, user_id: str, date: str) -> "DailyWidgetSession":
        """Fresh session: nothing assigned, not revealed, not completed"""
        return cls(id=f"{user_id}_{date}", user_id=user_id, date=date)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        data = {
            "id": self.id,
            "userId": self.user_id,
            "date": self.date,
            "currentFlashcardId": self.current_flashcard_id,
            "attemptedIds": list(self.attempted_ids),
            "isRevealed": self.is_revealed,
            "isCompleted": self.is_completed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None
        }
        if self.created_at:
            data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DailyWidgetSession":
        """Create from dictionary"""
        return cls(
            id=data["id"],
            user_id=data["userId"],
            date=data["date"],
            current_flashcard_id=data.get("currentFlashcardId") or None,
            attempted_ids=decode_string_list(data.get("attemptedIds")),
            is_revealed=data.get("isRevealed", False),
            is_completed=data.get("isCompleted", False),
            completed_at=_parse_datetime(data.get("completedAt")),
            updated_at=_parse_datetime(data.get("updatedAt")) or datetime.utcnow(),
            created_at=data.get("createdAt")
        )


class WidgetWordHistoryRecord(BaseModel):
    """A flashcard the user answered correctly in the daily widget"""
    id: str  # {user_id}_{flashcard_id}
    user_id: str
    flashcard_id: str
    first_shown_date: str
    last_shown_date: str
    shown_count: int = Field(default=1, ge=1)
    is_correct: bool = True
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @classmethod
    def from_dict(cls, data: dict) -> "WidgetWordHistoryRecord":
        return cls(
            id=data["id"],
            user_id=data["userId"],
            flashcard_id=data["flashcardId"],
            first_shown_date=data["firstShownDate"],
            last_shown_date=data.get("lastShownDate") or data["firstShownDate"],
            shown_count=data.get("shownCount", 1),
            is_correct=data.get("isCorrect", True),
            updated_at=_parse_datetime(data.get("updatedAt")) or datetime.utcnow()
        )


class UserStreak(BaseModel):
    """Consecutive-day activity streak for a user"""
    user_id: str
    current: int = Field(default=0, ge=0)
    best: int = Field(default=0, ge=0)
    last_active_date: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.user_id,
            "userId": self.user_id,
            "current": self.current,
            "best": self.best,
            "lastActiveDate": self.last_active_date
        }
        if self.created_at:
            data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserStreak":
        return cls(
            user_id=data["userId"],
            current=data.get("current", 0),
            best=data.get("best", 0),
            last_active_date=data.get("lastActiveDate"),
            updated_at=_parse_datetime(data.get("updatedAt")) or datetime.utcnow(),
            created_at=data.get("createdAt")
        )


class DailyWordArchiveItem(BaseModel):
    """A past spotlight word the user completed"""
    date: str
    flashcard_id: str
    word: str
    definition: str = ""
    ipa: str = ""


# ==================== WIDGET STATES ====================

class SignedOut(BaseModel):
    """No signed-in user"""
    state: Literal["signed_out"] = "signed_out"


class CardHidden(BaseModel):
    """Card is assigned for today but not revealed yet"""
    state: Literal["card_hidden"] = "card_hidden"
    date: str
    flashcard: Flashcard


class CardRevealed(BaseModel):
    """Card is revealed (definition/example + actions)"""
    state: Literal["card_revealed"] = "card_revealed"
    date: str
    flashcard: Flashcard


class DoneToday(BaseModel):
    """User already completed today"""
    state: Literal["done_today"] = "done_today"
    date: str
    streak_current: int
    streak_best: int


class Exhausted(BaseModel):
    """No eligible word left for today"""
    state: Literal["exhausted"] = "exhausted"
    date: str
    message: str = "No new word available."


WidgetState = Annotated[
    Union[SignedOut, CardHidden, CardRevealed, DoneToday, Exhausted],
    Field(discriminator="state")
]
