"""
Daily Widget Schemas
Response schemas for daily widget API endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from flashlearn.models.daily_widget import DailyWordArchiveItem


class StreakResponse(BaseModel):
    """Stored streak plus the value to display today."""
    current: int = Field(default=0, description="Stored streak")
    best: int = Field(default=0)
    effective_current: int = Field(
        default=0,
        description="Current streak, or 0 if a day was missed since last activity"
    )
    last_active_date: Optional[str] = None


class ArchiveResponse(BaseModel):
    """Past spotlight words, newest first."""
    items: list[DailyWordArchiveItem]
    total: int
