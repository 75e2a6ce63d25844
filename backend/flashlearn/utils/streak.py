"""
Daily Streak Rules

- First-ever activity, or activity after a gap: streak restarts at 1
  (the activity itself is day one)
- Activity on the day after the last active day: streak + 1
- Activity again on the same day: no change
- Best streak never drops below the current streak
"""
from datetime import datetime
from typing import Optional

from flashlearn.models.daily_widget import UserStreak
from flashlearn.utils import widget_date


def _is_yesterday(last_active: Optional[str], today: str) -> bool:
    last = widget_date.parse_key(last_active)
    return last is not None and widget_date.to_key(last) == widget_date.yesterday(today)


def apply_streak(streak: UserStreak, today: str) -> tuple[UserStreak, bool]:
    """
    Count activity on ``today`` towards the streak.

    Args:
        streak: Stored streak (or a fresh one for a first-time user)
        today: Day key of the activity

    Returns:
        (updated streak, whether anything changed)
    """
    # Already counted today
    if streak.last_active_date == today:
        return streak, False

    if _is_yesterday(streak.last_active_date, today):
        new_current = streak.current + 1
    else:
        new_current = 1

    updated = streak.model_copy(update={
        "current": new_current,
        "best": max(streak.best, new_current),
        "last_active_date": today,
        "updated_at": datetime.utcnow()
    })
    return updated, True


def effective_streak(streak: Optional[UserStreak], today: str) -> int:
    """Streak to display: stored value while still alive, 0 once a day was missed."""
    if streak is None or not streak.last_active_date:
        return 0
    if streak.last_active_date == today or _is_yesterday(streak.last_active_date, today):
        return streak.current
    return 0
