"""
Daily Widget API Endpoints
REST API for the daily spotlight word, its archive and the streak.
"""
from fastapi import APIRouter, HTTPException, Depends, Query, status
from typing import Optional
import logging

from flashlearn.core.dependencies import get_daily_widget_engine
from flashlearn.engine.daily_widget_engine import DailyWidgetEngine
from flashlearn.models.daily_widget import WidgetState
from flashlearn.schemas.daily import StreakResponse, ArchiveResponse
from flashlearn.utils.streak import effective_streak


logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== WIDGET STATE ====================

@router.get("/state", response_model=WidgetState)
async def get_widget_state(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """
    Get today's widget state.

    Assigns a spotlight word on the first call of the day. Returns
    signed_out, card_hidden, card_revealed, done_today or exhausted.
    """
    try:
        return await engine.get_state()
    except Exception as e:
        logger.error(f"Error getting widget state: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting widget state: {str(e)}"
        )


@router.post("/reveal", response_model=WidgetState)
async def reveal_card(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """Reveal today's card."""
    try:
        return await engine.reveal()
    except Exception as e:
        logger.error(f"Error revealing card: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error revealing card: {str(e)}"
        )


@router.post("/missed", response_model=WidgetState)
async def miss_card(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """Skip today's card; it will not come back until tomorrow."""
    try:
        return await engine.missed()
    except Exception as e:
        logger.error(f"Error skipping card: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error skipping card: {str(e)}"
        )


@router.post("/got-it", response_model=WidgetState)
async def complete_card(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """Mark today's card as known, completing the day and advancing the streak."""
    try:
        return await engine.got_it()
    except Exception as e:
        logger.error(f"Error completing card: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error completing card: {str(e)}"
        )


# ==================== ARCHIVE & STREAK ====================

@router.get("/archive", response_model=ArchiveResponse)
async def get_archive(
    from_date: Optional[str] = Query(default=None, description="Inclusive start (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(default=None, description="Inclusive end (YYYY-MM-DD)"),
    engine: DailyWidgetEngine = Depends(get_daily_widget_engine)
):
    """Past spotlight words the user got right, newest first."""
    try:
        items = await engine.get_archive(from_date, to_date)
        return ArchiveResponse(items=items, total=len(items))
    except Exception as e:
        logger.error(f"Error getting archive: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting archive: {str(e)}"
        )


@router.get("/streak", response_model=StreakResponse)
async def get_streak(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """
    Get the user's streak.

    ``effective_current`` drops to 0 once a day is missed, while the
    stored value only resets on the next activity.
    """
    try:
        streak = await engine.get_streak()
        if not streak:
            return StreakResponse()

        return StreakResponse(
            current=streak.current,
            best=streak.best,
            effective_current=effective_streak(streak, engine.today_key()),
            last_active_date=streak.last_active_date
        )
    except Exception as e:
        logger.error(f"Error getting streak: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error getting streak: {str(e)}"
        )


@router.post("/activity", response_model=StreakResponse)
async def record_activity(engine: DailyWidgetEngine = Depends(get_daily_widget_engine)):
    """Count a completed learning session towards today's streak."""
    try:
        streak = await engine.record_activity()
        if not streak:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Sign in to record activity",
                headers={"WWW-Authenticate": "Bearer"}
            )

        return StreakResponse(
            current=streak.current,
            best=streak.best,
            effective_current=streak.current,
            last_active_date=streak.last_active_date
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error recording activity: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error recording activity: {str(e)}"
        )
