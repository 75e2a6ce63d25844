"""
FastAPI Dependencies
Identity resolution and engine construction for the API layer.
"""
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from flashlearn.core.security import get_user_id_from_token
from flashlearn.engine.daily_widget_engine import DailyWidgetEngine


logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_current_user_id_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[str]:
    """
    Signed-in user id from the Bearer token.

    Returns None if no token is provided or the token is invalid, so the
    widget can answer with a signed-out state instead of a 401.
    """
    if not credentials:
        return None
    return get_user_id_from_token(credentials.credentials)


def get_daily_widget_engine(
    user_id: Optional[str] = Depends(get_current_user_id_optional)
) -> DailyWidgetEngine:
    """Daily widget engine bound to the request's user."""
    async def identity_provider() -> Optional[str]:
        return user_id

    return DailyWidgetEngine(identity_provider=identity_provider)
