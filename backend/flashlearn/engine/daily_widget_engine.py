"""
Daily Widget Engine
State machine behind the daily spotlight widget.

Each signed-in user gets one session per calendar day. The session holds
the spotlight card, the cards skipped today and whether the day is done.
Answering "got it" records the card in the widget history (so it never
comes back) and advances the streak.

Flow:
    get_state -> CardHidden -> reveal -> CardRevealed -> got_it -> DoneToday
                                                      -> missed -> CardHidden (next card)
    no eligible card left -> Exhausted
"""
from datetime import date, datetime
from typing import Awaitable, Callable, Optional

from flashlearn.config import Settings
from flashlearn.engine.base import BaseEngine
from flashlearn.models.daily_widget import (
    DailyWidgetSession,
    UserStreak,
    WidgetWordHistoryRecord,
    DailyWordArchiveItem,
    WidgetState,
    SignedOut,
    CardHidden,
    CardRevealed,
    DoneToday,
    Exhausted
)
from flashlearn.models.flashcard import Flashcard
from flashlearn.services.cosmos_db_service import CosmosDBService
from flashlearn.utils import widget_date
from flashlearn.utils.streak import apply_streak


IdentityProvider = Callable[[], Awaitable[Optional[str]]]


async def _no_user() -> Optional[str]:
    return None


class DailyWidgetEngine(BaseEngine):
    """
    Daily Widget Engine - one spotlight word per user per day.

    The engine keeps no state between calls: every operation reads the
    session fresh from storage. Callers serialize calls per (user, day).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        db_service: CosmosDBService | None = None,
        identity_provider: IdentityProvider | None = None,
        clock: Callable[[], date] | None = None
    ):
        """
        Args:
            settings: Application settings
            db_service: Storage for cards, sessions, history and streaks
            identity_provider: Async callable returning the signed-in user id or None
            clock: Returns the current calendar day (widget timezone by default)
        """
        super().__init__(settings=settings, db_service=db_service)
        self.identity_provider = identity_provider or _no_user
        self.clock = clock or (lambda: widget_date.today(self.settings.WIDGET_TIMEZONE))

    @property
    def name(self) -> str:
        return "daily_widget"

    @property
    def description(self) -> str:
        return "Daily spotlight word with exclusion history and streaks"

    def today_key(self) -> str:
        return widget_date.to_key(self.clock())

    # ==================== WIDGET OPERATIONS ====================

    async def get_state(self) -> WidgetState:
        """Current widget state, assigning today's card when needed."""
        user_id = await self.identity_provider()
        if not user_id:
            return SignedOut()

        today = self.today_key()
        try:
            session = await self._get_or_create_session(user_id, today)
            if session.is_completed:
                return await self._done_today(user_id, today)

            if session.current_flashcard_id:
                card = await self._get_card(session.current_flashcard_id)
                if card:
                    if session.is_revealed:
                        return CardRevealed(date=today, flashcard=card)
                    return CardHidden(date=today, flashcard=card)
                self.log_debug("Assigned card no longer resolves", {
                    "flashcard_id": session.current_flashcard_id
                })

            return await self._assign_new_word(session, today)
        except Exception as e:
            self.log_error(e, {"operation": "get_state", "user_id": user_id})
            raise

    async def reveal(self) -> WidgetState:
        """Flip the card to show its definition and actions."""
        user_id = await self.identity_provider()
        if not user_id:
            return SignedOut()

        today = self.today_key()
        try:
            session = await self._get_or_create_session(user_id, today)
            if session.is_completed:
                return await self._done_today(user_id, today)
            if not session.current_flashcard_id:
                return await self.get_state()

            revealed = session.model_copy(update={
                "is_revealed": True,
                "updated_at": datetime.utcnow()
            })
            await self.db_service.upsert_daily_session(revealed.to_dict())

            card = await self._get_card(session.current_flashcard_id)
            if not card:
                return await self.get_state()
            return CardRevealed(date=today, flashcard=card)
        except Exception as e:
            self.log_error(e, {"operation": "reveal", "user_id": user_id})
            raise

    async def missed(self) -> WidgetState:
        """Skip the current card for today and move to another one."""
        user_id = await self.identity_provider()
        if not user_id:
            return SignedOut()

        today = self.today_key()
        try:
            session = await self._get_or_create_session(user_id, today)
            if session.is_completed:
                return await self._done_today(user_id, today)

            attempted = list(session.attempted_ids)
            current_id = session.current_flashcard_id
            if current_id and current_id not in attempted:
                attempted.append(current_id)

            card = await self._pick_word(user_id, attempted)
            if card is None:
                await self.db_service.upsert_daily_session(session.model_copy(update={
                    "current_flashcard_id": None,
                    "attempted_ids": attempted,
                    "is_revealed": False,
                    "updated_at": datetime.utcnow()
                }).to_dict())
                self.log_complete("missed", {"user_id": user_id, "exhausted": True})
                return self._exhausted(today)

            await self.db_service.upsert_daily_session(session.model_copy(update={
                "current_flashcard_id": card.id,
                "attempted_ids": attempted,
                "is_revealed": False,
                "updated_at": datetime.utcnow()
            }).to_dict())
            return CardHidden(date=today, flashcard=card)
        except Exception as e:
            self.log_error(e, {"operation": "missed", "user_id": user_id})
            raise

    async def got_it(self) -> WidgetState:
        """Complete today's session with the current card answered correctly."""
        user_id = await self.identity_provider()
        if not user_id:
            return SignedOut()

        today = self.today_key()
        try:
            session = await self._get_or_create_session(user_id, today)
            if session.is_completed:
                return await self._done_today(user_id, today)

            self.log_start("got_it", {"user_id": user_id, "flashcard_id": session.current_flashcard_id})

            if session.current_flashcard_id:
                await self.db_service.upsert_widget_history_correct(
                    user_id, session.current_flashcard_id, today
                )

            now = datetime.utcnow()
            await self.db_service.upsert_daily_session(session.model_copy(update={
                "is_revealed": True,
                "is_completed": True,
                "completed_at": now,
                "updated_at": now
            }).to_dict())

            streak = await self._advance_streak(user_id, today)
            self.log_complete("got_it", {"streak": streak.current, "best": streak.best})
            return DoneToday(date=today, streak_current=streak.current, streak_best=streak.best)
        except Exception as e:
            self.log_error(e, {"operation": "got_it", "user_id": user_id})
            raise

    # ==================== STREAK & ARCHIVE ====================

    async def record_activity(self) -> Optional[UserStreak]:
        """Count a learning session finished outside the widget towards the streak."""
        user_id = await self.identity_provider()
        if not user_id:
            return None
        return await self._advance_streak(user_id, self.today_key())

    async def get_streak(self) -> Optional[UserStreak]:
        """Stored streak of the signed-in user (None when signed out)."""
        user_id = await self.identity_provider()
        if not user_id:
            return None
        return await self._load_streak(user_id)

    async def get_archive(
        self,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None
    ) -> list[DailyWordArchiveItem]:
        """
        Past spotlight words the user answered correctly, newest first.

        Args:
            from_date: Inclusive lower bound (YYYY-MM-DD)
            to_date: Inclusive upper bound (YYYY-MM-DD)
        """
        user_id = await self.identity_provider()
        if not user_id:
            return []

        records = await self.db_service.get_widget_history(user_id, from_date, to_date)

        items = []
        for data in records:
            record = WidgetWordHistoryRecord.from_dict(data)
            card = await self._get_card(record.flashcard_id)
            if not card:
                continue
            items.append(DailyWordArchiveItem(
                date=record.last_shown_date,
                flashcard_id=card.id,
                word=card.word,
                definition=card.definition,
                ipa=card.ipa
            ))

        items.sort(key=lambda item: item.date, reverse=True)
        return items

    # ==================== HELPERS ====================

    async def _get_or_create_session(self, user_id: str, today: str) -> DailyWidgetSession:
        existing = await self.db_service.get_daily_session(user_id, today)
        if existing:
            return DailyWidgetSession.from_dict(existing)

        session = DailyWidgetSession.new(user_id, today)
        await self.db_service.upsert_daily_session(session.to_dict())
        self.log_debug("Created widget session", {"id": session.id})
        return session

    async def _assign_new_word(self, session: DailyWidgetSession, today: str) -> WidgetState:
        """Pick a card for the session. Exhaustion leaves the session untouched."""
        card = await self._pick_word(session.user_id, session.attempted_ids)
        if card is None:
            return self._exhausted(today)

        await self.db_service.upsert_daily_session(session.model_copy(update={
            "current_flashcard_id": card.id,
            "is_revealed": False,
            "updated_at": datetime.utcnow()
        }).to_dict())
        return CardHidden(date=today, flashcard=card)

    async def _pick_word(self, user_id: str, exclude_ids: list[str]) -> Optional[Flashcard]:
        data = await self.db_service.query_eligible_spotlight_candidate(
            user_id, list(dict.fromkeys(exclude_ids))
        )
        return Flashcard.from_dict(data) if data else None

    async def _get_card(self, flashcard_id: str) -> Optional[Flashcard]:
        data = await self.db_service.get_flashcard(flashcard_id)
        return Flashcard.from_dict(data) if data else None

    async def _load_streak(self, user_id: str) -> Optional[UserStreak]:
        data = await self.db_service.get_user_streak(user_id)
        return UserStreak.from_dict(data) if data else None

    async def _advance_streak(self, user_id: str, today: str) -> UserStreak:
        streak = await self._load_streak(user_id) or UserStreak(user_id=user_id)
        updated, changed = apply_streak(streak, today)
        if changed:
            await self.db_service.upsert_user_streak(updated.to_dict())
        return updated

    async def _done_today(self, user_id: str, today: str) -> DoneToday:
        streak = await self._load_streak(user_id)
        return DoneToday(
            date=today,
            streak_current=streak.current if streak else 0,
            streak_best=streak.best if streak else 0
        )

    def _exhausted(self, today: str) -> Exhausted:
        return Exhausted(date=today, message=self.settings.WIDGET_EXHAUSTED_MESSAGE)
