"""
Pydantic Models Module
Contains data models for all entities in the learning engine.
"""
from flashlearn.models.flashcard import Flashcard, ProficiencyLevel, ProgressStatus
from flashlearn.models.quiz import (
    QuizMode, QuizQuestion, MultipleChoiceQuestion, ScrambleQuestion, ExactTypingQuestion,
    SentenceBuilderQuestion, ContextualGapFillQuestion, DictationQuestion
)
from flashlearn.models.daily_widget import (
    DailyWidgetSession, WidgetWordHistoryRecord, UserStreak, DailyWordArchiveItem,
    WidgetState, SignedOut, CardHidden, CardRevealed, DoneToday, Exhausted
)

__all__ = [
    "Flashcard", "ProficiencyLevel", "ProgressStatus",
    "QuizMode", "QuizQuestion", "MultipleChoiceQuestion", "ScrambleQuestion", "ExactTypingQuestion",
    "SentenceBuilderQuestion", "ContextualGapFillQuestion", "DictationQuestion",
    "DailyWidgetSession", "WidgetWordHistoryRecord", "UserStreak", "DailyWordArchiveItem",
    "WidgetState", "SignedOut", "CardHidden", "CardRevealed", "DoneToday", "Exhausted"
]
