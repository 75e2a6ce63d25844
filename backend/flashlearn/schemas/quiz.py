"""
Quiz Schemas
Request and response schemas for quiz API endpoints.
"""
from typing import Optional
from pydantic import BaseModel, Field

from flashlearn.models.flashcard import ProficiencyLevel, ProgressStatus
from flashlearn.models.quiz import QuizMode, QuizQuestion


# ==================== REQUEST SCHEMAS ====================

class QuestionRequest(BaseModel):
    """Request for a quiz question on one flashcard."""
    flashcard_id: str = Field(..., description="Flashcard to ask about")
    mastery_score: Optional[int] = Field(
        default=None,
        ge=0,
        description="Proficiency score override; read from progress when omitted"
    )
    mode: QuizMode = Field(default=QuizMode.SPRINT, description="sprint or drill")


class AnswerRequest(BaseModel):
    """Request to submit an answer to a generated question."""
    question: QuizQuestion = Field(..., description="Question as returned by /question")
    answer: str = Field(..., description="User's answer")


# ==================== RESPONSE SCHEMAS ====================

class QuestionResponse(BaseModel):
    """Generated quiz question."""
    mode: QuizMode
    mastery_score: int
    level: ProficiencyLevel
    question: QuizQuestion


class AnswerResponse(BaseModel):
    """Result of an answer submission."""
    is_correct: bool
    new_score: int = Field(..., ge=0)
    level: ProficiencyLevel
    status: ProgressStatus
    correct_answer: str = Field(..., description="The flashcard's headword")
