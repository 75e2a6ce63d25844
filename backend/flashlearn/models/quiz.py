"""
Quiz Models
Defines the adaptive quiz question shapes.

Each question is one variant of a tagged union keyed by ``type``:

- multiple_choice: recognition, used for NEW words (score 0-2)
- scramble: construction, used for FAMILIAR words (score 3-5)
- exact_typing: total recall, used for MASTERED words (score 6+)
- sentence_builder, contextual_gap_fill, dictation: drill mode only
"""
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field

from flashlearn.models.flashcard import Flashcard


class QuizMode(str, Enum):
    """How questions are chosen for a card"""
    SPRINT = "sprint"  # By proficiency band
    DRILL = "drill"    # Random skill drill (gap fill, sentence builder, dictation)


class MultipleChoiceQuestion(BaseModel):
    """Pick the headword among distractors"""
    type: Literal["multiple_choice"] = "multiple_choice"
    flashcard: Flashcard
    options: list[str] = Field(..., description="Correct word plus up to 3 distractors")
    correct_index: int


class ScrambleQuestion(BaseModel):
    """Rebuild the headword from its shuffled letters"""
    type: Literal["scramble"] = "scramble"
    flashcard: Flashcard
    letters: list[str]


class ExactTypingQuestion(BaseModel):
    """Type the headword from its definition"""
    type: Literal["exact_typing"] = "exact_typing"
    flashcard: Flashcard
    hint: Optional[str] = Field(default=None, description="First character of the headword")


class SentenceBuilderQuestion(BaseModel):
    """Reorder segments to build the example sentence"""
    type: Literal["sentence_builder"] = "sentence_builder"
    flashcard: Flashcard
    scrambled_segments: list[str]
    correct_sentence: str


class ContextualGapFillQuestion(BaseModel):
    """Choose the word that fills the blank"""
    type: Literal["contextual_gap_fill"] = "contextual_gap_fill"
    flashcard: Flashcard
    sentence_with_blank: str
    options: list[str]
    correct_index: int


class DictationQuestion(BaseModel):
    """Listen and type the word"""
    type: Literal["dictation"] = "dictation"
    flashcard: Flashcard
    audio_url: str


QuizQuestion = Annotated[
    Union[
        MultipleChoiceQuestion,
        ScrambleQuestion,
        ExactTypingQuestion,
        SentenceBuilderQuestion,
        ContextualGapFillQuestion,
        DictationQuestion,
    ],
    Field(discriminator="type")
]
