"""
Flashcard Models
Defines the vocabulary flashcard and mastery structures.
"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProficiencyLevel(str, Enum):
    """Mastery band derived from a flashcard's proficiency score"""
    NEW = "new"            # Score 0-2: Multiple Choice (Recognition)
    FAMILIAR = "familiar"  # Score 3-5: Scramble (Construction)
    MASTERED = "mastered"  # Score 6+: Exact Typing (Recall)

    @classmethod
    def from_score(cls, score: int) -> "ProficiencyLevel":
        """Map a proficiency score to its band. Never raises."""
        if score <= 2:
            return cls.NEW
        elif score <= 5:
            return cls.FAMILIAR
        return cls.MASTERED


class ProgressStatus(str, Enum):
    """Status stored in the progress store for a (user, flashcard) pair"""
    LEARNING = "LEARNING"
    REVIEW = "REVIEW"
    MASTERED = "MASTERED"

    @classmethod
    def from_score(cls, score: int) -> "ProgressStatus":
        if score >= 6:
            return cls.MASTERED
        elif score >= 3:
            return cls.REVIEW
        return cls.LEARNING


class Flashcard(BaseModel):
    """A vocabulary flashcard. Read-only to the learning engine."""
    id: str
    topic_id: str = ""
    word: str = Field(default="", description="The headword this card teaches")
    pronunciation: str = ""
    ipa: str = Field(default="", description="IPA phonetic transcription")
    part_of_speech: str = Field(default="", description="NOUN, VERB, ADJECTIVE, etc.")
    definition: str = ""
    example_sentence: str = ""
    image_url: str = ""
    pronunciation_url: Optional[str] = None
    synonyms: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: dict) -> "Flashcard":
        """Create from a stored document (camelCase keys)"""
        created_at = data.get("createdAt")
        return cls(
            id=data["id"],
            topic_id=data.get("topicId", ""),
            word=data.get("word", ""),
            pronunciation=data.get("pronunciation", ""),
            ipa=data.get("ipa", ""),
            part_of_speech=data.get("partOfSpeech", ""),
            definition=data.get("definition", ""),
            example_sentence=data.get("exampleSentence", ""),
            image_url=data.get("imageUrl", ""),
            pronunciation_url=data.get("pronunciationUrl"),
            synonyms=data.get("synonyms") or [],
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.utcnow()
        )
