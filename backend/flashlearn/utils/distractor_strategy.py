"""
Distractor Strategies
Generates plausible wrong answers for recognition (multiple choice) questions.

Strategies are tried in a fixed priority order:
1. Visual similarity: words within a small edit distance of the target
2. Semantic similarity: words sharing the target's part of speech
3. Random: any other word in the deck, only to fill gaps

A strategy may return fewer words than requested (sparse pools are normal).
None of them ever raises; an empty list is a valid answer.
"""
import random
from abc import ABC, abstractmethod
from typing import Iterable

from flashlearn.config import settings
from flashlearn.models.flashcard import Flashcard
from flashlearn.utils.levenshtein import levenshtein_distance


class DistractorStrategy(ABC):
    """A single way of picking distractor words from a card pool."""

    def __init__(self, rng=None):
        self.rng = rng or random

    @abstractmethod
    def accepts(self, target: Flashcard, candidate: Flashcard) -> bool:
        """Whether candidate is a suitable distractor for target"""
        pass

    def generate(self, target: Flashcard, pool: Iterable[Flashcard], count: int) -> list[str]:
        """
        Pick up to ``count`` distinct words from the pool.

        Args:
            target: Card being asked
            pool: Candidate cards (may include the target itself)
            count: Maximum number of words

        Returns:
            Distinct words in random order, never the target's own card
        """
        if count <= 0:
            return []

        words: list[str] = []
        for card in pool:
            if card.id == target.id or not self.accepts(target, card):
                continue
            if card.word not in words:
                words.append(card.word)

        return self.rng.sample(words, min(count, len(words)))


class LevenshteinDistractorStrategy(DistractorStrategy):
    """Priority A: visually similar words (edit distance below the threshold)."""

    def __init__(self, threshold: int | None = None, rng=None):
        super().__init__(rng=rng)
        self.threshold = threshold if threshold is not None else settings.DISTRACTOR_SIMILARITY_THRESHOLD

    def accepts(self, target: Flashcard, candidate: Flashcard) -> bool:
        return levenshtein_distance(target.word, candidate.word) < self.threshold


class SemanticDistractorStrategy(DistractorStrategy):
    """Priority B: words sharing the same part of speech."""

    def accepts(self, target: Flashcard, candidate: Flashcard) -> bool:
        return candidate.part_of_speech == target.part_of_speech


class RandomDistractorStrategy(DistractorStrategy):
    """Fallback: any other word from the deck."""

    def accepts(self, target: Flashcard, candidate: Flashcard) -> bool:
        return True


class SmartDistractorGenerator:
    """
    Composite generator that chains strategies to find the best distractors.

    Each later strategy is asked only for the remaining deficit, drawn from
    the words no earlier strategy picked. Words are
    deduplicated by spelling, since two cards with the same spelling are
    indistinguishable on screen, and the target's own headword is never used.
    """

    def __init__(
        self,
        levenshtein_strategy: LevenshteinDistractorStrategy | None = None,
        semantic_strategy: SemanticDistractorStrategy | None = None,
        random_strategy: RandomDistractorStrategy | None = None,
        rng=None
    ):
        self.strategies: list[DistractorStrategy] = [
            levenshtein_strategy or LevenshteinDistractorStrategy(rng=rng),
            semantic_strategy or SemanticDistractorStrategy(rng=rng),
            random_strategy or RandomDistractorStrategy(rng=rng),
        ]

    def get_distractors(
        self,
        target: Flashcard,
        pool: list[Flashcard],
        count: int | None = None
    ) -> list[str]:
        """
        Get up to ``count`` distinct distractor words for target.

        Returns fewer (possibly none) when the pool is too small.
        """
        if count is None:
            count = settings.DISTRACTOR_COUNT

        distractors: list[str] = []
        for strategy in self.strategies:
            if len(distractors) >= count:
                break
            needed = count - len(distractors)
            # Later strategies only see words not picked yet
            remaining = [
                card for card in pool
                if card.word != target.word and card.word not in distractors
            ]
            for word in strategy.generate(target, remaining, needed):
                if word not in distractors:
                    distractors.append(word)

        return distractors[:count]


# Singleton instance
smart_distractor_generator = SmartDistractorGenerator()
