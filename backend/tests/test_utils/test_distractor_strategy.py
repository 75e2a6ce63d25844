"""
Tests for the distractor strategies and the composite generator.
"""
import random
import pytest

from flashlearn.utils.distractor_strategy import (
    LevenshteinDistractorStrategy,
    SemanticDistractorStrategy,
    RandomDistractorStrategy,
    SmartDistractorGenerator
)


@pytest.fixture
def rng():
    return random.Random(42)


class TestLevenshteinStrategy:
    """Priority A: visual similarity"""

    def test_picks_close_words_only(self, sample_flashcard, sample_pool, rng):
        strategy = LevenshteinDistractorStrategy(threshold=3, rng=rng)
        words = strategy.generate(sample_flashcard, sample_pool, 10)

        assert sorted(words) == ["bat", "hat"]

    def test_threshold_is_strict(self, make_flashcard, rng):
        target = make_flashcard("t", "cat")
        # "dog" is exactly 3 edits away
        pool = [make_flashcard("d", "dog")]
        strategy = LevenshteinDistractorStrategy(threshold=3, rng=rng)

        assert strategy.generate(target, pool, 3) == []

    def test_never_returns_target_card(self, sample_flashcard, rng):
        strategy = LevenshteinDistractorStrategy(threshold=3, rng=rng)

        assert strategy.generate(sample_flashcard, [sample_flashcard], 3) == []

    def test_respects_count(self, sample_flashcard, sample_pool, rng):
        strategy = LevenshteinDistractorStrategy(threshold=3, rng=rng)

        assert len(strategy.generate(sample_flashcard, sample_pool, 1)) == 1

    def test_zero_count_returns_empty(self, sample_flashcard, sample_pool, rng):
        strategy = LevenshteinDistractorStrategy(threshold=3, rng=rng)

        assert strategy.generate(sample_flashcard, sample_pool, 0) == []


class TestSemanticStrategy:
    """Priority B: same part of speech"""

    def test_picks_same_part_of_speech(self, sample_flashcard, sample_pool, rng):
        strategy = SemanticDistractorStrategy(rng=rng)
        words = strategy.generate(sample_flashcard, sample_pool, 10)

        assert sorted(words) == ["bat", "dog", "elephant", "hat"]

    def test_no_match_returns_empty(self, make_flashcard, rng):
        target = make_flashcard("t", "swiftly", "ADVERB")
        pool = [make_flashcard("n", "table", "NOUN")]

        assert SemanticDistractorStrategy(rng=rng).generate(target, pool, 3) == []


class TestRandomStrategy:
    """Fallback: any other word"""

    def test_accepts_any_other_card(self, sample_flashcard, sample_pool, rng):
        words = RandomDistractorStrategy(rng=rng).generate(sample_flashcard, sample_pool, 10)

        assert "cat" not in words
        assert len(words) == 6

    def test_empty_pool(self, sample_flashcard, rng):
        assert RandomDistractorStrategy(rng=rng).generate(sample_flashcard, [], 3) == []


class TestSmartDistractorGenerator:
    """Composite chain A -> B -> random"""

    def test_returns_three_distinct_distractors(self, sample_flashcard, sample_pool, rng):
        generator = SmartDistractorGenerator(rng=rng)
        distractors = generator.get_distractors(sample_flashcard, sample_pool, 3)

        assert len(distractors) == 3
        assert len(set(distractors)) == 3
        assert "cat" not in distractors

    def test_visual_matches_come_first(self, sample_flashcard, sample_pool, rng):
        generator = SmartDistractorGenerator(rng=rng)
        distractors = generator.get_distractors(sample_flashcard, sample_pool, 3)

        # Both close spellings are always used before semantic fillers
        assert set(distractors[:2]) == {"bat", "hat"}
        assert distractors[2] in {"dog", "elephant"}

    def test_random_fills_remaining_gap(self, make_flashcard, rng):
        target = make_flashcard("t", "table", "NOUN")
        pool = [
            target,
            make_flashcard("a", "swiftly", "ADVERB"),
            make_flashcard("b", "jump", "VERB"),
        ]
        distractors = SmartDistractorGenerator(rng=rng).get_distractors(target, pool, 3)

        assert sorted(distractors) == ["jump", "swiftly"]

    def test_sparse_pool_returns_fewer(self, sample_flashcard, make_flashcard, rng):
        pool = [sample_flashcard, make_flashcard("b", "bat")]
        distractors = SmartDistractorGenerator(rng=rng).get_distractors(sample_flashcard, pool, 3)

        assert distractors == ["bat"]

    def test_empty_pool_returns_empty(self, sample_flashcard, rng):
        assert SmartDistractorGenerator(rng=rng).get_distractors(sample_flashcard, [], 3) == []

    def test_duplicate_spelling_of_target_is_skipped(self, sample_flashcard, make_flashcard, rng):
        pool = [
            sample_flashcard,
            make_flashcard("other_cat", "cat"),
            make_flashcard("b", "bat"),
        ]
        distractors = SmartDistractorGenerator(rng=rng).get_distractors(sample_flashcard, pool, 3)

        assert distractors == ["bat"]

    def test_duplicate_spellings_count_once(self, sample_flashcard, make_flashcard, rng):
        pool = [
            make_flashcard("b1", "bat"),
            make_flashcard("b2", "bat"),
            make_flashcard("h", "hat"),
        ]
        distractors = SmartDistractorGenerator(rng=rng).get_distractors(sample_flashcard, pool, 3)

        assert sorted(distractors) == ["bat", "hat"]

    def test_strategy_order_is_fixed(self):
        generator = SmartDistractorGenerator()

        assert [type(s) for s in generator.strategies] == [
            LevenshteinDistractorStrategy,
            SemanticDistractorStrategy,
            RandomDistractorStrategy
        ]
