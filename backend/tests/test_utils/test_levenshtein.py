"""
Tests for the Levenshtein edit distance.
"""
import pytest

from flashlearn.utils.levenshtein import levenshtein_distance


class TestLevenshteinDistance:
    """Tests for levenshtein_distance"""

    @pytest.mark.parametrize("a, b, expected", [
        ("kitten", "sitting", 3),
        ("cat", "bat", 1),
        ("cat", "cart", 1),
        ("cat", "at", 1),
        ("flaw", "lawn", 2),
        ("abc", "", 3),
        ("", "", 0),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    def test_identical_words_are_zero(self):
        assert levenshtein_distance("algorithm", "algorithm") == 0

    def test_is_symmetric(self):
        assert levenshtein_distance("elephant", "relevant") == levenshtein_distance("relevant", "elephant")

    def test_is_case_sensitive(self):
        assert levenshtein_distance("Cat", "cat") == 1

    def test_bounded_by_longer_length(self):
        assert levenshtein_distance("dog", "quickly") <= len("quickly")
