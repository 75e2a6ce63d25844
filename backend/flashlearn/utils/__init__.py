"""
Utilities Module
Contains helper functions and algorithms.
"""
from flashlearn.utils.levenshtein import levenshtein_distance
from flashlearn.utils.proficiency import next_proficiency_score

__all__ = ["levenshtein_distance", "next_proficiency_score"]
