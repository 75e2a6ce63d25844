"""
Proficiency score updates after a quiz answer.

Correct answers add one point; wrong answers take two, never going below
zero.
"""

CORRECT_REWARD = 1
WRONG_PENALTY = 2


def next_proficiency_score(current_score: int, is_correct: bool) -> int:
    """Score after answering a question on the card."""
    current_score = max(0, current_score)
    if is_correct:
        return current_score + CORRECT_REWARD
    return max(0, current_score - WRONG_PENALTY)
