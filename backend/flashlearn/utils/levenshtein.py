"""
Levenshtein edit distance.

The distance between two words is the minimum number of single-character
insertions, deletions or substitutions needed to turn one into the other.
Used to find orthographically confusable distractors.
"""


def levenshtein_distance(a: str, b: str) -> int:
    """
    Calculate the edit distance between two strings.

    Uses two rolling rows over the shorter string, so space is
    O(min(len(a), len(b))) and time is O(len(a) * len(b)).

    Args:
        a: First word
        b: Second word

    Returns:
        Number of edits (0 when equal)
    """
    if a == b:
        return 0
    # Keep the shorter string in the inner loop
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost   # substitution
            )
        previous = current

    return previous[-1]
