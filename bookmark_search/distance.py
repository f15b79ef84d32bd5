"""Edit distance and string similarity."""
import math
from typing import Union

INFINITY = math.inf

DEFAULT_MAX_DISTANCE = 3
DEFAULT_FUZZY_THRESHOLD = 0.7


def levenshtein(a: str, b: str, max_distance: int = DEFAULT_MAX_DISTANCE) -> Union[int, float]:
    """Compute the Levenshtein distance between two strings.

    Uses a two-row dynamic programme and gives up as soon as the distance
    is known to exceed max_distance.

    Args:
        a: First string
        b: Second string
        max_distance: Largest distance worth computing

    Returns:
        The edit distance, or INFINITY if it is greater than max_distance
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    if abs(len(a) - len(b)) > max_distance:
        return INFINITY

    # Keep the row as short as possible
    if len(a) > len(b):
        a, b = b, a

    prev_row = list(range(len(a) + 1))
    curr_row = [0] * (len(a) + 1)

    for j in range(1, len(b) + 1):
        curr_row[0] = j
        row_min = j
        char_b = b[j - 1]

        for i in range(1, len(a) + 1):
            cost = 0 if a[i - 1] == char_b else 1
            curr_row[i] = min(
                prev_row[i] + 1,         # deletion
                curr_row[i - 1] + 1,     # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            if curr_row[i] < row_min:
                row_min = curr_row[i]

        # Later rows can never go below this row's minimum
        if row_min > max_distance:
            return INFINITY

        prev_row, curr_row = curr_row, prev_row

    distance = prev_row[len(a)]
    return distance if distance <= max_distance else INFINITY


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1] based on normalized edit distance."""
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    max_len = max(len(a), len(b))
    distance = levenshtein(a.lower(), b.lower(), max_len)
    if distance == INFINITY:
        return 0.0
    return 1.0 - distance / max_len


def is_fuzzy_match(a: str, b: str, threshold: float = DEFAULT_FUZZY_THRESHOLD) -> bool:
    return similarity(a, b) >= threshold
