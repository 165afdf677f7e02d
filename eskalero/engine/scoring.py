"""
Scoring rules.
Pure functions that turn a declared dice result into points.
Callers compute a value here, then submit it to the reducer.
"""

from eskalero.engine import DICE_FACES
from eskalero.engine.definitions import (
    CATEGORIES,
    COMBINATION_CATEGORIES,
    FACE_VALUES,
    MODE_TRIPLE,
    NUMERIC_CATEGORIES,
    STRAIGHT,
    FULL_HOUSE,
    POKER,
    GRANDE,
    columns_for_mode,
    normalize_mode,
)

# Straight is keyed off the highest face in it: 10-A is large, 9-K is small
LARGE_STRAIGHT_FACE = "A"
SMALL_STRAIGHT_FACE = "K"
LARGE_STRAIGHT_BASE = 25

SERVED_MULTIPLIER = 2

# category -> (weight of primary face, weight of secondary face)
COMBINATION_FACE_WEIGHTS = {
    FULL_HOUSE: (3, 2),
    POKER: (4, 1),
    GRANDE: (5, 0),
}

MIN_COUNT = 1
MAX_COUNT = 6


def _face_value(face: str | None) -> int:
    """Ordinal value of a face label; a missing face counts 0."""
    if face is None:
        return 0
    if face not in FACE_VALUES:
        raise ValueError(f"Unknown dice face: {face}")
    return FACE_VALUES[face]


def compute_combination_score(
    category: str,
    served: bool,
    primary: str,
    secondary: str | None = None,
) -> int:
    """
    Score a combination row (S, F, P, G).

    served: the combination stood after the first roll; doubles the base score.
    primary: the face of the main group (for a straight, its highest face).
    secondary: the pair in a full house, the kicker in a poker. Ignored otherwise.

    Example: compute_combination_score("P", False, "A", "B") == 50 + 4*6 + 3 == 77
    """
    if category not in COMBINATION_CATEGORIES:
        raise ValueError(f"Category {category} is not a combination")
    multiplier = SERVED_MULTIPLIER if served else 1

    if category == STRAIGHT:
        _face_value(primary)
        base = LARGE_STRAIGHT_BASE if primary == LARGE_STRAIGHT_FACE else CATEGORIES[STRAIGHT].base_score
        return base * multiplier

    primary_weight, secondary_weight = COMBINATION_FACE_WEIGHTS[category]
    dice_sum = primary_weight * _face_value(primary)
    if secondary_weight:
        dice_sum += secondary_weight * _face_value(secondary)
    return CATEGORIES[category].base_score * multiplier + dice_sum


def straight_score(large: bool, served: bool) -> int:
    """Straight entered via the small/large toggle."""
    face = LARGE_STRAIGHT_FACE if large else SMALL_STRAIGHT_FACE
    return compute_combination_score(STRAIGHT, served, face)


def count_score(category: str, count: int) -> int:
    """Numeric row entered as "how many dice show this face"."""
    if category not in NUMERIC_CATEGORIES:
        raise ValueError(f"Category {category} is not a numeric row")
    if isinstance(count, bool) or not isinstance(count, int) or not MIN_COUNT <= count <= MAX_COUNT:
        raise ValueError(f"Dice count must be between {MIN_COUNT} and {MAX_COUNT}, got {count}")
    return count * CATEGORIES[category].face_value


def column_multiplier(mode: str, column_index: int) -> int:
    """
    Tier multiplier of a column: x1/x2/x3 left to right in triple mode, x1 in classic.
    Raises ValueError for an unknown mode or a column the mode does not have.
    """
    num_columns = columns_for_mode(mode)
    if isinstance(column_index, bool) or not isinstance(column_index, int) or not 0 <= column_index < num_columns:
        raise ValueError(f"Column {column_index} does not exist in {mode} mode")
    if normalize_mode(mode) == MODE_TRIPLE:
        return column_index + 1
    return 1


def apply_column_multiplier(value: int | None, mode: str, column_index: int) -> int | None:
    """Value to store for a raw entry in the given column. None (no entry) stays None."""
    if value is None:
        return None
    return value * column_multiplier(mode, column_index)


def max_category_score(category: str) -> int:
    """Highest raw entry a single row can take (before the column multiplier)."""
    category_def = CATEGORIES.get(category)
    if category_def is None:
        raise ValueError(f"Unknown category: {category}")
    if category in NUMERIC_CATEGORIES:
        return MAX_COUNT * category_def.face_value
    if category == STRAIGHT:
        return straight_score(large=True, served=True)
    # Full house and poker need a second face different from the first
    highest, second = DICE_FACES[-1], DICE_FACES[-2]
    return compute_combination_score(category, True, highest, second)
