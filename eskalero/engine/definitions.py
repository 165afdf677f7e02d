"""
Static definitions for categories and game modes.
The score sheet layout is fixed by the game rules; nothing here changes at runtime.
"""

from dataclasses import dataclass

from eskalero.engine import DICE_FACES

KIND_NUMERIC = "numeric"
KIND_COMBINATION = "combination"

MODE_CLASSIC = "classic"
MODE_TRIPLE = "triple"

# Mode label used by the original paper sheet ("3-fach" = three columns)
MODE_ALIASES = {"3-fach": MODE_TRIPLE}

# mode -> number of score columns per player
MODE_COLUMNS = {
    MODE_CLASSIC: 1,
    MODE_TRIPLE: 3,
}

STRAIGHT = "S"
FULL_HOUSE = "F"
POKER = "P"
GRANDE = "G"


@dataclass(frozen=True)
class CategoryDefinition:
    """One row of the score sheet."""
    key: str  # Row label on the sheet (e.g. "9", "K", "S")
    display_name: str
    kind: str  # "numeric" or "combination"
    face_value: int = 0  # 1..6 for numeric rows, 0 otherwise
    base_score: int = 0  # Base points for combination rows (small straight for "S")


# Dice face label -> ordinal value
FACE_VALUES: dict[str, int] = {face: i for i, face in enumerate(DICE_FACES, start=1)}

CATEGORIES: dict[str, CategoryDefinition] = {
    "9": CategoryDefinition("9", "Neuner", KIND_NUMERIC, face_value=1),
    "10": CategoryDefinition("10", "Zehner", KIND_NUMERIC, face_value=2),
    "B": CategoryDefinition("B", "Buben", KIND_NUMERIC, face_value=3),
    "D": CategoryDefinition("D", "Damen", KIND_NUMERIC, face_value=4),
    "K": CategoryDefinition("K", "Könige", KIND_NUMERIC, face_value=5),
    "A": CategoryDefinition("A", "Asse", KIND_NUMERIC, face_value=6),
    STRAIGHT: CategoryDefinition(STRAIGHT, "Straße", KIND_COMBINATION, base_score=20),
    FULL_HOUSE: CategoryDefinition(FULL_HOUSE, "Full House", KIND_COMBINATION, base_score=30),
    POKER: CategoryDefinition(POKER, "Poker", KIND_COMBINATION, base_score=50),
    GRANDE: CategoryDefinition(GRANDE, "Grande", KIND_COMBINATION, base_score=70),
}

# Sheet order, top to bottom
CATEGORY_KEYS: list[str] = list(CATEGORIES)

NUMERIC_CATEGORIES: list[str] = [k for k, c in CATEGORIES.items() if c.kind == KIND_NUMERIC]
COMBINATION_CATEGORIES: list[str] = [k for k, c in CATEGORIES.items() if c.kind == KIND_COMBINATION]


def normalize_mode(mode: str | None) -> str | None:
    """Return the canonical mode id, or None if the mode is unknown."""
    if not isinstance(mode, str):
        return None
    mode = MODE_ALIASES.get(mode, mode)
    return mode if mode in MODE_COLUMNS else None


def columns_for_mode(mode: str) -> int:
    """Number of score columns each player gets in the given mode."""
    canonical = normalize_mode(mode)
    if canonical is None:
        raise ValueError(f"Unknown game mode: {mode}")
    return MODE_COLUMNS[canonical]


def definitions_to_dict() -> dict:
    """Static definitions in a JSON-friendly shape for clients."""
    return {
        "categories": [
            {
                "key": c.key,
                "display_name": c.display_name,
                "kind": c.kind,
                "face_value": c.face_value,
                "base_score": c.base_score,
            }
            for c in CATEGORIES.values()
        ],
        "faces": [{"label": f, "value": v} for f, v in FACE_VALUES.items()],
        "modes": [{"id": m, "columns": n} for m, n in MODE_COLUMNS.items()],
    }
