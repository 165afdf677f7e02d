"""
Action definitions for the game.
Actions are plain, deterministic instructions; the reducer decides whether they apply.
"""

import uuid
from dataclasses import dataclass, field

START_GAME = "start_game"
SUBMIT_SCORE = "submit_score"
RESET_GAME = "reset_game"


@dataclass
class Action:
    """Base action class. All actions have a type, acting player, and payload."""
    type: str  # "start_game", "submit_score", "reset_game"
    player_id: str | None  # Player performing the action; None for table-level commands
    payload: dict = field(default_factory=dict)


def start_game(names: list[str], mode: str, game_token: str | None = None) -> Action:
    """
    Start a new game with 2-5 players in the given order.
    game_token makes player ids unique across games; generated here so the reducer stays deterministic.
    Example: start_game(["Anna", "Ben", "Cleo"], "triple")
    """
    return Action(
        type=START_GAME,
        player_id=None,
        payload={
            "names": list(names) if isinstance(names, (list, tuple)) else names,
            "mode": mode,
            "game_token": game_token or uuid.uuid4().hex[:6],
        },
    )


def submit_score(
    player_id: str,
    column_index: int,
    category: str,
    value: int | None,
) -> Action:
    """
    Record a score in one cell of a player's sheet.
    value is the final number to store (column multiplier already applied).
    0 records a strike; None means no entry and is rejected without effect.

    Example: submit_score("player-1-3f9a", 2, "P", 231)
    """
    return Action(
        type=SUBMIT_SCORE,
        player_id=player_id,
        payload={
            "column_index": column_index,
            "category": category,
            "value": value,
        },
    )


def reset_game() -> Action:
    """Discard all players and return to the pre-game state."""
    return Action(type=RESET_GAME, player_id=None, payload={})
