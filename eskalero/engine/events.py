"""
Game events for UI hooks and effects.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


# ===== Event Type Constants =====

# Lifecycle events
GAME_STARTED = "game_started"
GAME_COMPLETED = "game_completed"
GAME_RESET = "game_reset"

# Turn events
TURN_STARTED = "turn_started"

# Score events
SCORE_RECORDED = "score_recorded"


# ===== Event Factory Functions =====

def game_started(mode: str, players: list[dict[str, str]]) -> GameEvent:
    return GameEvent(GAME_STARTED, {
        "mode": mode,
        "players": players,  # [{"player_id": str, "name": str}, ...] in turn order
    })


def turn_started(turn_number: int, player_id: str, player_name: str) -> GameEvent:
    return GameEvent(TURN_STARTED, {
        "turn_number": turn_number,
        "player_id": player_id,
        "player_name": player_name,
    })


def score_recorded(
    player_id: str,
    column_index: int,
    category: str,
    value: int,
    player_total: int,
) -> GameEvent:
    return GameEvent(SCORE_RECORDED, {
        "player_id": player_id,
        "column_index": column_index,
        "category": category,
        "value": value,
        "is_strike": value == 0,
        "player_total": player_total,  # Grand total after this score
    })


def game_completed(ranking: list[dict[str, Any]]) -> GameEvent:
    """Emitted by the submission that fills the last open cell."""
    return GameEvent(GAME_COMPLETED, {
        "ranking": ranking,  # [{"rank": int, "player_id": str, "name": str, "total": int}, ...]
        "winner": ranking[0] if ranking else None,
    })


def game_reset() -> GameEvent:
    return GameEvent(GAME_RESET, {})
