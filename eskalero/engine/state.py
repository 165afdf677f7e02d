"""
Game state representation.
The reducer never mutates a state it is given; it works on a copy.
Includes dict snapshots for rendering and API responses (nothing is persisted).
"""

from dataclasses import dataclass, field
from copy import deepcopy
from typing import Any

from eskalero.engine.definitions import CATEGORY_KEYS, MODE_CLASSIC, normalize_mode

# category key -> recorded score, None while unplayed
ScoreColumn = dict[str, int | None]


def new_score_column() -> ScoreColumn:
    """Fresh column with every category unset."""
    return {key: None for key in CATEGORY_KEYS}


def _ensure_score_column(value: Any) -> ScoreColumn:
    """Parse a column from a dict; unknown keys are dropped, missing keys are unset."""
    column = new_score_column()
    if not isinstance(value, dict):
        return column
    for key in CATEGORY_KEYS:
        v = value.get(key)
        if v is None or isinstance(v, bool):
            continue
        try:
            column[key] = int(v)
        except (TypeError, ValueError):
            pass
    return column


@dataclass
class Player:
    """A player and their score columns (1 in classic mode, 3 in triple mode)."""
    player_id: str
    name: str
    columns: list[ScoreColumn] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "columns": [dict(col) for col in self.columns],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        if not isinstance(data, dict):
            data = {}
        cols = data.get("columns")
        if not isinstance(cols, list):
            cols = []
        return cls(
            player_id=str(data.get("player_id") or ""),
            name=str(data.get("name") or ""),
            columns=[_ensure_score_column(c) for c in cols],
        )


@dataclass
class GameState:
    """Complete game state."""
    players: list[Player] = field(default_factory=list)
    mode: str = MODE_CLASSIC  # "classic" or "triple"
    # Index into players of whoever may submit next
    current_turn_index: int = 0
    is_started: bool = False
    # Accepted submissions since the game started
    turn_number: int = 0

    def copy(self) -> "GameState":
        """Return a deep copy of this game state."""
        return deepcopy(self)

    def get_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert GameState to a dictionary for JSON responses."""
        return {
            "players": [p.to_dict() for p in self.players],
            "mode": self.mode,
            "current_turn_index": self.current_turn_index,
            "is_started": self.is_started,
            "turn_number": self.turn_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameState":
        """Create GameState from a dictionary (missing or malformed fields get defaults)."""
        if not isinstance(data, dict):
            data = {}
        players_raw = data.get("players") or []
        if not isinstance(players_raw, list):
            players_raw = []
        players = [Player.from_dict(p) for p in players_raw if isinstance(p, dict)]
        try:
            index = int(data.get("current_turn_index", 0))
        except (TypeError, ValueError):
            index = 0
        # Keep the turn pointer valid for the player list
        index = index % len(players) if players else 0
        try:
            turn_number = max(0, int(data.get("turn_number", 0)))
        except (TypeError, ValueError):
            turn_number = 0
        return cls(
            players=players,
            mode=normalize_mode(data.get("mode")) or MODE_CLASSIC,
            current_turn_index=index,
            is_started=bool(data.get("is_started")) and bool(players),
            turn_number=turn_number,
        )
