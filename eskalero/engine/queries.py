"""
Query functions for UI integration.
These derive everything the UI shows (completion, totals, ranking, open cells)
from the stored cells without mutating game state. Nothing is cached.
"""

from dataclasses import dataclass
from typing import Any

from eskalero.engine.state import GameState, Player, ScoreColumn
from eskalero.engine.actions import Action
from eskalero.engine.definitions import CATEGORY_KEYS
from eskalero.engine.scoring import column_multiplier

PHASE_NOT_STARTED = "not_started"
PHASE_IN_PROGRESS = "in_progress"
PHASE_COMPLETE = "complete"


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None
    code: str | None = None  # ActionRejected.code when invalid

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error, "code": self.code}


@dataclass
class RankingEntry:
    """One line of the final standings."""
    rank: int  # 1-based position; ties keep turn order
    player: Player
    total: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "player_id": self.player.player_id,
            "name": self.player.name,
            "total": self.total,
        }


# ===== Action Validation =====

def validate_action(state: GameState, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message and code.
    """
    # Reducer imports queries for totals and ranking
    from eskalero.engine.errors import ActionRejected
    from eskalero.engine.reducer import check_action

    try:
        check_action(state, action)
    except ActionRejected as e:
        return ValidationResult(False, str(e), e.code)
    return ValidationResult(True)


# ===== Game Phase =====

def is_complete(state: GameState) -> bool:
    """True iff a game is running and every column of every player has every category set."""
    if not state.is_started or not state.players:
        return False
    return all(
        column[key] is not None
        for player in state.players
        for column in player.columns
        for key in CATEGORY_KEYS
    )


def get_game_phase(state: GameState) -> str:
    """"not_started", "in_progress" or "complete". Complete is derived, never stored."""
    if not state.is_started:
        return PHASE_NOT_STARTED
    if is_complete(state):
        return PHASE_COMPLETE
    return PHASE_IN_PROGRESS


def current_turn_player(state: GameState) -> Player | None:
    if not state.players:
        return None
    return state.players[state.current_turn_index]


def current_turn_player_id(state: GameState) -> str | None:
    player = current_turn_player(state)
    return player.player_id if player else None


# ===== Totals & Ranking =====

def column_total(column: ScoreColumn) -> int:
    """Sum of set cells in one column; unset cells count 0."""
    return sum(column.get(key) or 0 for key in CATEGORY_KEYS)


def total_for_player(player: Player) -> int:
    """Grand total over all columns."""
    return sum(column_total(column) for column in player.columns)


def ranking(state: GameState) -> list[RankingEntry]:
    """
    All players by total, highest first.
    The sort is stable, so tied players keep their turn order and the first of
    them holds rank 1 (same winner as picking the first highest total).
    """
    totals = [(player, total_for_player(player)) for player in state.players]
    ordered = sorted(totals, key=lambda pt: pt[1], reverse=True)
    return [
        RankingEntry(rank=i, player=player, total=total)
        for i, (player, total) in enumerate(ordered, start=1)
    ]


def get_winner(state: GameState) -> RankingEntry | None:
    """Rank-1 entry, or None when there are no players."""
    entries = ranking(state)
    return entries[0] if entries else None


# ===== Sheet Queries =====

def get_open_cells(state: GameState, player_id: str) -> list[tuple[int, str]]:
    """(column_index, category) pairs the player has not filled yet, in sheet order."""
    player = state.get_player(player_id)
    if player is None:
        return []
    return [
        (col_idx, key)
        for col_idx, column in enumerate(player.columns)
        for key in CATEGORY_KEYS
        if column[key] is None
    ]


def get_game_summary(state: GameState) -> dict[str, Any]:
    """Everything a score table needs beyond the raw cells."""
    phase = get_game_phase(state)
    players = []
    for i, player in enumerate(state.players):
        players.append({
            "player_id": player.player_id,
            "name": player.name,
            "column_totals": [column_total(col) for col in player.columns],
            "total": total_for_player(player),
            "open_cells": len(get_open_cells(state, player.player_id)),
            "is_current": i == state.current_turn_index,
        })
    return {
        "phase": phase,
        "mode": state.mode,
        "turn_number": state.turn_number,
        "current_player_id": current_turn_player_id(state),
        "column_multipliers": [
            column_multiplier(state.mode, i)
            for i in range(len(state.players[0].columns) if state.players else 0)
        ],
        "players": players,
        "ranking": [e.to_dict() for e in ranking(state)] if phase == PHASE_COMPLETE else None,
    }
