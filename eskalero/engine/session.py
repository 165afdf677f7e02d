"""
GameSession: the handle a presentation layer holds for one table.

Wraps a GameState and the reducer. Commands return a CommandResult instead of
raising, so stale clicks and cancelled entries are plain outcomes the caller
can ignore. Pass the session to whatever needs it; there is no global instance.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from eskalero.engine.state import GameState, Player
from eskalero.engine.actions import Action, start_game, submit_score, reset_game
from eskalero.engine.errors import ActionRejected
from eskalero.engine.events import GameEvent
from eskalero.engine.reducer import apply_action
from eskalero.engine import queries

EventListener = Callable[[GameEvent], None]


@dataclass
class CommandResult:
    """Outcome of a command. Rejected commands carry no events and changed nothing."""
    accepted: bool
    events: list[GameEvent] = field(default_factory=list)
    rejection: str | None = None  # Human-readable reason
    code: str | None = None  # ActionRejected.code
    # True for rejections that are part of normal play (not your turn, cell filled, no value)
    expected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "accepted": self.accepted,
            "events": [e.to_dict() for e in self.events],
            "rejection": self.rejection,
            "code": self.code,
            "expected": self.expected,
        }


class GameSession:
    """One scorekeeping table: players, mode, turn pointer and score sheets."""

    def __init__(self, state: GameState | None = None):
        self._state = state if state is not None else GameState()
        self._listeners: list[EventListener] = []

    # ===== Commands =====

    def start_game(self, names: list[str], mode: str) -> CommandResult:
        return self.dispatch(start_game(names, mode))

    def submit_score(
        self,
        player_id: str,
        column_index: int,
        category: str,
        value: int | None,
    ) -> CommandResult:
        return self.dispatch(submit_score(player_id, column_index, category, value))

    def reset_game(self) -> CommandResult:
        return self.dispatch(reset_game())

    def dispatch(self, action: Action) -> CommandResult:
        """Apply an action; swap in the new state only if it was accepted."""
        try:
            new_state, events = apply_action(self._state, action)
        except ActionRejected as e:
            return CommandResult(False, rejection=str(e), code=e.code, expected=e.expected)
        self._state = new_state
        for event in events:
            for listener in list(self._listeners):
                listener(event)
        return CommandResult(True, events=events)

    def validate(self, action: Action) -> queries.ValidationResult:
        return queries.validate_action(self._state, action)

    # ===== Listeners =====

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Call listener with every event from accepted commands. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ===== Read-only views =====

    @property
    def state(self) -> GameState:
        """Copy of the current state; editing it does not affect the session."""
        return self._state.copy()

    @property
    def players(self) -> list[Player]:
        return self.state.players

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def is_started(self) -> bool:
        return self._state.is_started

    @property
    def current_turn_index(self) -> int:
        return self._state.current_turn_index

    @property
    def current_turn_player_id(self) -> str | None:
        return queries.current_turn_player_id(self._state)

    @property
    def phase(self) -> str:
        return queries.get_game_phase(self._state)

    # ===== Queries =====

    def is_complete(self) -> bool:
        return queries.is_complete(self._state)

    def total_for_player(self, player: Player | str) -> int:
        """Accepts a Player or a player id. Unknown ids total 0."""
        if isinstance(player, str):
            found = self._state.get_player(player)
            return queries.total_for_player(found) if found else 0
        return queries.total_for_player(player)

    def ranking(self) -> list[queries.RankingEntry]:
        return queries.ranking(self.state)

    def get_winner(self) -> queries.RankingEntry | None:
        return queries.get_winner(self.state)

    def open_cells(self, player_id: str | None = None) -> list[tuple[int, str]]:
        """Unset cells of the given player (default: whoever holds the turn)."""
        player_id = player_id or self.current_turn_player_id
        if player_id is None:
            return []
        return queries.get_open_cells(self._state, player_id)

    def summary(self) -> dict[str, Any]:
        return queries.get_game_summary(self._state)

    def to_dict(self) -> dict[str, Any]:
        """Snapshot plus derived summary, for rendering."""
        out = self._state.to_dict()
        out["summary"] = self.summary()
        return out
