"""
Main game reducer.
Applies actions to state, enforcing turn order and write-once cells.
Returns (new_state, events) where events describe what happened.
Rejected actions raise an ActionRejected subclass and leave the input state as it was.
"""

from eskalero.engine import MIN_PLAYERS, MAX_PLAYERS
from eskalero.engine.state import GameState, Player, new_score_column
from eskalero.engine.actions import Action, START_GAME, SUBMIT_SCORE, RESET_GAME
from eskalero.engine.definitions import CATEGORIES, columns_for_mode, normalize_mode
from eskalero.engine.errors import (
    CellAlreadySet,
    GameAlreadyStarted,
    GameNotStarted,
    InvalidCell,
    InvalidConfiguration,
    InvalidScore,
    MissingValue,
    NotYourTurn,
    UnknownAction,
)
from eskalero.engine.events import (
    GameEvent,
    game_started,
    turn_started,
    score_recorded,
    game_completed,
    game_reset,
)
from eskalero.engine.queries import is_complete, ranking, total_for_player


def check_action(state: GameState, action: Action) -> None:
    """
    Raise the ActionRejected subclass that applies to this action, if any.
    Shared by apply_action and queries.validate_action.
    """
    if action.type == START_GAME:
        _check_start_game(state, action)
    elif action.type == SUBMIT_SCORE:
        _check_submit_score(state, action)
    elif action.type == RESET_GAME:
        return
    else:
        raise UnknownAction(f"Unknown action type: {action.type}")


def _check_start_game(state: GameState, action: Action) -> None:
    if state.is_started:
        raise GameAlreadyStarted("A game is already in progress. Reset it first.")

    names = action.payload.get("names")
    if not isinstance(names, list):
        raise InvalidConfiguration("Player names must be a list")
    if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
        raise InvalidConfiguration(
            f"A game needs {MIN_PLAYERS} to {MAX_PLAYERS} players, got {len(names)}"
        )
    for i, name in enumerate(names):
        if not isinstance(name, str) or not name.strip():
            raise InvalidConfiguration(f"Player {i + 1} has an empty name")

    if normalize_mode(action.payload.get("mode")) is None:
        raise InvalidConfiguration(f"Unknown game mode: {action.payload.get('mode')}")


def _check_submit_score(state: GameState, action: Action) -> None:
    if not state.is_started or not state.players:
        raise GameNotStarted("No game in progress")

    current = state.players[state.current_turn_index]
    if action.player_id != current.player_id:
        raise NotYourTurn(f"Not {action.player_id}'s turn. Current player: {current.player_id}")

    column_index = action.payload.get("column_index")
    category = action.payload.get("category")
    if (
        isinstance(column_index, bool)
        or not isinstance(column_index, int)
        or not 0 <= column_index < len(current.columns)
    ):
        raise InvalidCell(f"No column {column_index} in a {state.mode} game")
    if category not in CATEGORIES:
        raise InvalidCell(f"Unknown category: {category}")

    existing = current.columns[column_index][category]
    if existing is not None:
        raise CellAlreadySet(f"Column {column_index} {category} already holds {existing}")

    value = action.payload.get("value")
    if value is None:
        raise MissingValue("No score entered")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScore(f"Score must be an integer, got {value!r}")
    if value < 0:
        raise InvalidScore(f"Score cannot be negative, got {value}")


def apply_action(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Apply a single action to the current state, returning new state and events.

    Validates (raising ActionRejected):
    - start_game: no game running, 2-5 non-empty names, known mode
    - submit_score: game running, acting player holds the turn, cell exists and is unset,
      value is a non-negative integer

    Args:
        state: Current game state (not modified)
        action: Action to apply

    Returns:
        Tuple of (new_state, events) where events describe what happened
    """
    check_action(state, action)

    new_state = state.copy()
    events: list[GameEvent] = []

    if action.type == START_GAME:
        new_state, evts = _handle_start_game(new_state, action)
        events.extend(evts)

    elif action.type == SUBMIT_SCORE:
        new_state, evts = _handle_submit_score(new_state, action)
        events.extend(evts)

    elif action.type == RESET_GAME:
        new_state, evts = _handle_reset_game(new_state)
        events.extend(evts)

    return new_state, events


def _handle_start_game(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """Create players in input order with fresh columns; first player starts."""
    mode = normalize_mode(action.payload["mode"])
    num_columns = columns_for_mode(mode)
    game_token = action.payload.get("game_token") or "0"

    state.players = [
        Player(
            player_id=f"player-{i + 1}-{game_token}",
            name=name.strip(),
            columns=[new_score_column() for _ in range(num_columns)],
        )
        for i, name in enumerate(action.payload["names"])
    ]
    state.mode = mode
    state.current_turn_index = 0
    state.is_started = True
    state.turn_number = 0

    first = state.players[0]
    return state, [
        game_started(mode, [{"player_id": p.player_id, "name": p.name} for p in state.players]),
        turn_started(state.turn_number + 1, first.player_id, first.name),
    ]


def _handle_submit_score(state: GameState, action: Action) -> tuple[GameState, list[GameEvent]]:
    """
    Write the cell and pass the turn to the next player.
    The rotation is a fixed round-robin; it does not skip players whose sheet is full.
    """
    column_index = action.payload["column_index"]
    category = action.payload["category"]
    value = action.payload["value"]

    player = state.players[state.current_turn_index]
    player.columns[column_index][category] = value

    events = [
        score_recorded(player.player_id, column_index, category, value, total_for_player(player)),
    ]

    state.turn_number += 1
    state.current_turn_index = (state.current_turn_index + 1) % len(state.players)

    if is_complete(state):
        events.append(game_completed([e.to_dict() for e in ranking(state)]))
    else:
        nxt = state.players[state.current_turn_index]
        events.append(turn_started(state.turn_number + 1, nxt.player_id, nxt.name))

    return state, events


def _handle_reset_game(state: GameState) -> tuple[GameState, list[GameEvent]]:
    """Back to the pre-game state. The last selected mode is kept."""
    state.players = []
    state.current_turn_index = 0
    state.is_started = False
    state.turn_number = 0
    return state, [game_reset()]
