"""
Derived state: totals, ranking, open cells, validation and the summary used for rendering.
"""

from eskalero.engine.state import GameState, Player, new_score_column
from eskalero.engine.actions import start_game, submit_score, reset_game
from eskalero.engine.reducer import apply_action
from eskalero.engine.definitions import CATEGORY_KEYS
from eskalero.engine.queries import (
    column_total,
    current_turn_player_id,
    get_game_summary,
    get_open_cells,
    get_winner,
    ranking,
    total_for_player,
    validate_action,
)


def make_player(player_id: str, name: str, *columns: dict) -> Player:
    """Helper: player whose columns start unset and are overlaid with the given scores."""
    cols = []
    for scores in columns:
        col = new_score_column()
        col.update(scores)
        cols.append(col)
    return Player(player_id=player_id, name=name, columns=cols)


def started_state(*players: Player) -> GameState:
    return GameState(players=list(players), mode="classic", is_started=True)


# ===== Totals =====

def test_total_counts_only_set_cells():
    player = make_player("p1", "Anna", {"K": 5})
    assert total_for_player(player) == 5


def test_total_of_fresh_player_is_zero():
    assert total_for_player(make_player("p1", "Anna", {})) == 0


def test_total_sums_all_columns():
    player = make_player("p1", "Anna", {"9": 3, "G": 0}, {"P": 154}, {"S": 150, "A": 54})
    assert [column_total(c) for c in player.columns] == [3, 154, 204]
    assert total_for_player(player) == 361


# ===== Ranking =====

def test_ranking_orders_by_total_descending():
    state = started_state(
        make_player("p1", "Anna", {"9": 2}),
        make_player("p2", "Ben", {"9": 5}),
        make_player("p3", "Cleo", {"9": 3}),
    )
    entries = ranking(state)
    assert [e.player.name for e in entries] == ["Ben", "Cleo", "Anna"]
    assert [e.total for e in entries] == [5, 3, 2]
    assert [e.rank for e in entries] == [1, 2, 3]


def test_ranking_is_stable_for_ties():
    state = started_state(
        make_player("p1", "Anna", {"9": 1}),
        make_player("p2", "Ben", {"9": 4}),
        make_player("p3", "Cleo", {"10": 4}),
        make_player("p4", "Dora", {"B": 3, "9": 1}),
    )
    names = [e.player.name for e in ranking(state)]
    assert names == ["Ben", "Cleo", "Dora", "Anna"]


def test_winner_on_tie_is_first_in_turn_order():
    state = started_state(
        make_player("p1", "Anna", {"A": 12}),
        make_player("p2", "Ben", {"A": 12}),
    )
    assert get_winner(state).player.name == "Anna"


def test_no_winner_without_players():
    assert get_winner(GameState()) is None
    assert ranking(GameState()) == []


def test_ranking_entry_to_dict():
    state = started_state(make_player("p1", "Anna", {"K": 25}), make_player("p2", "Ben", {}))
    assert ranking(state)[0].to_dict() == {"rank": 1, "player_id": "p1", "name": "Anna", "total": 25}


# ===== Open cells =====

def test_open_cells_in_sheet_order():
    player = make_player("p1", "Anna", {"9": 1, "S": 20}, {"G": 0})
    state = started_state(player, make_player("p2", "Ben", {}, {}))
    cells = get_open_cells(state, "p1")
    assert len(cells) == 2 * len(CATEGORY_KEYS) - 3
    assert cells[0] == (0, "10")
    assert (0, "S") not in cells
    assert (1, "G") not in cells
    assert cells[-1] == (1, "P")


def test_open_cells_unknown_player():
    assert get_open_cells(started_state(make_player("p1", "Anna", {})), "ghost") == []


# ===== Validation =====

def test_validate_does_not_apply():
    state, _ = apply_action(GameState(), start_game(["Anna", "Ben"], "classic", game_token="t"))
    before = state.to_dict()
    result = validate_action(state, submit_score("player-1-t", 0, "9", 3))
    assert result.valid
    assert state.to_dict() == before


def test_validate_reports_rejection_code():
    state, _ = apply_action(GameState(), start_game(["Anna", "Ben"], "classic", game_token="t"))
    result = validate_action(state, submit_score("player-2-t", 0, "9", 3))
    assert not result.valid
    assert result.code == "not_your_turn"

    result = validate_action(GameState(), start_game(["Solo"], "classic"))
    assert result.to_dict()["code"] == "invalid_configuration"


def test_reset_is_always_valid():
    assert validate_action(GameState(), reset_game()).valid


# ===== Summary =====

def test_summary_while_playing():
    state, _ = apply_action(GameState(), start_game(["Anna", "Ben"], "triple", game_token="t"))
    state, _ = apply_action(state, submit_score("player-1-t", 1, "F", 92))
    summary = get_game_summary(state)
    assert summary["phase"] == "in_progress"
    assert summary["current_player_id"] == current_turn_player_id(state) == "player-2-t"
    assert summary["column_multipliers"] == [1, 2, 3]
    anna = summary["players"][0]
    assert anna["column_totals"] == [0, 92, 0]
    assert anna["total"] == 92
    assert anna["open_cells"] == 29
    assert summary["players"][1]["is_current"]
    assert summary["ranking"] is None


def test_summary_before_start():
    summary = get_game_summary(GameState())
    assert summary["phase"] == "not_started"
    assert summary["current_player_id"] is None
    assert summary["players"] == []
    assert summary["column_multipliers"] == []


def test_state_round_trips_through_dict():
    state = started_state(make_player("p1", "Anna", {"K": 25, "G": 0}), make_player("p2", "Ben", {}))
    state.current_turn_index = 1
    restored = GameState.from_dict(state.to_dict())
    assert restored == state
