"""
GameSession: commands as outcomes, listeners, and read-only snapshots.
"""

from eskalero.engine.definitions import CATEGORY_KEYS
from eskalero.engine.actions import Action, submit_score
from eskalero.engine.scoring import apply_column_multiplier, compute_combination_score
from eskalero.engine.session import GameSession


def started_session(names=("Anna", "Ben"), mode="classic") -> GameSession:
    session = GameSession()
    result = session.start_game(list(names), mode)
    assert result.accepted
    return session


def test_new_session_is_not_started():
    session = GameSession()
    assert not session.is_started
    assert session.phase == "not_started"
    assert session.players == []
    assert session.current_turn_player_id is None
    assert not session.is_complete()


def test_start_sets_first_player_on_turn():
    session = started_session(["Anna", "Ben", "Cleo"], "triple")
    assert session.mode == "triple"
    assert session.current_turn_player_id == session.players[0].player_id
    assert session.phase == "in_progress"


def test_player_ids_differ_between_games():
    first = started_session()
    second = started_session()
    assert first.players[0].player_id != second.players[0].player_id


def test_invalid_configuration_is_a_rejected_result():
    session = GameSession()
    result = session.start_game(["Solo"], "classic")
    assert not result.accepted
    assert result.code == "invalid_configuration"
    assert not result.expected
    assert not session.is_started


def test_expected_rejections_are_flagged():
    session = started_session()
    anna, ben = session.players

    result = session.submit_score(ben.player_id, 0, "9", 2)
    assert (result.accepted, result.code, result.expected) == (False, "not_your_turn", True)

    result = session.submit_score(anna.player_id, 0, "9", None)
    assert (result.accepted, result.code, result.expected) == (False, "missing_value", True)

    session.submit_score(anna.player_id, 0, "9", 2)
    session.submit_score(ben.player_id, 0, "9", 3)
    result = session.submit_score(anna.player_id, 0, "9", 4)
    assert (result.accepted, result.code, result.expected) == (False, "cell_already_set", True)
    assert result.events == []


def test_rejected_submission_keeps_snapshot():
    session = started_session()
    session.submit_score(session.current_turn_player_id, 0, "A", 18)
    before = session.state.to_dict()
    session.submit_score(session.players[0].player_id, 0, "A", 24)  # Ben's turn
    session.submit_score(session.current_turn_player_id, 0, "A", None)
    assert session.state.to_dict() == before


def test_snapshot_cannot_change_session():
    session = started_session()
    snapshot = session.state
    snapshot.players[0].columns[0]["9"] = 99
    snapshot.current_turn_index = 1
    assert session.players[0].columns[0]["9"] is None
    assert session.current_turn_index == 0


def test_totals_and_ranking():
    session = started_session(["Anna", "Ben", "Cleo"])
    anna, ben, cleo = session.players
    session.submit_score(anna.player_id, 0, "P", compute_combination_score("P", False, "A", "B"))
    session.submit_score(ben.player_id, 0, "G", compute_combination_score("G", True, "A"))
    session.submit_score(cleo.player_id, 0, "P", 77)
    assert session.total_for_player(anna.player_id) == 77
    assert session.total_for_player(session.players[1]) == 170
    assert session.total_for_player("ghost") == 0
    assert [e.player.name for e in session.ranking()] == ["Ben", "Anna", "Cleo"]
    assert session.get_winner().player.name == "Ben"


def test_triple_column_entry_stores_multiplied_value():
    session = started_session(mode="triple")
    raw = compute_combination_score("F", False, "D", "10")
    value = apply_column_multiplier(raw, session.mode, 2)
    session.submit_score(session.current_turn_player_id, 2, "F", value)
    assert session.players[0].columns[2]["F"] == 138


def test_listener_receives_events_from_accepted_commands_only():
    session = GameSession()
    received = []
    unsubscribe = session.subscribe(lambda e: received.append(e.type))

    session.start_game(["Anna", "Ben"], "classic")
    session.submit_score(session.players[1].player_id, 0, "9", 1)  # rejected
    session.submit_score(session.players[0].player_id, 0, "9", 1)
    assert received == ["game_started", "turn_started", "score_recorded", "turn_started"]

    unsubscribe()
    session.reset_game()
    assert received[-1] == "turn_started"


def test_full_game_through_session():
    session = started_session()
    completed = []
    session.subscribe(lambda e: completed.append(e.payload) if e.type == "game_completed" else None)
    for key in CATEGORY_KEYS:
        for player in session.players:
            assert session.submit_score(player.player_id, 0, key, 0).accepted
    assert session.is_complete()
    assert session.phase == "complete"
    assert len(completed) == 1
    # All strikes: tie at 0, first player wins
    assert completed[0]["winner"]["name"] == "Anna"
    assert session.open_cells() == []


def test_open_cells_default_to_current_player():
    session = started_session(mode="triple")
    assert len(session.open_cells()) == 3 * len(CATEGORY_KEYS)
    session.submit_score(session.current_turn_player_id, 0, "9", 1)
    assert len(session.open_cells()) == 3 * len(CATEGORY_KEYS)
    assert len(session.open_cells(session.players[0].player_id)) == 3 * len(CATEGORY_KEYS) - 1


def test_validate_without_applying():
    session = started_session()
    action = submit_score(session.current_turn_player_id, 0, "K", 10)
    assert session.validate(action).valid
    assert session.players[0].columns[0]["K"] is None


def test_reset_and_restart():
    session = started_session()
    session.submit_score(session.current_turn_player_id, 0, "K", 10)
    assert not session.start_game(["Cleo", "Dora"], "classic").accepted
    assert session.reset_game().accepted
    assert session.players == []
    assert session.current_turn_index == 0
    assert session.start_game(["Cleo", "Dora"], "triple").accepted
    assert [p.name for p in session.players] == ["Cleo", "Dora"]


def test_to_dict_includes_summary():
    session = started_session()
    out = session.to_dict()
    assert out["is_started"] is True
    assert out["summary"]["phase"] == "in_progress"
    assert len(out["players"]) == 2


def test_unknown_action_type_is_a_rejected_result():
    session = started_session()
    before = session.state.to_dict()
    result = session.dispatch(Action(type="undo_score", player_id=session.current_turn_player_id))
    assert not result.accepted
    assert result.code == "unknown_action"
    assert not result.expected
    assert session.state.to_dict() == before
    assert not session.validate(Action(type="undo_score", player_id=None)).valid
