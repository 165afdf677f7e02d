"""
Main entry point for the Eskalero Scorekeeping Engine.
Demonstrates core functionality with a short scripted classic game.
"""

from eskalero.engine.session import GameSession
from eskalero.engine.definitions import CATEGORY_KEYS, MODE_CLASSIC
from eskalero.engine.scoring import count_score, compute_combination_score, straight_score
from eskalero.engine.utils import print_score_sheet, print_ranking


def scripted_value(category: str, turn: int) -> int:
    """Deterministic scores so the demo prints the same sheet every run."""
    if category == "S":
        return straight_score(large=turn % 2 == 0, served=turn % 3 == 0)
    if category == "F":
        return compute_combination_score("F", False, "D", "9")
    if category == "P":
        return compute_combination_score("P", turn % 4 == 0, "A", "K")
    if category == "G":
        # Most Grandes are never rolled
        return 0 if turn % 2 else compute_combination_score("G", False, "K")
    return count_score(category, 1 + turn % 4)


def main():
    print("Eskalero Scorekeeping Engine")
    print("=" * 60)

    session = GameSession()
    session.subscribe(
        lambda e: print(f"  - {e.type}: {e.payload}") if e.type in ("game_started", "game_completed") else None
    )

    print("\n[SCENARIO 1: Start a classic game]")
    result = session.start_game(["Anna", "Ben", "Cleo"], MODE_CLASSIC)
    print(f"Accepted: {result.accepted}")
    print_score_sheet(session.state)

    print("\n[SCENARIO 2: Rejections leave the sheet untouched]")
    anna, ben, _ = session.players
    result = session.submit_score(ben.player_id, 0, "9", 3)
    print(f"Ben out of turn -> accepted={result.accepted}, code={result.code}")
    result = session.submit_score(anna.player_id, 0, "9", None)
    print(f"Anna cancels entry -> accepted={result.accepted}, code={result.code}")
    print(f"Turn still with: {session.current_turn_player_id}")

    print("\n[SCENARIO 3: Play the sheet out]")
    turn = 0
    for category in CATEGORY_KEYS:
        for player in session.players:
            session.submit_score(player.player_id, 0, category, scripted_value(category, turn))
            turn += 1

    print_score_sheet(session.state)
    print_ranking(session.state)
    winner = session.get_winner()
    if winner and session.is_complete():
        print(f"Winner: {winner.player.name} with {winner.total} points")


if __name__ == "__main__":
    main()
