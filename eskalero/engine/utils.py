"""
Console helpers for demos and the terminal scorekeeper.
"""

from eskalero.engine.state import GameState
from eskalero.engine.definitions import CATEGORIES, CATEGORY_KEYS
from eskalero.engine.scoring import column_multiplier
from eskalero.engine.queries import (
    column_total,
    current_turn_player_id,
    get_game_phase,
    ranking,
    total_for_player,
    PHASE_COMPLETE,
)

CELL_WIDTH = 6
LABEL_WIDTH = 12


def format_cell(value: int | None) -> str:
    """Blank for unplayed, "-" for a strike, the number otherwise."""
    if value is None:
        return ""
    if value == 0:
        return "-"
    return str(value)


def render_score_sheet(state: GameState) -> str:
    """Score table as text: one row per category, one cell per player column."""
    if not state.players:
        return "(no game in progress)"

    num_columns = len(state.players[0].columns)
    current_id = current_turn_player_id(state)
    lines = []

    header = f"{'':<{LABEL_WIDTH}}"
    for player in state.players:
        marker = "*" if player.player_id == current_id else " "
        header += f"|{marker}{player.name[:CELL_WIDTH * num_columns - 2]:<{CELL_WIDTH * num_columns - 2}}"
    lines.append(header)

    if num_columns > 1:
        tiers = f"{'':<{LABEL_WIDTH}}"
        for _ in state.players:
            tiers += "|" + "".join(
                f"{'x' + str(column_multiplier(state.mode, i)):>{CELL_WIDTH}}" for i in range(num_columns)
            )[1:]
        lines.append(tiers)

    lines.append("-" * len(header))
    for key in CATEGORY_KEYS:
        row = f"{CATEGORIES[key].display_name:<{LABEL_WIDTH}}"
        for player in state.players:
            row += "|" + "".join(
                f"{format_cell(col[key]):>{CELL_WIDTH}}" for col in player.columns
            )[1:]
        lines.append(row)
    lines.append("-" * len(header))

    if num_columns > 1:
        row = f"{'Spalte':<{LABEL_WIDTH}}"
        for player in state.players:
            row += "|" + "".join(
                f"{column_total(col):>{CELL_WIDTH}}" for col in player.columns
            )[1:]
        lines.append(row)

    row = f"{'Total':<{LABEL_WIDTH}}"
    for player in state.players:
        row += f"|{total_for_player(player):>{CELL_WIDTH * num_columns - 1}}"
    lines.append(row)
    return "\n".join(lines)


def print_score_sheet(state: GameState) -> None:
    """Print the score table with a phase banner."""
    phase = get_game_phase(state)
    print(f"\n{'='*60}")
    print(f"Mode: {state.mode.upper()} | Phase: {phase.upper()} | Turn: {state.turn_number + 1}")
    print(f"{'='*60}")
    print(render_score_sheet(state))
    print()


def print_ranking(state: GameState) -> None:
    """Print final standings (or current standings while the game runs)."""
    title = "FINAL STANDINGS" if get_game_phase(state) == PHASE_COMPLETE else "STANDINGS"
    print(f"\n{'='*60}")
    print(title)
    print(f"{'='*60}")
    for entry in ranking(state):
        print(f"  {entry.rank}. {entry.player.name:<20} {entry.total:>5}")
    print()
