"""
Eskalero Scorekeeping Engine
Core engine without web framework or UI
"""

MIN_PLAYERS = 2
MAX_PLAYERS = 5

# Poker dice faces, lowest to highest
DICE_FACES = ["9", "10", "B", "D", "K", "A"]
