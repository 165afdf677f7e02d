"""
Single place for default game and API configuration.
Change DEFAULT_MODE to switch which mode a new game uses when no mode is provided.
"""

import os

# "classic" (one column) or "triple" (three columns, x1/x2/x3). Default matches the setup screen.
DEFAULT_MODE = "triple"

DEFAULT_PLAYER_NAMES = ["Spieler 1", "Spieler 2"]

API_TITLE = "Eskalero Scorekeeper API"
API_VERSION = "1.0.0"

# Frontend dev servers. Override with ESKALERO_CORS_ORIGINS="https://a.example,https://b.example"
_raw_origins = os.environ.get("ESKALERO_CORS_ORIGINS")
if _raw_origins:
    CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]
else:
    CORS_ORIGINS = ["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"]
