"""
FastAPI backend for the Eskalero scorekeeper.
Provides REST endpoints a single-device web client uses to keep score.
Sessions live in memory for the lifetime of the process.
"""

import threading
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from eskalero.config import (
    API_TITLE,
    API_VERSION,
    CORS_ORIGINS,
    DEFAULT_MODE,
    DEFAULT_PLAYER_NAMES,
)
from eskalero.engine import MIN_PLAYERS, MAX_PLAYERS
from eskalero.engine.definitions import CATEGORIES, definitions_to_dict
from eskalero.engine.scoring import (
    apply_column_multiplier,
    column_multiplier,
    compute_combination_score,
    count_score,
    max_category_score,
    straight_score,
)
from eskalero.engine.session import CommandResult, GameSession

app = FastAPI(
    title=API_TITLE,
    description="Backend API for Eskalero - a dice game score sheet",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.middleware("http")
async def log_requests(request, call_next):
    """Log method and path so 500s can be traced to the failing endpoint."""
    method = getattr(request, "method", "?")
    url = getattr(request, "url", None)
    path = url.path if url else "?"
    try:
        response = await call_next(request)
        if response.status_code >= 500:
            print(f"[500] {method} {path}", flush=True)
        return response
    except Exception:
        print(f"[500] {method} {path} (exception)", flush=True)
        raise


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    """Return 500 with CORS headers and full traceback so the frontend can read the error."""
    import traceback
    tb = traceback.format_exc()
    traceback.print_exc()
    origin = request.headers.get("origin")
    allow_origin = origin if origin in CORS_ORIGINS else CORS_ORIGINS[0]
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "traceback": tb},
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Credentials": "true",
        },
    )


# One session per table; game_id -> GameSession
games: dict[str, GameSession] = {}

# Sync endpoints run in a threadpool; a submission must check and write the cell atomically
game_locks: dict[str, threading.Lock] = {}


# ===== Pydantic Models =====

class CreateGameRequest(BaseModel):
    names: list[str] = DEFAULT_PLAYER_NAMES
    """'classic' or 'triple'. Omitted = default from eskalero.config.DEFAULT_MODE."""
    mode: str | None = None


class ScoreEntry(BaseModel):
    """
    Raw input from one of the entry paths of the score dialog.
    kind:
      "manual"      - value typed on the keypad
      "count"       - numeric rows: how many dice show the row's face (1-6)
      "straight"    - straight toggle: large (10-A) or small (9-K)
      "combination" - face picker for S, F, P, G: primary face (+ secondary for F and P)
    """
    kind: str
    value: int | None = None
    count: int | None = None
    large: bool | None = None
    served: bool = False
    primary: str | None = None
    secondary: str | None = None


class SubmitScoreRequest(BaseModel):
    player_id: str
    column_index: int
    category: str
    """Final value to store. Ignored when entry is given."""
    value: int | None = None
    """Raw entry; the column multiplier is applied before storing."""
    entry: ScoreEntry | None = None


class PreviewRequest(BaseModel):
    category: str
    entry: ScoreEntry
    mode: str = DEFAULT_MODE
    column_index: int = 0


# ===== Helper Functions =====

def get_game(game_id: str) -> GameSession:
    """Get a session; raise 404 if not found."""
    session = games.get(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Game {game_id} not found")
    return session


def _lock_for(game_id: str) -> threading.Lock:
    lock = game_locks.get(game_id)
    if lock is None:
        lock = game_locks.setdefault(game_id, threading.Lock())
    return lock


def entry_to_value(category: str, entry: ScoreEntry) -> int | None:
    """
    Raw score for an entry (before the column multiplier).
    None means the user confirmed without entering anything.
    Raises ValueError for an entry that does not fit the category.
    """
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category}")
    if entry.kind == "manual":
        return entry.value
    if entry.kind == "count":
        if entry.count is None:
            return None
        return count_score(category, entry.count)
    if entry.kind == "straight":
        if category != "S":
            raise ValueError("The straight toggle only applies to the straight row")
        if entry.large is None:
            return None
        return straight_score(entry.large, entry.served)
    if entry.kind == "combination":
        if entry.primary is None:
            return None
        return compute_combination_score(category, entry.served, entry.primary, entry.secondary)
    raise ValueError(f"Unknown entry kind: {entry.kind}")


def state_for_response(game_id: str, session: GameSession) -> dict[str, Any]:
    """State dict including computed summary for the UI."""
    out = session.to_dict()
    out["game_id"] = game_id
    return out


def result_for_response(game_id: str, session: GameSession, result: CommandResult) -> dict[str, Any]:
    out = result.to_dict()
    out["state"] = state_for_response(game_id, session)
    return out


# ===== API Endpoints =====

@app.get("/")
def root():
    return {"message": API_TITLE, "version": API_VERSION}


@app.get("/definitions")
def get_definitions():
    """Categories, faces, modes and player bounds for building the score dialog."""
    out = definitions_to_dict()
    out["players"] = {"min": MIN_PLAYERS, "max": MAX_PLAYERS}
    out["default_mode"] = DEFAULT_MODE
    return out


@app.post("/games")
def create_game(request: CreateGameRequest):
    """Create a table and start a game on it."""
    session = GameSession()
    result = session.start_game(request.names, request.mode or DEFAULT_MODE)
    if not result.accepted:
        raise HTTPException(status_code=400, detail=result.rejection)
    game_id = str(uuid.uuid4())
    games[game_id] = session
    return result_for_response(game_id, session, result)


@app.get("/games/{game_id}")
def get_game_state(game_id: str):
    return state_for_response(game_id, get_game(game_id))


@app.post("/games/{game_id}/start")
def start_game_on_table(game_id: str, request: CreateGameRequest):
    """Start a new game on an existing (reset) table."""
    session = get_game(game_id)
    with _lock_for(game_id):
        result = session.start_game(request.names, request.mode or session.mode)
    if not result.accepted:
        raise HTTPException(status_code=400, detail=result.rejection)
    return result_for_response(game_id, session, result)


@app.post("/games/{game_id}/score")
def do_submit_score(game_id: str, request: SubmitScoreRequest):
    """
    Record a score for the current player.
    Stale clicks (not your turn, cell already filled) and empty entries come back as
    accepted=false with the unchanged state; they are not errors.
    """
    session = get_game(game_id)
    with _lock_for(game_id):
        value = request.value
        if request.entry is not None:
            # The multiplier depends on the mode, which a reset and restart can change
            try:
                raw = entry_to_value(request.category, request.entry)
                value = apply_column_multiplier(raw, session.mode, request.column_index)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
        result = session.submit_score(
            request.player_id, request.column_index, request.category, value
        )
    if not result.accepted and not result.expected:
        raise HTTPException(status_code=400, detail=result.rejection)
    return result_for_response(game_id, session, result)


@app.get("/games/{game_id}/open-cells")
def get_open_cells(game_id: str):
    """Cells the current player may still fill."""
    session = get_game(game_id)
    return {
        "player_id": session.current_turn_player_id,
        "cells": [
            {
                "column_index": col_idx,
                "category": category,
                "multiplier": column_multiplier(session.mode, col_idx),
            }
            for col_idx, category in session.open_cells()
        ],
    }


@app.get("/games/{game_id}/ranking")
def get_ranking(game_id: str):
    """Standings; the winner is only reported once every sheet is full."""
    session = get_game(game_id)
    entries = [e.to_dict() for e in session.ranking()]
    complete = session.is_complete()
    return {
        "is_complete": complete,
        "ranking": entries,
        "winner": entries[0] if complete and entries else None,
    }


@app.post("/games/{game_id}/reset")
def do_reset_game(game_id: str):
    session = get_game(game_id)
    with _lock_for(game_id):
        result = session.reset_game()
    return result_for_response(game_id, session, result)


@app.delete("/games/{game_id}")
def delete_game(game_id: str):
    get_game(game_id)
    games.pop(game_id, None)
    game_locks.pop(game_id, None)
    return {"deleted": game_id}


@app.post("/score/preview")
def preview_score(request: PreviewRequest):
    """Score an entry without touching any game (live display in the score dialog)."""
    try:
        raw = entry_to_value(request.category, request.entry)
        multiplier = column_multiplier(request.mode, request.column_index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "category": request.category,
        "raw": raw,
        "multiplier": multiplier,
        "value": raw * multiplier if raw is not None else None,
        "max_raw": max_category_score(request.category),
    }
