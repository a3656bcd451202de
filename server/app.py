"""FastAPI server for wordplay application."""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.matching import MatchingGame
from core.notifications import MessageQueue
from core.puzzle import PuzzleGame
from core.scheduler import AsyncioScheduler
from core.config import GRID_SIZE, MAX_ATTEMPTS, POINTS_PER_LINE

from server.file_storage import FileStorage


# Pydantic models for API
class UserRequest(BaseModel):
    user_id: str = "default"


class StartRequest(BaseModel):
    set_id: Optional[str] = None
    user_id: str = "default"
    origin: Optional[tuple[float, float]] = None  # celebration anchor, viewport fractions


class SelectCardRequest(BaseModel):
    card_id: str
    user_id: str = "default"


class AnswerRequest(BaseModel):
    answer: str
    user_id: str = "default"


class PlaceRequest(BaseModel):
    piece_index: int
    row: int
    col: int
    user_id: str = "default"


class SetSummary(BaseModel):
    id: str
    name: str
    languages: list[str]
    word_count: int
    usable_word_count: int


class SetsResponse(BaseModel):
    sets: list[SetSummary]


class GameResponse(BaseModel):
    success: bool
    error: Optional[str] = None
    game: dict
    messages: list[dict]
    celebrations: list[dict]
    answer: Optional[dict] = None  # grading result of /api/puzzle/answer


class UserGames:
    """Everything one user is playing."""

    def __init__(self, repository: FileStorage):
        self.notifier = MessageQueue()
        scheduler = AsyncioScheduler()
        self.matching = MatchingGame(repository, scheduler, self.notifier)
        self.puzzle = PuzzleGame(repository, scheduler, self.notifier)

    def close(self) -> None:
        self.matching.close()
        self.puzzle.close()


# Global state (in production, use proper DI)
storage: FileStorage = None
user_games: dict[str, UserGames] = {}


def log_event(event: str, user_id: str, **data) -> None:
    """Log a game event."""
    details = ' '.join(f"{k}={v}" for k, v in data.items())
    logger.info(f"[{user_id}] {event} {details}".rstrip())


def get_games(user_id: str = "default") -> UserGames:
    """Get or create the games for a user."""
    if user_id not in user_games:
        user_games[user_id] = UserGames(storage)
    return user_games[user_id]


def game_response(games: UserGames, snapshot: dict, success: bool = True, answer: dict = None) -> GameResponse:
    drained = games.notifier.drain()
    error = None
    if not success:
        errors = [m['description'] for m in drained['messages'] if m['variant'] == 'destructive']
        error = errors[-1] if errors else "Action not allowed"
    return GameResponse(
        success=success,
        error=error,
        game=snapshot,
        messages=drained['messages'],
        celebrations=drained['celebrations'],
        answer=answer
    )


def check_origin(origin: tuple[float, float] | None) -> None:
    """Reject a celebration anchor outside the viewport."""
    if origin is not None and not all(0 <= v <= 1 for v in origin):
        raise HTTPException(status_code=422, detail="origin must be viewport fractions between 0 and 1")


def start_game(game, request: StartRequest) -> bool:
    """Start a game; the celebration anchor only changes when the start succeeds."""
    check_origin(request.origin)
    success = game.start(request.set_id)
    if success and request.origin is not None:
        game.anchor_celebrations(*request.origin)
    return success


def resolve_data_file() -> str | None:
    """Data file from WORDPLAY_DATA_FILE, then the config file, else the default."""
    data_file = os.environ.get('WORDPLAY_DATA_FILE')
    if data_file:
        return data_file
    try:
        config = FileStorage().load_config()
        return config.get('data_file')
    except FileNotFoundError:
        return None


app = FastAPI(title="Wordplay API", description="Vocabulary matching and puzzle games API")


@app.on_event("startup")
async def startup():
    """Initialize storage on startup."""
    global storage
    storage = FileStorage(data_file=resolve_data_file())
    print(f"Using vocabulary data file: {storage.data_file}")


@app.on_event("shutdown")
async def shutdown():
    """Stop every timer still running."""
    for games in user_games.values():
        games.close()
    user_games.clear()


@app.get("/")
async def root():
    """Health check."""
    return {"service": "wordplay", "status": "ok"}


@app.get("/api/sets", response_model=SetsResponse)
async def list_sets():
    """List vocabulary sets."""
    return SetsResponse(sets=[SetSummary(**s.summary()) for s in storage.load_sets()])


@app.get("/api/config")
async def get_game_config():
    """Game constants the client needs for rendering."""
    return {
        "grid_size": GRID_SIZE,
        "max_attempts": MAX_ATTEMPTS,
        "points_per_line": POINTS_PER_LINE
    }


# Matching game endpoints
@app.get("/api/matching", response_model=GameResponse)
async def get_matching(user_id: str = "default"):
    """Get the current matching game."""
    games = get_games(user_id)
    return game_response(games, games.matching.snapshot())


@app.post("/api/matching/start", response_model=GameResponse)
async def start_matching(request: StartRequest):
    """Deal a new matching game from a set."""
    games = get_games(request.user_id)
    success = start_game(games.matching, request)
    if success:
        log_event('matching.start', request.user_id,
                  set_id=games.matching.selected_set_id,
                  pairs=games.matching.total_pairs)
    return game_response(games, games.matching.snapshot(), success)


@app.post("/api/matching/select", response_model=GameResponse)
async def select_card(request: SelectCardRequest):
    """Select a card. Ignored clicks still return the current game."""
    games = get_games(request.user_id)
    games.matching.select_card(request.card_id)
    return game_response(games, games.matching.snapshot())


@app.post("/api/matching/reset", response_model=GameResponse)
async def reset_matching(request: UserRequest):
    """Abandon the current matching game."""
    games = get_games(request.user_id)
    games.matching.reset()
    return game_response(games, games.matching.snapshot())


# Puzzle game endpoints
@app.get("/api/puzzle", response_model=GameResponse)
async def get_puzzle(user_id: str = "default"):
    """Get the current puzzle game."""
    games = get_games(user_id)
    return game_response(games, games.puzzle.snapshot())


@app.post("/api/puzzle/start", response_model=GameResponse)
async def start_puzzle(request: StartRequest):
    """Start a new puzzle game on a set."""
    games = get_games(request.user_id)
    success = start_game(games.puzzle, request)
    if success:
        log_event('puzzle.start', request.user_id, set_id=games.puzzle.selected_set_id)
    return game_response(games, games.puzzle.snapshot(), success)


@app.post("/api/puzzle/answer", response_model=GameResponse)
async def answer_puzzle(request: AnswerRequest):
    """Submit an answer to the current challenge."""
    games = get_games(request.user_id)
    result = games.puzzle.check_answer(request.answer)
    if result is not None:
        log_event('puzzle.answer', request.user_id, correct=result['correct'])
    if result and result['correct'] and games.puzzle.result:
        log_event('puzzle.game_over', request.user_id, **games.puzzle.result)
    return game_response(games, games.puzzle.snapshot(), result is not None, answer=result)


@app.post("/api/puzzle/skip", response_model=GameResponse)
async def skip_puzzle(request: UserRequest):
    """Skip the current challenge."""
    games = get_games(request.user_id)
    success = games.puzzle.skip()
    return game_response(games, games.puzzle.snapshot(), success)


@app.post("/api/puzzle/place", response_model=GameResponse)
async def place_piece(request: PlaceRequest):
    """Place one of the available pieces at a grid cell."""
    games = get_games(request.user_id)
    success = games.puzzle.place(request.piece_index, request.row, request.col)
    if success and games.puzzle.result:
        log_event('puzzle.game_over', request.user_id, **games.puzzle.result)
    return game_response(games, games.puzzle.snapshot(), success)


@app.post("/api/puzzle/reset", response_model=GameResponse)
async def reset_puzzle(request: UserRequest):
    """Abandon the current puzzle game."""
    games = get_games(request.user_id)
    games.puzzle.reset()
    return game_response(games, games.puzzle.snapshot())
