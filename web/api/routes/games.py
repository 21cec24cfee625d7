"""Game API routes."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from hanoi_engine.actions import ClickTower, MoveDisc, Reset, SelectDisc, ToggleHint, Undo
from hanoi_engine.characters import Character
from hanoi_engine.discs import DIFFICULTY_LEVELS, get_difficulty
from hanoi_engine.hints import ADVISORS
from strategies.factory import StrategyFactory
from web.api.session_manager import session_manager, stats_to_dict

if TYPE_CHECKING:
    from hanoi_engine.actions import Action
    from web.api.session_manager import GameSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


# Request/Response models
class CharacterRequest(BaseModel):
    """A roster character supplied by the client."""

    id: str = Field(..., min_length=1)
    name: str
    image: str = ""


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    difficulty: str = Field(..., description="Difficulty id, e.g. 'facile'")
    roster: list[CharacterRequest] | None = Field(
        None, description="Characters to stack; the first is the largest disc"
    )
    seed: int | None = Field(None, description="Seed for picking from the default roster")
    hint_strategy: str | None = Field(None, description="'greedy' or 'optimal'")


class ClickTowerRequest(BaseModel):
    """Request to click a tower."""

    tower_id: int


class SelectDiscRequest(BaseModel):
    """Request to pick a disc directly."""

    disc_id: str


class MoveRequest(BaseModel):
    """Request to move the top disc between two towers."""

    from_tower: int
    to_tower: int


class DifficultyInfo(BaseModel):
    """Information about a difficulty level."""

    id: str
    name: str
    character_count: int
    min_moves: int
    emoji: str
    description: str


class StrategyInfo(BaseModel):
    """Information about an available strategy."""

    name: str
    description: str


# REST Endpoints


@router.get("/difficulties", response_model=list[DifficultyInfo])
async def list_difficulties():
    """List available difficulty levels."""
    return [
        DifficultyInfo(
            id=level.id,
            name=level.name,
            character_count=level.character_count,
            min_moves=level.min_moves,
            emoji=level.emoji,
            description=level.description,
        )
        for level in DIFFICULTY_LEVELS.values()
    ]


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies():
    """List autoplay strategies and hint advisors."""
    factory = StrategyFactory()
    strategies = factory.list_strategies()
    return [StrategyInfo(name=name, description=desc) for name, desc in strategies.items()]


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session."""
    try:
        difficulty = get_difficulty(request.difficulty)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e.args[0]))

    if request.hint_strategy and request.hint_strategy.lower() not in ADVISORS:
        raise HTTPException(status_code=400, detail=f"Unknown hint strategy: {request.hint_strategy}")

    roster = None
    if request.roster is not None:
        roster = [Character(id=c.id, name=c.name, image=c.image) for c in request.roster]

    try:
        session = session_manager.create_session(
            difficulty=difficulty,
            roster=roster,
            seed=request.seed,
            hint_strategy=request.hint_strategy,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "game_id": session.id,
        "state": session.to_client_state(),
        "legal_moves": session.moves_to_client(session.legal_moves),
    }


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str):
    """Get current state of a game."""
    session = _get_session_or_404(game_id)
    return {
        "state": session.to_client_state(),
        "legal_moves": session.moves_to_client(session.legal_moves),
    }


@router.get("/games/{game_id}/moves")
async def get_legal_moves(game_id: str):
    """Get legal moves for current game state."""
    session = _get_session_or_404(game_id)
    return {"moves": session.moves_to_client(session.legal_moves)}


@router.get("/games/{game_id}/stats")
async def get_stats(game_id: str):
    """Get the completion stats of a solved game."""
    session = _get_session_or_404(game_id)
    if session.completed_stats is None:
        raise HTTPException(status_code=404, detail="Game is not complete")
    return stats_to_dict(session.completed_stats)


@router.post("/games/{game_id}/click")
async def click_tower(game_id: str, request: ClickTowerRequest):
    """Click a tower: select its top disc, deselect, or move onto it."""
    return _dispatch(game_id, ClickTower(request.tower_id))


@router.post("/games/{game_id}/select")
async def select_disc(game_id: str, request: SelectDiscRequest):
    """Select a disc directly. Only top discs can be selected."""
    return _dispatch(game_id, SelectDisc(request.disc_id))


@router.post("/games/{game_id}/move")
async def make_move(game_id: str, request: MoveRequest):
    """Move the top disc of one tower onto another."""
    return _dispatch(game_id, MoveDisc(request.from_tower, request.to_tower))


@router.post("/games/{game_id}/undo")
async def undo(game_id: str):
    """Take back the last move."""
    return _dispatch(game_id, Undo())


@router.post("/games/{game_id}/hint")
async def toggle_hint(game_id: str):
    """Show or hide a hint."""
    return _dispatch(game_id, ToggleHint())


@router.post("/games/{game_id}/reset")
async def reset_game(game_id: str):
    """Start the same puzzle over."""
    return _dispatch(game_id, Reset())


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")


def _get_session_or_404(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _dispatch(game_id: str, action: Action) -> dict:
    """Apply an action. Rejected actions are reported, not raised."""
    session = _get_session_or_404(game_id)
    accepted = session.controller.dispatch(action)
    stats = session.completed_stats
    return {
        "accepted": accepted,
        "state": session.to_client_state(),
        "stats": stats_to_dict(stats) if stats else None,
    }


# WebSocket endpoint for real-time play


def _state_message(session: GameSession) -> dict:
    return {
        "type": "game_state",
        "state": session.to_client_state(),
        "legal_moves": session.moves_to_client(session.legal_moves),
    }


def _action_from_message(data: dict[str, Any]) -> Action | None:
    """Build an action from a client message, None for unknown types.

    Raises:
        KeyError, TypeError, ValueError: On missing or malformed fields.
    """
    match data.get("type", ""):
        case "click":
            return ClickTower(int(data["tower_id"]))
        case "select":
            return SelectDisc(str(data["disc_id"]))
        case "move":
            return MoveDisc(int(data["from_tower"]), int(data["to_tower"]))
        case "undo":
            return Undo()
        case "hint":
            return ToggleHint()
        case "reset":
            return Reset()
    return None


@router.websocket("/ws/game/{game_id}")
async def game_websocket(websocket: WebSocket, game_id: str):
    """WebSocket endpoint for real-time game updates.

    Protocol:
    Server -> Client messages:
        - game_state: Full game state and legal moves
        - legal_moves: Legal moves for the current board
        - state_changed: An accepted transition, from any channel
        - game_complete: Completion stats, sent once per solve
        - rejected: The last action was not legal
        - error: Malformed or unknown message

    Client -> Server messages:
        - click: {tower_id}
        - select: {disc_id}
        - move: {from_tower, to_tower}
        - undo, hint, reset
        - get_state, get_moves
    """
    session = session_manager.get_session(game_id)
    if not session:
        logger.warning("WebSocket: game not found: %s", game_id)
        await websocket.close(code=4004, reason="Game not found")
        return

    await websocket.accept()
    logger.info("WebSocket connected to game %s", game_id)

    event_queue: asyncio.Queue = asyncio.Queue()
    queue_event = event_queue.put_nowait
    session.add_listener(queue_event)

    async def forward_events():
        while True:
            event = await event_queue.get()
            await websocket.send_json(event)

    await websocket.send_json(_state_message(session))
    event_task = asyncio.create_task(forward_events())

    try:
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                await websocket.send_json({"type": "error", "message": "Messages must be JSON objects"})
                continue
            msg_type = data.get("type", "")

            if msg_type == "get_state":
                await websocket.send_json(_state_message(session))
                continue
            if msg_type == "get_moves":
                await websocket.send_json({
                    "type": "legal_moves",
                    "moves": session.moves_to_client(session.legal_moves),
                })
                continue

            try:
                action = _action_from_message(data)
            except (KeyError, TypeError, ValueError) as e:
                await websocket.send_json({"type": "error", "message": f"Malformed {msg_type!r}: {e}"})
                continue
            if action is None:
                await websocket.send_json({"type": "error", "message": f"Unknown message type: {msg_type!r}"})
                continue

            try:
                accepted = session.controller.dispatch(action)
            except RuntimeError as e:
                await websocket.send_json({"type": "error", "message": str(e)})
                continue
            if not accepted:
                await websocket.send_json({"type": "rejected", "action": str(action)})
    except WebSocketDisconnect:
        logger.info("WebSocket disconnected from game %s", game_id)
    finally:
        session.remove_listener(queue_event)
        event_task.cancel()
