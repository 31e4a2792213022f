"""HTTP and WebSocket endpoints for users, businesses, messages, and the assistant."""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, WebSocket

from src.api.live import LiveHub
from src.core.schemas import (
    ASSISTANT_USER_ID,
    AssistantMessageRequest,
    Business,
    BusinessCreate,
    BusinessRegistration,
    Message,
    MessageCreate,
    UserCreate,
    UserProfile,
)
from src.core.store import MemoryStore, StoreError
from src.pipeline.assistant import Assistant
from src.pipeline.matcher import BusinessMatcher

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> MemoryStore:
    return request.app.state.store  # type: ignore[no-any-return]


def get_matcher(request: Request) -> BusinessMatcher:
    return request.app.state.matcher  # type: ignore[no-any-return]


def get_assistant(request: Request) -> Assistant:
    return request.app.state.assistant  # type: ignore[no-any-return]


def get_hub(request: Request) -> LiveHub:
    return request.app.state.hub  # type: ignore[no-any-return]


# -- status & users ---------------------------------------------------------

@router.get("/api/status")
def get_status(request: Request, store: MemoryStore = Depends(get_store)) -> dict:
    """Report which oracle is configured and how much data is loaded."""
    return {
        "status": "ok",
        "provider": request.app.state.settings.oracle.provider,
        "userCount": len(store.list_users()),
        "businessCount": len(store.list_businesses()),
    }


@router.get("/api/users", response_model=list[UserProfile])
def list_users(store: MemoryStore = Depends(get_store)):  # type: ignore[no-untyped-def]
    return store.list_users()


@router.get("/api/users/{user_id}", response_model=UserProfile)
def get_user(user_id: int, store: MemoryStore = Depends(get_store)):  # type: ignore[no-untyped-def]
    user = store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/api/users", response_model=UserProfile)
def create_user(  # type: ignore[no-untyped-def]
    body: UserCreate, store: MemoryStore = Depends(get_store)
):
    try:
        return store.create_user(body)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


# -- businesses -------------------------------------------------------------

@router.post("/api/businesses", response_model=Business)
def create_business(  # type: ignore[no-untyped-def]
    body: BusinessRegistration, store: MemoryStore = Depends(get_store)
):
    profile = BusinessCreate.model_validate(body.model_dump(exclude={"user_id"}))
    try:
        return store.create_business(body.user_id, profile)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/api/businesses/search", response_model=list[Business])
def search_businesses(  # type: ignore[no-untyped-def]
    q: str = Query(default=""),
    store: MemoryStore = Depends(get_store),
    matcher: BusinessMatcher = Depends(get_matcher),
):
    """Rank all businesses against ``q``. An empty query returns no results."""
    logger.info("Search query received: %r", q)
    if not q.strip():
        return []

    businesses = store.search_businesses(q)
    logger.info("Found %d businesses before matching", len(businesses))
    return matcher.match_query(q, businesses)


# -- messages ---------------------------------------------------------------

@router.get("/api/messages/ai/{user_id}", response_model=list[Message])
def get_assistant_history(  # type: ignore[no-untyped-def]
    user_id: int, store: MemoryStore = Depends(get_store)
):
    return store.get_messages(user_id, ASSISTANT_USER_ID)


@router.post("/api/messages/ai", response_model=list[Message])
def message_assistant(  # type: ignore[no-untyped-def]
    body: AssistantMessageRequest,
    store: MemoryStore = Depends(get_store),
    assistant: Assistant = Depends(get_assistant),
):
    """Store the user's message, ask the assistant, store and return both messages."""
    user_message = store.create_message(
        MessageCreate(from_id=body.from_id, to_id=ASSISTANT_USER_ID, content=body.content)
    )
    history = store.get_messages(body.from_id, ASSISTANT_USER_ID)
    reply = assistant.reply_to(history)
    assistant_message = store.create_message(
        MessageCreate(
            from_id=ASSISTANT_USER_ID,
            to_id=body.from_id,
            content=reply,
            is_ai_assistant=True,
        )
    )
    return [user_message, assistant_message]


@router.get("/api/messages/{user_a}/{user_b}", response_model=list[Message])
def get_conversation(  # type: ignore[no-untyped-def]
    user_a: int, user_b: int, store: MemoryStore = Depends(get_store)
):
    return store.get_messages(user_a, user_b)


@router.post("/api/messages", response_model=Message)
async def send_message(  # type: ignore[no-untyped-def]
    body: MessageCreate,
    store: MemoryStore = Depends(get_store),
    hub: LiveHub = Depends(get_hub),
):
    message = store.create_message(body)
    await hub.notify(message)
    return message


# -- live updates -----------------------------------------------------------

@router.websocket("/ws")
async def live_updates(websocket: WebSocket) -> None:
    """Register a client with ``{"type": "auth", "userId": n}``, then push its messages."""
    hub: LiveHub = websocket.app.state.hub
    await websocket.accept()
    try:
        async for raw in websocket.iter_text():
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed WebSocket message: %r", raw[:80])
                continue
            if not isinstance(data, dict) or data.get("type") != "auth":
                continue
            user_id = data.get("userId")
            if isinstance(user_id, int):
                hub.register(user_id, websocket)
    finally:
        hub.unregister(websocket)
