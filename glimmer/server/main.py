"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers, includes all API routers and
exposes the WebSocket endpoint used for chat, presence and live games.
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.ai.assistant import get_assistant
from glimmer.core.database import get_session_factory, init_db
from glimmer.core.logging_config import get_logger, setup_logging
from glimmer.core.monitoring import initialize_logfire
from glimmer.games import GameLocks, get_game_locks
from glimmer.realtime.registry import ConnectionRegistry, get_registry
from glimmer.realtime.relay import RealtimeRelay

from .api.v1 import (
    activities,
    chat,
    chatbot,
    friends,
    games,
    health,
    memories,
    pet,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup and closes the AI provider's HTTP
    resources on shutdown.
    """
    # Startup
    try:
        logger.info("Starting up Glimmer Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Glimmer Server...")
    await get_assistant().aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Glimmer Server API

    Backend for the Glimmer social companion: memories rendered as stars, friends with
    streaks, a shared cosmic pet, turn-based mini-games and an AI assistant.
    Real-time chat, presence and game updates are served on the /ws WebSocket endpoint.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"], include_in_schema=False)
app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users", tags=["users"])
app.include_router(memories.router, prefix=f"{constant.API_V1_STR}/memories", tags=["memories"])
app.include_router(friends.router, prefix=f"{constant.API_V1_STR}/friends", tags=["friends"])
app.include_router(pet.router, prefix=f"{constant.API_V1_STR}/pet", tags=["pet"])
app.include_router(chat.router, prefix=f"{constant.API_V1_STR}/chat", tags=["chat"])
app.include_router(games.router, prefix=f"{constant.API_V1_STR}/games", tags=["games"])
app.include_router(activities.router, prefix=constant.API_V1_STR, tags=["activities"])
app.include_router(chatbot.router, prefix=f"{constant.API_V1_STR}/chatbot", tags=["chatbot"])


@app.websocket(constant.WEBSOCKET_PATH)
async def websocket_endpoint(
    websocket: WebSocket,
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
    registry: Annotated[ConnectionRegistry, Depends(get_registry)],
    locks: Annotated[GameLocks, Depends(get_game_locks)],
):
    """
    Real-time endpoint.

    The first frame must be ``{"type": "auth", "user_id": ...}``; afterwards
    the socket carries chat, game moves, typing indicators and pings, and
    receives presence, friend, pet and game notifications.
    """
    relay = RealtimeRelay(registry, session_factory, locks, settings.friend_streak_window_hours)
    await relay.serve(websocket)
