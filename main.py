"""FastAPI app entry point for Monster Hunt."""

import logging

from fastapi import FastAPI

from api.game import router as game_router
from api.lobby import router as lobby_router
from config import GAME_ID, GAME_NAME, setup_logging
from engine.game import create_game

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Monster Hunt",
    description="Rules core for a hot-seat monster hunting board game",
    version="0.1.0",
)

app.state.game = create_game(GAME_ID, name=GAME_NAME)
logger.info("Created game %s", GAME_ID)

app.include_router(lobby_router, prefix="/game", tags=["Lobby"])
app.include_router(game_router, prefix="/game", tags=["Game"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": GAME_NAME, "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
