"""
Keep-alive web server.
Reports bot health so hosting platforms keep the process running.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from bot.config import config
from bot.database import is_connected
from utils.logger import get_logger

logger = get_logger("KeepAlive")

# Track bot status
_bot_status = {
    "status": "starting",
    "discord_connected": False,
    "commands_loaded": 0,
}


def update_bot_status(**kwargs):
    """Update bot status for health endpoint."""
    _bot_status.update(kwargs)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    logger.info("Keep-alive server starting...")
    yield
    logger.info("Keep-alive server shutting down...")


app = FastAPI(
    title="Command Bot",
    description="Discord command bot keep-alive server",
    version="1.0.0",
    lifespan=lifespan,
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Command Bot",
        "version": "1.0.0",
        "status": _bot_status.get("status", "unknown"),
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring."""
    database_ok = is_connected()
    discord_ok = bool(_bot_status.get("discord_connected"))

    # The bot still routes commands without a database, settings just use defaults
    status = "healthy" if discord_ok else "degraded"

    return JSONResponse(
        status_code=200 if status == "healthy" else 503,
        content={
            "status": status,
            "discord": "connected" if discord_ok else "disconnected",
            "database": "connected" if database_ok else "disconnected",
            "commands_loaded": _bot_status.get("commands_loaded", 0),
        },
    )


@app.get("/ping")
async def ping():
    """Simple ping endpoint."""
    return {"pong": True}


async def start_server():
    """Start the keep-alive server."""
    import uvicorn

    config_uvicorn = uvicorn.Config(
        app,
        host=config.HOST,
        port=config.PORT,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config_uvicorn)

    logger.info(f"Keep-alive server listening on port {config.PORT}")
    await server.serve()


def run_server() -> asyncio.Task:
    """Run server in background task."""
    return asyncio.create_task(start_server())
