"""
FastAPI application entry point.

WHAT: Main application setup and wiring
WHY: Serve the generation adapter and the command relay from one process
HOW: Create FastAPI app, register middleware, routers, handlers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .core.config import settings
from .llm.backend_factory import close_backend
from .llm.adapter import reset_adapter
from .services.command_relay import get_relay, reset_relay
from .utils.logger import setup_logging, get_logger
from .middleware.error_handler import register_exception_handlers
from .api.v1.router import api_router

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    WHAT: Startup and shutdown logic
    WHY: Open the relay store up front, close HTTP/DB connections cleanly
    HOW: Async context manager for FastAPI lifespan
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} (backend: {settings.LLM_BACKEND})")
    relay = get_relay()
    if not relay.store.durable:
        logger.warning("Relay store is in-memory: pending commands are lost on restart and not shared between instances")
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application")
    reset_adapter()
    await close_backend()
    reset_relay()
    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware; without credentials so a wildcard is sent back as "*"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include API router
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "lua_bridge.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
