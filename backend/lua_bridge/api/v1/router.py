"""
API v1 router aggregation.

WHAT: Combine all v1 endpoint routers
WHY: Single place to register all API routes
HOW: Include routers from endpoints; paths are unprefixed so existing
     callers (web page, game poller) keep working
"""

from fastapi import APIRouter

from .endpoints import status, generate, queue

# Create main v1 router
api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    status.router,
    tags=["status"]
)

api_router.include_router(
    generate.router,
    tags=["generation"]
)

api_router.include_router(
    queue.router,
    tags=["relay"]
)
