"""
Status and health check endpoints.

WHAT: Health monitoring for the generation backend and the relay
WHY: Quick diagnostics for the web client and ops
HOW: Report static backend config and relay store status; no backend call
"""

from fastapi import APIRouter

from ....llm.backend_factory import get_backend
from ....llm.types import ConfigurationError
from ....services.command_relay import get_relay
from ....core.config import settings
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check():
    """
    Overall application health check.

    WHAT: Backend wiring and relay status with app metadata
    WHY: A missing API key or unreachable relay database shows up before a user hits it
    HOW: Aggregate backend.describe() and relay.describe()

    Returns:
        JSON with overall health status
    """
    try:
        backend = get_backend().describe()
    except ConfigurationError as e:
        logger.error(f"Health check backend failed: {e}")
        backend = {"name": settings.LLM_BACKEND, "api_key_configured": False, "error": e.message}

    relay = get_relay().describe()

    healthy = bool(backend.get("api_key_configured")) and relay["available"]

    return {
        "status": "healthy" if healthy else "degraded",
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME,
        "backend": backend,
        "relay": relay,
    }
