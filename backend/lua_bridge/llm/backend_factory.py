"""
Backend factory with singleton pattern.

WHAT: Factory to get the configured generation backend
WHY: One process is wired to exactly one backend; switching is a config choice
HOW: Read LLM_BACKEND from config once, cache singleton, log selection
"""

from typing import TYPE_CHECKING

from .types import BackendConfig, ConfigurationError

if TYPE_CHECKING:
    from .backend import GenerationBackend
    from ..core.config import Settings

# Caller hints may use either provider's naming scheme
GEMINI_MODEL_MAP = {
    "gemini-2.5-flash": "gemini-2.5-flash",
    "gemini-2.5-flash-preview-09-2025": "gemini-2.5-flash-preview-09-2025",
    "gemini-2.5-pro": "gemini-2.5-pro",
    "google/gemini-2.5-flash": "gemini-2.5-flash",
    "google/gemini-2.5-pro": "gemini-2.5-pro",
}

OPENROUTER_MODEL_MAP = {
    "gemini-2.5-flash-preview-09-2025": "google/gemini-2.5-flash",
    "gemini-2.5-flash": "google/gemini-2.5-flash",
    "gemini-2.5-pro": "google/gemini-2.5-pro",
    "google/gemini-2.5-flash": "google/gemini-2.5-flash",
    "google/gemini-2.5-pro": "google/gemini-2.5-pro",
}

SUPPORTED_BACKENDS = ("gemini", "gemini_structured", "openrouter")

# Singleton instance
_backend_instance: "GenerationBackend | None" = None


def build_backend_config(settings: "Settings") -> BackendConfig:
    """
    Translate settings into the BackendConfig for LLM_BACKEND.

    Raises:
        ConfigurationError: If backend name is unknown
    """
    name = settings.LLM_BACKEND
    common = dict(
        api_key_env=settings.LLM_API_KEY_ENV,
        timeout_seconds=float(settings.LLM_TIMEOUT),
        temperature=settings.LLM_TEMPERATURE,
        max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
    )

    if name in ("gemini", "gemini_structured"):
        return BackendConfig(
            name=name,
            endpoint_url=settings.GEMINI_BASE_URL,
            auth_style="query_key",
            request_shape="native" if name == "gemini" else "structured_json",
            default_model=settings.GEMINI_DEFAULT_MODEL,
            model_map=dict(GEMINI_MODEL_MAP),
            **common,
        )
    if name == "openrouter":
        return BackendConfig(
            name=name,
            endpoint_url=settings.OPENROUTER_BASE_URL,
            auth_style="bearer",
            request_shape="chat_completions",
            default_model=settings.OPENROUTER_DEFAULT_MODEL,
            model_map=dict(OPENROUTER_MODEL_MAP),
            extra_headers={
                "HTTP-Referer": settings.OPENROUTER_REFERER or settings.APP_NAME,
                "X-Title": settings.APP_NAME,
            },
            **common,
        )
    raise ConfigurationError(
        f"Server configuration error: unknown LLM backend {name!r}.",
        details={"backend": name, "supported": list(SUPPORTED_BACKENDS)},
    )


def create_backend(config: BackendConfig) -> "GenerationBackend":
    """Instantiate the backend class matching config.request_shape."""
    if config.request_shape == "native":
        from .gemini import GeminiBackend
        return GeminiBackend(config)
    if config.request_shape == "structured_json":
        from .gemini import GeminiStructuredBackend
        return GeminiStructuredBackend(config)
    if config.request_shape == "chat_completions":
        from .openrouter import OpenRouterBackend
        return OpenRouterBackend(config)
    raise ValueError(f"Unknown request shape: {config.request_shape}")


def get_backend() -> "GenerationBackend":
    """
    Get the configured backend singleton.

    Returns:
        GenerationBackend instance based on settings.LLM_BACKEND

    Raises:
        ConfigurationError: If backend name is unknown
    """
    global _backend_instance

    if _backend_instance is None:
        # Import here to avoid circular dependencies
        from ..core.config import settings
        from ..utils.logger import get_logger

        logger = get_logger(__name__)
        _backend_instance = create_backend(build_backend_config(settings))
        logger.info(f"LLM backend initialized: {settings.LLM_BACKEND}")

    return _backend_instance


def reset_backend() -> None:
    """Reset the backend singleton (useful for testing)."""
    global _backend_instance
    _backend_instance = None


async def close_backend() -> None:
    """Close and drop the singleton if one was created."""
    global _backend_instance
    if _backend_instance is not None:
        await _backend_instance.close()
        _backend_instance = None
