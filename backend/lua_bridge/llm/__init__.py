"""LLM generation adapter layer."""

from .types import (
    GenerationRequest,
    GenerationResult,
    BackendConfig,
    ErrorKind,
    GenerationError,
    ClientError,
    ConfigurationError,
    UpstreamError,
    ExtractionError,
    TransportError,
)
from .backend import GenerationBackend
from .backend_factory import get_backend, reset_backend, close_backend
from .adapter import GenerationAdapter, get_adapter, reset_adapter

__all__ = [
    "GenerationRequest",
    "GenerationResult",
    "BackendConfig",
    "ErrorKind",
    "GenerationError",
    "ClientError",
    "ConfigurationError",
    "UpstreamError",
    "ExtractionError",
    "TransportError",
    "GenerationBackend",
    "get_backend",
    "reset_backend",
    "close_backend",
    "GenerationAdapter",
    "get_adapter",
    "reset_adapter",
]
