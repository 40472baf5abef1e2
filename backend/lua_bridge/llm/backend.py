"""
Generation backend protocol definition.

WHAT: Abstract interface for LLM backends
WHY: Decouple the adapter and endpoints from specific backend APIs
HOW: Use Protocol to define async generate/close plus a describe helper
"""

from typing import Protocol
from .types import BackendConfig, GenerationRequest


class GenerationBackend(Protocol):
    """Protocol defining the interface all backend variants must implement."""

    config: BackendConfig

    async def generate(self, request: GenerationRequest) -> str:
        """
        Run one generation call and return the extracted text.

        Raises a GenerationError subclass on any failure.
        """
        ...

    def describe(self) -> dict:
        """Static, secret-free description of the backend for health checks."""
        ...

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        ...
