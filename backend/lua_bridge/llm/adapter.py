"""
Generation adapter.

WHAT: Backend-independent entry point turning a request into a GenerationResult
WHY: Endpoints and tests see one result type whichever backend is wired in
HOW: Delegate to the configured backend, fold taxonomy errors into the result
"""

from typing import Optional

from .backend import GenerationBackend
from .backend_factory import get_backend
from .types import GenerationRequest, GenerationResult, GenerationError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class GenerationAdapter:
    """Normalizes generation calls across backend variants."""

    def __init__(self, backend: GenerationBackend):
        self.backend = backend

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Generate code for one request.

        No retries: a failed call is reported to the caller, who may resubmit.

        Returns:
            GenerationResult.success(code) or GenerationResult.failure(error)
        """
        model = self.backend.config.resolve_model(request.model_hint)
        try:
            code = await self.backend.generate(request)
        except GenerationError as e:
            logger.warning(f"Generation failed ({e.code}, status {e.status_code}): {e.message}")
            return GenerationResult.failure(e)
        return GenerationResult.success(code, model=model)


_adapter_instance: Optional[GenerationAdapter] = None


def get_adapter() -> GenerationAdapter:
    """Get the adapter singleton bound to the configured backend."""
    global _adapter_instance
    if _adapter_instance is None:
        _adapter_instance = GenerationAdapter(get_backend())
    return _adapter_instance


def reset_adapter() -> None:
    """Reset the adapter singleton (useful for testing)."""
    global _adapter_instance
    _adapter_instance = None
