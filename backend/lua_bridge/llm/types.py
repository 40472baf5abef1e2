"""
Generation adapter types and dataclasses.

WHAT: Standard type definitions for backend interactions
WHY: Ensure consistent contracts across all backend variants
HOW: Dataclasses for requests/results/config, re-exported error taxonomy
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

from ..utils.exceptions import (
    ErrorKind,
    GenerationError,
    ClientError,
    ConfigurationError,
    UpstreamError,
    ExtractionError,
    TransportError,
)

RequestShape = Literal["native", "structured_json", "chat_completions"]
AuthStyle = Literal["query_key", "bearer"]


@dataclass
class GenerationRequest:
    """Normalized generation request, independent of the configured backend."""
    prompt: str
    system_instruction: Optional[str] = None
    model_hint: Optional[str] = None

    def __post_init__(self):
        if self.prompt is None or not self.prompt.strip():
            raise ClientError("Missing or empty 'prompt' in request body.")


@dataclass
class GenerationResult:
    """Either Ok(code) or Err(error)."""
    code: Optional[str] = None
    error: Optional[GenerationError] = None
    model: Optional[str] = None

    @classmethod
    def success(cls, code: str, model: Optional[str] = None) -> "GenerationResult":
        return cls(code=code, model=model)

    @classmethod
    def failure(cls, error: GenerationError) -> "GenerationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None


@dataclass
class BackendConfig:
    """Static description of the one backend a process is wired to."""
    name: str
    endpoint_url: str
    auth_style: AuthStyle
    request_shape: RequestShape
    default_model: str
    api_key_env: str
    model_map: dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 60.0
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None
    extra_headers: dict[str, str] = field(default_factory=dict)

    def resolve_model(self, hint: Optional[str]) -> str:
        """Map a caller-supplied hint to a backend model, falling back to the default."""
        if hint and hint in self.model_map:
            return self.model_map[hint]
        return self.default_model


__all__ = [
    "RequestShape",
    "AuthStyle",
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
]
