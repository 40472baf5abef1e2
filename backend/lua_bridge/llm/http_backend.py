"""
Shared HTTP plumbing for backend variants.

WHAT: One outbound call per request with normalized error mapping
WHY: Every backend shares auth, transport and upstream-error handling;
     only the payload and the extraction differ
HOW: Base class owning an httpx.AsyncClient; subclasses implement
     build_request() and extract_text()
"""

import os
from abc import ABC, abstractmethod
from typing import Any

import httpx

from .types import (
    BackendConfig,
    GenerationRequest,
    ConfigurationError,
    UpstreamError,
    ExtractionError,
    TransportError,
)
from .prompts import DEFAULT_SYSTEM_INSTRUCTION
from ..utils.logger import get_logger, preview

logger = get_logger(__name__)


class HTTPBackend(ABC):
    """Base class for backends reached over JSON/HTTP."""

    def __init__(self, config: BackendConfig, client: httpx.AsyncClient | None = None):
        """
        Initialize backend with an httpx client.

        Args:
            config: Backend description built from settings
            client: Optional pre-built client (tests inject one)
        """
        self.config = config
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(5.0, read=config.timeout_seconds),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
        )
        logger.info(
            f"{config.name} backend initialized (shape: {config.request_shape}, "
            f"model: {config.default_model}, key env: {config.api_key_env})"
        )

    # ----- subclass hooks -----

    @abstractmethod
    def build_request(self, prompt: str, system_instruction: str, model: str) -> tuple[str, dict]:
        """Return (url, json payload) for one call."""

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull the generated text out of a decoded success body."""

    # ----- shared flow -----

    def api_key(self) -> str:
        """
        Read the API key from the process environment.

        Raises:
            ConfigurationError: Key variable is unset or blank
        """
        key = os.environ.get(self.config.api_key_env, "").strip()
        if not key:
            logger.error(f"{self.config.api_key_env} is not set; refusing to call {self.config.name}")
            raise ConfigurationError(
                f"Server configuration error: {self.config.api_key_env} not set."
            )
        return key

    async def generate(self, request: GenerationRequest) -> str:
        """
        Run a single backend call and return the generated text.

        Args:
            request: Normalized generation request

        Returns:
            Extracted text with surrounding whitespace removed

        Raises:
            ConfigurationError: API key missing
            TransportError: Backend not reachable / timed out
            UpstreamError: Backend returned non-2xx (4xx/5xx passed through, anything else 502)
            ExtractionError: 2xx body without usable text
        """
        key = self.api_key()
        model = self.config.resolve_model(request.model_hint)
        system_instruction = request.system_instruction or DEFAULT_SYSTEM_INSTRUCTION
        url, payload = self.build_request(request.prompt, system_instruction, model)

        params = {}
        headers = dict(self.config.extra_headers)
        if self.config.auth_style == "query_key":
            params["key"] = key
        else:
            headers["Authorization"] = f"Bearer {key}"

        logger.debug(f"Calling {self.config.name} (model: {model}, requested: {request.model_hint})")

        try:
            response = await self.client.post(url, json=payload, params=params, headers=headers)
        except httpx.RequestError as e:
            description = str(e) or e.__class__.__name__
            logger.error(f"{self.config.name} transport failure: {description}")
            raise TransportError(f"Internal server error during API call: {description}") from e

        if not response.is_success:
            message = self.upstream_message(response)
            logger.error(
                f"{self.config.name} API error {response.status_code}: {preview(response.text, 500)}"
            )
            raise UpstreamError(message, upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"{self.config.name} returned non-JSON body: {preview(response.text, 500)}")
            raise ExtractionError(
                f"Failed to extract generated Lua code from {self.config.name} response: body is not JSON."
            ) from e

        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"{self.config.name} response missing text content: {preview(str(data), 500)}")
            raise ExtractionError(
                f"Failed to extract generated Lua code from {self.config.name} response."
            ) from e

        if not isinstance(text, str) or not text.strip():
            logger.error(f"{self.config.name} response has empty text content: {preview(str(data), 500)}")
            raise ExtractionError(
                f"Failed to extract generated Lua code from {self.config.name} response: empty text."
            )

        text = text.strip()
        logger.info(f"{self.config.name} generate success (model: {model}, {len(text)} chars)")
        return text

    def upstream_message(self, response: httpx.Response) -> str:
        """Best-effort error message: error.message, then message, then raw body."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
            if body.get("message"):
                return str(body["message"])

        raw = response.text.strip()
        return raw or f"{self.config.name} API returned HTTP {response.status_code}."

    def describe(self) -> dict:
        return {
            "name": self.config.name,
            "request_shape": self.config.request_shape,
            "default_model": self.config.default_model,
            "api_key_env": self.config.api_key_env,
            "api_key_configured": bool(os.environ.get(self.config.api_key_env, "").strip()),
        }

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
