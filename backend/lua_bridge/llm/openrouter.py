"""
OpenRouter backend implementation.

WHAT: External LLM access via OpenRouter's chat completions API
WHY: One key reaches many model vendors behind an OpenAI-compatible schema
HOW: messages array with system + user turns, bearer authorization header
"""

from typing import Any

from .http_backend import HTTPBackend


class OpenRouterBackend(HTTPBackend):
    """OpenAI-style chat completions backend."""

    def build_request(self, prompt: str, system_instruction: str, model: str) -> tuple[str, dict]:
        payload = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
        }
        if self.config.temperature is not None:
            payload["temperature"] = self.config.temperature
        if self.config.max_output_tokens is not None:
            payload["max_tokens"] = self.config.max_output_tokens

        url = f"{self.config.endpoint_url.rstrip('/')}/chat/completions"
        return url, payload

    def extract_text(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]
