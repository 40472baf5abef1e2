"""
Gemini backend implementations.

WHAT: Native conversational and structured-JSON variants of generateContent
WHY: Direct Google API access without an aggregator in between
HOW: contents/systemInstruction envelope, API key as ?key= query parameter
"""

import json
from typing import Any

from .http_backend import HTTPBackend
from .prompts import STRUCTURED_CODE_FIELD


class GeminiBackend(HTTPBackend):
    """Gemini generateContent with the plain conversational schema."""

    def generation_config(self) -> dict:
        config = {}
        if self.config.temperature is not None:
            config["temperature"] = self.config.temperature
        if self.config.max_output_tokens is not None:
            config["maxOutputTokens"] = self.config.max_output_tokens
        return config

    def build_request(self, prompt: str, system_instruction: str, model: str) -> tuple[str, dict]:
        # Only these keys are forwarded upstream
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
        }
        generation_config = self.generation_config()
        if generation_config:
            payload["generationConfig"] = generation_config

        url = f"{self.config.endpoint_url.rstrip('/')}/models/{model}:generateContent"
        return url, payload

    def extract_text(self, data: Any) -> str:
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part["text"] for part in parts if "text" in part)


class GeminiStructuredBackend(GeminiBackend):
    """
    Gemini generateContent with a strict JSON response schema.

    The model is asked for {"lua_code": "..."}; the candidate text is that
    JSON document, not the answer itself.
    """

    def generation_config(self) -> dict:
        config = super().generation_config()
        config["responseMimeType"] = "application/json"
        config["responseSchema"] = {
            "type": "OBJECT",
            "properties": {STRUCTURED_CODE_FIELD: {"type": "STRING"}},
            "required": [STRUCTURED_CODE_FIELD],
        }
        return config

    def extract_text(self, data: Any) -> str:
        inner = super().extract_text(data)
        # json.JSONDecodeError is a ValueError -> ExtractionError in the base flow
        document = json.loads(inner)
        return document[STRUCTURED_CODE_FIELD]
