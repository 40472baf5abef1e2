"""
Application configuration using pydantic-settings.

WHAT: Centralized config from environment variables
WHY: Type-safe, validated config with sensible defaults
HOW: Pydantic BaseSettings reads from .env and environment
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Literal, Optional
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App metadata
    APP_NAME: str = "Lua Command Bridge"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Backend selection (one backend per deployment): gemini, gemini_structured
    # or openrouter. Checked when the backend is first needed, not here.
    LLM_BACKEND: str = "openrouter"

    # Name of the environment variable holding the backend API key.
    # The key itself is read at call time, never at startup.
    LLM_API_KEY_ENV: str = "GEMINI_API_KEY"

    # LLM Request Configuration
    LLM_TIMEOUT: int = 60  # seconds
    LLM_TEMPERATURE: Optional[float] = None
    LLM_MAX_OUTPUT_TOKENS: Optional[int] = None

    # Gemini (native and structured-output variants)
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_DEFAULT_MODEL: str = "gemini-2.5-flash"

    # OpenRouter (chat completions)
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_DEFAULT_MODEL: str = "google/gemini-2.5-flash"
    OPENROUTER_REFERER: str = ""  # falls back to APP_NAME

    # Command relay
    RELAY_STORE: Literal["memory", "sqlite"] = "memory"
    RELAY_MIN_CODE_LENGTH: int = 5

    # Database (only used when RELAY_STORE=sqlite)
    DATABASE_URL: str = "sqlite:///./data/relay.db"

    # CORS - accepts comma-separated string or list
    # Default allows every origin
    CORS_ORIGINS: str = "*"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, list):
            return ",".join(v)
        return v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "./data/logs/app.log"  # empty string disables the file handler

    class Config:
        # Look for .env in project root first, then backend/.env
        env_file = [
            str(Path(__file__).parent.parent.parent.parent / ".env"),
            str(Path(__file__).parent.parent.parent / ".env"),
        ]
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
