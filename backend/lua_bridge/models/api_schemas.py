"""
Pydantic API schemas for the HTTP surface.

WHAT: Request and response models for FastAPI
WHY: One stable wire shape per endpoint for the web client and the game poller
HOW: Pydantic v2 models with camelCase aliases where the callers use them
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


# ========== Generation ==========

class GenerateRequest(BaseModel):
    """Body of POST /generate."""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    prompt: str = Field(..., description="Natural-language description of the desired effect")
    system_instruction: Optional[str] = Field(
        default=None,
        alias="systemInstruction",
        description="Overrides the built-in ground rules",
    )
    model: Optional[str] = Field(default=None, description="Model hint; unknown hints use the default model")


class GenerateResponse(BaseModel):
    """Successful generation."""
    code: str
    backend: str
    model: Optional[str] = None


# ========== Command relay ==========

class QueueWriteRequest(BaseModel):
    """Body of POST /queue."""
    code: str = Field(..., description="Command text to hand to the game poller")


class QueueWriteResponse(BaseModel):
    """Acknowledgement of POST /queue."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    enqueued_at: datetime = Field(..., alias="enqueuedAt")


class QueueReadResponse(BaseModel):
    """GET /queue result; pending=False is the explicit empty marker."""
    model_config = ConfigDict(populate_by_name=True)

    code: str
    enqueued_at: Optional[datetime] = Field(default=None, alias="enqueuedAt")
    message: str
    pending: bool
