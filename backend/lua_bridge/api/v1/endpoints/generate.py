"""
Generation endpoint.

WHAT: POST /generate turns a prompt into Lua code via the configured backend
WHY: Keep the backend API key on the server instead of in the browser
HOW: Validate body, call the generation adapter, raise its error on failure
"""

from fastapi import APIRouter

from ....llm.adapter import get_adapter
from ....llm.types import GenerationRequest
from ....models.api_schemas import GenerateRequest, GenerateResponse
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/generate", response_model=GenerateResponse)
async def generate(body: GenerateRequest):
    """
    Generate a Lua snippet.

    Returns:
        {"code", "backend", "model"} on success

    Raises:
        ClientError: Blank prompt (400, no backend call)
        ConfigurationError: LLM_BACKEND names no known backend (500)
        GenerationError: Any backend failure, rendered by the error handler
    """
    request = GenerationRequest(
        prompt=body.prompt,
        system_instruction=body.system_instruction,
        model_hint=body.model,
    )

    adapter = get_adapter()
    result = await adapter.generate(request)
    if not result.ok:
        raise result.error

    return GenerateResponse(
        code=result.code,
        backend=adapter.backend.config.name,
        model=result.model,
    )
