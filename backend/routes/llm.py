"""Direct text generation proxy for clients without their own key handling."""

from fastapi import APIRouter, Depends, HTTPException

from deps import get_llm_service
from llm_service import LLMService, is_llm_error, parse_llm_error
from schemas import GenerateRequest, GenerateResponse

router = APIRouter(prefix="/api/llm", tags=["llm"])

_ERROR_STATUS = {
    "not_configured": 500,
    "auth": 401,
    "rate_limit": 429,
}


@router.post("/generate", response_model=GenerateResponse)
async def generate_text(body: GenerateRequest, llm: LLMService = Depends(get_llm_service)):
    if not body.prompt or not body.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    text = await llm.generate(prompt=body.prompt, api_key=body.api_key)
    if is_llm_error(text):
        err = parse_llm_error(text)
        raise HTTPException(
            status_code=_ERROR_STATUS.get(err.get("type"), 500),
            detail=err.get("detail") or "Failed to generate text",
        )
    return GenerateResponse(text=text)
