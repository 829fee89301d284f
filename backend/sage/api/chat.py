"""
Chat and suggestions API endpoints
"""

from fastapi import APIRouter, HTTPException
from datetime import datetime, timezone
import logging

from .models import ChatRequest, SuggestRequest
from ..pipeline import create_pipeline
from ..schema import PipelineOptions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/chat", tags=["chat"])


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.post("")
async def chat(request: ChatRequest):
    """Answer a message with the requested pipeline"""
    try:
        pipeline = create_pipeline(request.pipeline_mode)
        result = await pipeline.process(request.message)

        return {
            "success": True,
            **result.model_dump(mode="json"),
            "mode": request.mode,
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Chat failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Chat failed: {str(e)}")


@router.post("/suggest")
async def suggest(request: SuggestRequest):
    """Generate suggestions grouped by category"""
    try:
        pipeline = create_pipeline("suggestions")
        options = PipelineOptions(
            topic=request.topic or request.message,
            creativity=request.creativity,
            use_context=request.use_context,
        )
        result = await pipeline.process(request.message, options)

        return {
            "success": True,
            **result.model_dump(mode="json"),
            "mode": "suggestions",
            "domain": request.domain or "general",
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Suggestion generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Suggestion generation failed: {str(e)}")
