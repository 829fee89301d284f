"""
Quiz API endpoints
"""

from fastapi import APIRouter, HTTPException
import logging

from .chat import timestamp
from .models import QuizGenerateRequest, QuizValidateRequest
from ..pipeline import create_pipeline
from ..schema import PipelineOptions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/quiz", tags=["quiz"])

QUIZ_DOCUMENT_COUNT = 10

SUGGESTED_TOPICS = [
    {"name": "Artificial Intelligence", "description": "Fundamentals of AI and machine learning", "difficulty": "medium", "estimated_questions": 10},
    {"name": "Machine Learning", "description": "Core concepts and algorithms", "difficulty": "medium", "estimated_questions": 8},
    {"name": "Natural Language Processing", "description": "Text processing and language understanding", "difficulty": "hard", "estimated_questions": 6},
    {"name": "Vector Databases", "description": "Storage and retrieval of high-dimensional data", "difficulty": "hard", "estimated_questions": 5},
    {"name": "RAG Architecture", "description": "Retrieval-Augmented Generation systems", "difficulty": "hard", "estimated_questions": 7},
]


@router.post("/generate")
async def generate_quiz(request: QuizGenerateRequest):
    """Generate multiple choice questions about a topic"""
    try:
        pipeline = create_pipeline("quiz")
        options = PipelineOptions(
            topic=request.topic or request.message,
            difficulty=request.difficulty,
            question_count=request.question_count,
            document_count=QUIZ_DOCUMENT_COUNT,
        )
        result = await pipeline.process(request.message, options)

        return {
            "success": True,
            **result.model_dump(mode="json"),
            "mode": "quiz",
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Quiz generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Quiz generation failed: {str(e)}")


@router.get("/topics")
async def list_topics():
    """Suggested quiz topics"""
    return {"success": True, "topics": SUGGESTED_TOPICS, "timestamp": timestamp()}


@router.post("/validate")
async def validate_answer(request: QuizValidateRequest):
    """Check a submitted answer"""
    is_correct = request.selected_answer == request.correct_answer
    return {
        "success": True,
        "question_id": request.question_id,
        "is_correct": is_correct,
        "selected_answer": request.selected_answer,
        "correct_answer": request.correct_answer,
        "explanation": request.explanation or "No explanation provided",
        "feedback": "Excellent! You got it right!" if is_correct else "Not quite right, but keep learning!",
        "timestamp": timestamp(),
    }
