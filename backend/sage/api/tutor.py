"""
Tutoring API endpoints
"""

from fastapi import APIRouter, HTTPException
from typing import Optional
import logging

from .chat import timestamp
from .models import TutorExplainRequest, TutorFeedbackRequest
from ..pipeline import create_pipeline
from ..schema import PipelineOptions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tutor", tags=["tutor"])

TUTOR_DOCUMENT_COUNT = 8
MASTERY_SECTIONS = 3

LEARNING_PATHS = [
    {
        "id": "ai-fundamentals",
        "name": "AI Fundamentals",
        "description": "Complete introduction to artificial intelligence concepts",
        "level": "beginner",
        "duration": "4-6 weeks",
        "modules": ["Introduction to AI", "Machine Learning Basics", "Neural Networks", "AI Applications"],
        "prerequisites": [],
    },
    {
        "id": "ml-advanced",
        "name": "Advanced Machine Learning",
        "description": "Deep dive into machine learning algorithms and techniques",
        "level": "intermediate",
        "duration": "6-8 weeks",
        "modules": ["Supervised Learning", "Unsupervised Learning", "Deep Learning", "Model Optimization"],
        "prerequisites": ["Basic statistics", "Programming knowledge"],
    },
    {
        "id": "rag-systems",
        "name": "RAG Architecture Mastery",
        "description": "Build and deploy Retrieval-Augmented Generation systems",
        "level": "advanced",
        "duration": "3-4 weeks",
        "modules": ["Vector Databases", "Embedding Techniques", "RAG Pipeline Design", "Production Deployment"],
        "prerequisites": ["NLP basics", "Python programming", "API development"],
    },
    {
        "id": "nlp-specialization",
        "name": "NLP Specialization",
        "description": "Master natural language processing from basics to advanced",
        "level": "intermediate",
        "duration": "5-7 weeks",
        "modules": ["Text Preprocessing", "Language Models", "Sentiment Analysis", "Text Generation"],
        "prerequisites": ["Basic ML knowledge"],
    },
]


@router.post("/explain")
async def explain(request: TutorExplainRequest):
    """Build a sectioned tutorial for a topic"""
    try:
        pipeline = create_pipeline("tutor")
        options = PipelineOptions(
            topic=request.topic or request.message,
            user_level=request.user_level,
            learning_style=request.learning_style,
            document_count=TUTOR_DOCUMENT_COUNT,
        )
        result = await pipeline.process(request.message, options)

        return {
            "success": True,
            **result.model_dump(mode="json"),
            "mode": "tutor",
            "timestamp": timestamp(),
        }

    except Exception as e:
        logger.error(f"Tutorial generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Tutorial generation failed: {str(e)}")


@router.post("/feedback")
async def feedback(request: TutorFeedbackRequest):
    """Grade learner progress and recommend next steps"""
    completed = len(request.completed_sections)
    topic = request.topic

    if request.struggling_areas:
        level = "needs-improvement"
        encouragement = "Learning takes time - you're doing great by identifying areas to improve!"
        next_steps = [f"Review concepts related to: {area}" for area in request.struggling_areas]
    elif completed >= MASTERY_SECTIONS:
        level = "excellent"
        encouragement = "Outstanding! You've mastered this topic. Ready for advanced concepts?"
        next_steps = [
            f"Explore advanced {topic} concepts",
            "Try related topics",
            f"Take a challenging quiz on {topic}",
        ]
    else:
        level = "good"
        encouragement = "Great progress! Keep up the excellent work!"
        next_steps = []

    return {
        "success": True,
        "feedback": {
            "level": level,
            "encouragement": encouragement,
            "completion_rate": f"{completed} sections completed",
            "next_steps": next_steps,
            "recommendations": [
                f"Continue practicing {topic} concepts",
                "Try explaining the concepts to others",
                "Apply the knowledge in practical exercises",
            ],
        },
        "timestamp": timestamp(),
    }


@router.get("/learning-paths")
async def learning_paths(level: str = "intermediate", interest: Optional[str] = None):
    """
    List learning paths.

    Beginner paths are always included unless level is "all"; interest
    filters by name or description.
    """
    paths = LEARNING_PATHS
    if level != "all":
        paths = [p for p in paths if p["level"] in (level, "beginner")]
    if interest:
        needle = interest.lower()
        paths = [
            p for p in paths
            if needle in p["name"].lower() or needle in p["description"].lower()
        ]

    return {
        "success": True,
        "learning_paths": paths,
        "metadata": {
            "total_paths": len(LEARNING_PATHS),
            "filtered_count": len(paths),
            "level": level,
            "interest": interest or "all",
        },
        "timestamp": timestamp(),
    }
