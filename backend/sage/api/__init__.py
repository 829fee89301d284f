"""
API package
"""

from .chat import router as chat_router
from .quiz import router as quiz_router
from .tutor import router as tutor_router
from .documents import router as documents_router

__all__ = ["chat_router", "quiz_router", "tutor_router", "documents_router"]
