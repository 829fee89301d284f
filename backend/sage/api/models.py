"""
Pydantic models for API request validation
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any

from ..schema import Difficulty, UserLevel


class RequestModel(BaseModel):
    """Accepts both snake_case and camelCase field names"""
    model_config = ConfigDict(populate_by_name=True)


# Chat Models
class ChatRequest(RequestModel):
    """Request for a chat answer"""
    message: str = Field(..., min_length=1)
    pipeline_mode: str = Field(default="meta", alias="pipelineMode")
    mode: str = "general"


class SuggestRequest(RequestModel):
    """Request for creative suggestions"""
    message: str = Field(..., min_length=1)
    creativity: str = "balanced"
    domain: Optional[str] = None
    topic: Optional[str] = None
    use_context: bool = Field(default=True, alias="useContext")


# Quiz Models
class QuizGenerateRequest(RequestModel):
    """Request for quiz generation"""
    message: str = Field(..., min_length=1)
    topic: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    question_count: int = Field(default=5, ge=1, le=20, alias="questionCount")


class QuizValidateRequest(RequestModel):
    """Answer submitted for a quiz question"""
    question_id: Optional[str] = Field(default=None, alias="questionId")
    selected_answer: int = Field(..., alias="selectedAnswer")
    correct_answer: int = Field(..., alias="correctAnswer")
    explanation: Optional[str] = None


# Tutor Models
class TutorExplainRequest(RequestModel):
    """Request for a structured tutorial"""
    message: str = Field(..., min_length=1)
    topic: Optional[str] = None
    user_level: UserLevel = Field(default=UserLevel.INTERMEDIATE, alias="userLevel")
    learning_style: str = Field(default="reading", alias="learningStyle")


class TutorFeedbackRequest(RequestModel):
    """Learner progress report"""
    topic: str = Field(..., min_length=1)
    completed_sections: List[str] = Field(default_factory=list, alias="completedSections")
    struggling_areas: List[str] = Field(default_factory=list, alias="strugglingAreas")


# Document Models
class DocumentUpload(RequestModel):
    """Document submitted for upload"""
    content: str = Field(..., min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class UploadRequest(RequestModel):
    """Batch of documents to add to the knowledge base"""
    documents: List[DocumentUpload] = Field(..., min_length=1)


class SearchRequest(RequestModel):
    """Similarity search over the knowledge base"""
    query: str = Field(..., min_length=1)
    limit: int = Field(default=5, ge=1, le=50)


class IngestUrlRequest(RequestModel):
    """One URL or a list of URLs to fetch and ingest"""
    url: Optional[str] = None
    urls: List[str] = Field(default_factory=list)

    def all_urls(self) -> List[str]:
        if self.urls:
            return list(self.urls)
        return [self.url] if self.url else []
