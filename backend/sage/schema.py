"""Data models shared by the store, agents and pipelines"""

from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from enum import Enum


class StepStatus(str, Enum):
    """Status of a thinking step"""
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class Difficulty(str, Enum):
    """Quiz difficulty levels"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class UserLevel(str, Enum):
    """Learner levels for tutorials"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SectionType(str, Enum):
    """Tutorial section kinds"""
    EXPLANATION = "explanation"
    EXAMPLE = "example"
    EXERCISE = "exercise"
    SUMMARY = "summary"


class ThinkingStep(BaseModel):
    """Progress/audit entry emitted by an agent"""
    model_config = ConfigDict(frozen=True)

    agent: str
    step: str
    status: StepStatus
    message: str
    details: Optional[Dict[str, Any]] = None


class RetrievedDocument(BaseModel):
    """Document returned by the knowledge store"""
    model_config = ConfigDict(frozen=True)

    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    score: float = 0.0

    @property
    def distance(self) -> float:
        """Similarity score under its legacy name (higher = more relevant)"""
        return self.score

    @property
    def source(self) -> Optional[str]:
        """Get source identifier from metadata"""
        return self.metadata.get("source")


class DocumentInput(BaseModel):
    """Document submitted for ingestion"""
    content: str = Field(..., min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


# Agent outputs
class AgentOutput(BaseModel):
    """Base for every agent result"""
    thinking_steps: List[ThinkingStep] = Field(default_factory=list)


class QueryAnalysis(AgentOutput):
    """Output of the query analysis stage"""
    original_query: str
    processed_query: str
    needs_retrieval: bool


class RetrievalOutput(AgentOutput):
    documents: List[RetrievedDocument] = Field(default_factory=list)


class AnswerOutput(AgentOutput):
    answer: str


class CritiqueOutput(AgentOutput):
    critique: str
    score: int


class RefineOutput(AgentOutput):
    refined_answer: str


class QuizQuestion(BaseModel):
    """Multiple choice question with exactly four options"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer: int = Field(..., alias="correctAnswer", ge=0, le=3)
    explanation: str = ""
    difficulty: str = Difficulty.MEDIUM.value
    category: str = ""
    source: str = "Generated from context"


class TutorSection(BaseModel):
    """One section of a generated tutorial"""
    id: str
    title: str
    content: str
    type: SectionType
    sources: List[RetrievedDocument] = Field(default_factory=list)


class Suggestions(BaseModel):
    """Suggestions grouped into three fixed categories"""
    model_config = ConfigDict(populate_by_name=True)

    creative_applications: List[str] = Field(..., alias="creativeApplications", min_length=3)
    learning_education: List[str] = Field(..., alias="learningEducation", min_length=3)
    business_solutions: List[str] = Field(..., alias="businessSolutions", min_length=3)
    pro_tip: str = Field(..., alias="proTip")

    @field_validator("creative_applications", "learning_education", "business_solutions")
    @classmethod
    def keep_three(cls, value: List[str]) -> List[str]:
        return value[:3]


class QuizOutput(AgentOutput):
    questions: List[QuizQuestion]


class TutorOutput(AgentOutput):
    tutorial_sections: List[TutorSection]


class SuggestionsOutput(AgentOutput):
    suggestions: Suggestions


# Pipeline inputs/outputs
class PipelineOptions(BaseModel):
    """Mode-specific options accepted by every pipeline"""
    topic: Optional[str] = None
    difficulty: Difficulty = Difficulty.MEDIUM
    question_count: PositiveInt = 5
    user_level: UserLevel = UserLevel.INTERMEDIATE
    learning_style: str = "reading"
    document_count: Optional[PositiveInt] = None
    creativity: str = "balanced"  # Recorded only, does not change temperature
    use_context: bool = True


class PipelineResult(BaseModel):
    """Fields common to every pipeline result"""
    thinking_steps: List[ThinkingStep] = Field(default_factory=list)
    pipeline_info: str
    sources: List[RetrievedDocument] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ChatResult(PipelineResult):
    answer: str


class QuizResult(PipelineResult):
    questions: List[QuizQuestion]


class TutorResult(PipelineResult):
    tutorial_sections: List[TutorSection]


class SuggestionsResult(PipelineResult):
    suggestions: Suggestions
