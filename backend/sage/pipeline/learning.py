"""Quiz, tutoring and suggestions pipelines"""

import random
import logging
from typing import List, Optional

from .base import BasePipeline
from ..agent import QuizAgent, SuggestionsAgent, TutorAgent
from ..schema import (
    PipelineOptions,
    QuizResult,
    RetrievedDocument,
    SuggestionsResult,
    ThinkingStep,
    TutorResult,
)

logger = logging.getLogger(__name__)

QUIZ_SOURCES_SHOWN = 5


class QuizPipeline(BasePipeline):
    """
    Retrieves a wide document set and generates multiple choice questions.

    Documents are shuffled before generation to vary question order across
    runs; the reported sources are the first documents of the unshuffled
    retrieval result.
    """

    name = "Quiz Generation"
    default_k = 15

    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> QuizResult:
        options = options or PipelineOptions()
        steps: List[ThinkingStep] = []
        k = options.document_count or self.default_k

        analysis, documents = await self._analyze_and_retrieve(query, k, steps, always=True)
        topic = options.topic or analysis.processed_query

        shuffled: List[RetrievedDocument] = list(documents)
        random.shuffle(shuffled)

        quiz = await QuizAgent(self.providers, self.config).process(
            topic,
            shuffled,
            difficulty=options.difficulty.value,
            question_count=options.question_count,
        )
        steps.extend(quiz.thinking_steps)

        logger.info(f"✓ Generated {len(quiz.questions)} questions about '{topic}'")
        return QuizResult(
            questions=quiz.questions,
            thinking_steps=steps,
            pipeline_info=self.name,
            sources=documents[:QUIZ_SOURCES_SHOWN],
            metadata={
                "topic": topic,
                "difficulty": options.difficulty.value,
                "question_count": len(quiz.questions),
            },
        )


class TutorPipeline(BasePipeline):
    """Retrieves context and builds a sectioned tutorial"""

    name = "Tutoring"
    default_k = 8

    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> TutorResult:
        options = options or PipelineOptions()
        steps: List[ThinkingStep] = []
        k = options.document_count or self.default_k

        analysis, documents = await self._analyze_and_retrieve(query, k, steps, always=True)
        topic = options.topic or analysis.processed_query

        tutorial = await TutorAgent(self.providers, self.config).process(
            topic,
            documents,
            user_level=options.user_level.value,
            learning_style=options.learning_style,
        )
        steps.extend(tutorial.thinking_steps)

        logger.info(f"✓ Tutorial on '{topic}' has {len(tutorial.tutorial_sections)} sections")
        return TutorResult(
            tutorial_sections=tutorial.tutorial_sections,
            thinking_steps=steps,
            pipeline_info=self.name,
            sources=documents,
            metadata={
                "topic": topic,
                "user_level": options.user_level.value,
                "learning_style": options.learning_style,
                "section_count": len(tutorial.tutorial_sections),
            },
        )


class SuggestionsPipeline(BasePipeline):
    """Creative suggestions, optionally grounded in retrieved context"""

    name = "Suggestions"
    default_k = 5

    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> SuggestionsResult:
        options = options or PipelineOptions()
        steps: List[ThinkingStep] = []

        analysis = await self._analyze(query, steps)
        documents: List[RetrievedDocument] = []
        if analysis.needs_retrieval and options.use_context:
            k = options.document_count or self.default_k
            documents = await self._retrieve(analysis.processed_query, k, steps)

        topic = options.topic or analysis.processed_query
        output = await SuggestionsAgent(self.providers, self.config).process(
            topic,
            analysis.processed_query,
            documents,
            creativity=options.creativity,
        )
        steps.extend(output.thinking_steps)

        return SuggestionsResult(
            suggestions=output.suggestions,
            thinking_steps=steps,
            pipeline_info=self.name,
            sources=documents,
            metadata={
                "topic": topic,
                "creativity": options.creativity,
                "has_context": bool(documents),
            },
        )
