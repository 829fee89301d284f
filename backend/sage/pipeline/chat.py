"""Question answering pipelines"""

import logging
from typing import List, Optional

from .base import BasePipeline
from ..agent import AnswerAgent, CriticAgent, RefineAgent
from ..schema import ChatResult, PipelineOptions, RetrievedDocument, ThinkingStep

logger = logging.getLogger(__name__)


class ChatPipeline(BasePipeline):
    """Query -> retrieval (if needed) -> answer, followed by a quality policy"""

    retrieval_k: int = 5

    async def _improve(
        self,
        query: str,
        answer: str,
        documents: List[RetrievedDocument],
        steps: List[ThinkingStep],
        metadata: dict,
    ) -> str:
        return answer

    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> ChatResult:
        logger.info(f"{self.name} pipeline processing: {query[:60]}")
        steps: List[ThinkingStep] = []

        analysis, documents = await self._analyze_and_retrieve(query, self.retrieval_k, steps)

        result = await AnswerAgent(self.providers, self.config).process(
            analysis.processed_query, documents
        )
        steps.extend(result.thinking_steps)

        metadata: dict = {}
        answer = await self._improve(
            analysis.processed_query, result.answer, documents, steps, metadata
        )

        logger.info(f"✓ {self.name} pipeline finished with {len(steps)} steps")
        return ChatResult(
            answer=answer,
            thinking_steps=steps,
            pipeline_info=self.name,
            sources=documents,
            metadata=metadata,
        )


class SimplePipeline(ChatPipeline):
    """Single answer pass, no critique"""

    name = "Simple"
    retrieval_k = 3


class SmartPipeline(ChatPipeline):
    """One critique and at most one refinement"""

    name = "Smart"
    retrieval_k = 5
    refine_below = 7

    async def _improve(self, query, answer, documents, steps, metadata):
        critique = await CriticAgent().process(query, answer, documents)
        steps.extend(critique.thinking_steps)
        metadata["critic_score"] = critique.score
        metadata["refinements"] = 0

        if critique.score < self.refine_below:
            refined = await RefineAgent(self.providers, self.config).process(
                query, answer, critique.critique, documents
            )
            steps.extend(refined.thinking_steps)
            metadata["refinements"] = 1
            return refined.refined_answer

        return answer


class SelfRefinementPipeline(ChatPipeline):
    """Critique and refine until the score passes or the cap is reached"""

    name = "Self-Refinement"
    retrieval_k = 7
    pass_score = 8
    max_refinements = 3

    async def _improve(self, query, answer, documents, steps, metadata):
        critic = CriticAgent()
        refiner = RefineAgent(self.providers, self.config)
        refinements = 0

        while refinements < self.max_refinements:
            critique = await critic.process(query, answer, documents)
            steps.extend(critique.thinking_steps)
            metadata["critic_score"] = critique.score

            if critique.score >= self.pass_score:
                break

            refined = await refiner.process(query, answer, critique.critique, documents)
            steps.extend(refined.thinking_steps)
            answer = refined.refined_answer
            refinements += 1
            logger.info(f"Refinement {refinements}/{self.max_refinements} after score {critique.score}")

        metadata["refinements"] = refinements
        return answer


class AdaptivePipeline(BasePipeline):
    """Routes to a chat pipeline by query length"""

    name = "Adaptive"
    simple_below = 30
    complex_above = 100

    def classify(self, query: str) -> str:
        """Coarse complexity label from character length"""
        if len(query) < self.simple_below:
            return "simple"
        if len(query) > self.complex_above:
            return "complex"
        return "medium"

    def select(self, query: str) -> ChatPipeline:
        pipeline_class = {
            "simple": SimplePipeline,
            "medium": SmartPipeline,
            "complex": SelfRefinementPipeline,
        }[self.classify(query)]
        return pipeline_class(self.store, self.providers, self.config)

    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> ChatResult:
        complexity = self.classify(query)
        selected = self.select(query)
        logger.info(f"Adaptive routing: {complexity} query -> {selected.name}")

        result = await selected.process(query, options)
        return result.model_copy(
            update={
                "pipeline_info": f"{self.name} → {selected.name}",
                "metadata": {**result.metadata, "complexity": complexity},
            }
        )
