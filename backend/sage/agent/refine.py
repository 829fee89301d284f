"""Refinement agent"""

import logging
from typing import List

from .answer import build_context
from .base import GenerativeAgent
from ..schema import RefineOutput, RetrievedDocument, StepStatus

logger = logging.getLogger(__name__)


REFINE_PROMPT = """Please refine the following answer based on the critique provided. Make it more comprehensive and accurate, using only the supporting documents.

Original Query: {query}
Original Answer: {answer}
Critique: {critique}
Supporting Documents:
{context}

Refined Answer:"""


class RefineAgent(GenerativeAgent):
    """Rewrites an answer to address a critique; keeps the original on failure"""

    name = "RefineAgent"

    async def process(
        self,
        query: str,
        answer: str,
        critique: str,
        documents: List[RetrievedDocument],
    ) -> RefineOutput:
        prompt = REFINE_PROMPT.format(
            query=query,
            answer=answer,
            critique=critique,
            context=build_context(documents),
        )

        refined = await self._generate(prompt, self.config.generation.refine_temperature)
        if refined is None:
            logger.warning("Refinement failed on all providers, keeping original answer")
            refined = answer

        step = self._step(
            "Answer Refinement",
            StepStatus.COMPLETED,
            "Answer refined successfully",
        )
        return RefineOutput(refined_answer=refined, thinking_steps=[step])
