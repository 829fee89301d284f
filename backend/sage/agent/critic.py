"""Critic agent

Rule-based answer evaluation, no model call. The score starts at 5 and
only receives bonuses, so it always lies in [5, 9].
"""

import logging
from typing import List

from .base import Agent
from ..schema import CritiqueOutput, RetrievedDocument, StepStatus

logger = logging.getLogger(__name__)

BASELINE_SCORE = 5
MIN_ANSWER_LENGTH = 50
DETAILED_ANSWER_LENGTH = 100
HEDGE_PHRASES = ("i don't know", "i can't")
NO_DEFECTS = "Answer appears comprehensive and well-supported"


def hedges(answer: str) -> bool:
    lowered = answer.lower()
    return any(phrase in lowered for phrase in HEDGE_PHRASES)


class CriticAgent(Agent):
    """Scores an answer with simple heuristics and lists its defects"""

    name = "CriticAgent"

    async def process(
        self,
        query: str,
        answer: str,
        documents: List[RetrievedDocument],
    ) -> CritiqueOutput:
        answer = answer or ""
        critiques = []
        score = BASELINE_SCORE

        if len(answer) < MIN_ANSWER_LENGTH:
            critiques.append("Answer is too brief")
        if hedges(answer):
            critiques.append("Answer indicates uncertainty")
        if not documents:
            critiques.append("No supporting documents found")

        if len(answer) > DETAILED_ANSWER_LENGTH:
            score += 1
        if documents:
            score += 2
        if answer and not hedges(answer):
            score += 1

        critique = "; ".join(critiques) if critiques else NO_DEFECTS
        logger.info(f"Answer evaluated with score {score}: {critique}")

        step = self._step(
            "Answer Evaluation",
            StepStatus.COMPLETED,
            f"Answer evaluated with score: {score}/10",
            details={"critique": critique, "score": score},
        )
        return CritiqueOutput(critique=critique, score=score, thinking_steps=[step])
