"""Query analysis agent"""

import logging

from .base import Agent
from ..schema import QueryAnalysis, StepStatus

logger = logging.getLogger(__name__)

INTERROGATIVES = ("what", "how", "why", "when", "where", "who", "which")


def needs_retrieval(query: str) -> bool:
    """
    Cheap gate deciding whether a query is worth a knowledge-base lookup.

    True when the query contains an interrogative word (substring match),
    is longer than 20 characters, or contains a question mark.
    """
    lowered = query.lower()
    return (
        any(word in lowered for word in INTERROGATIVES)
        or len(query) > 20
        or "?" in lowered
    )


class QueryAgent(Agent):
    """Normalizes the raw query and decides whether retrieval is needed"""

    name = "QueryAgent"

    async def process(self, query: str) -> QueryAnalysis:
        processed_query = str(query or "").strip()
        retrieve = needs_retrieval(processed_query)

        logger.debug(f"Query analysed: needs_retrieval={retrieve}, query={processed_query[:80]}")

        step = self._step(
            "Query Analysis",
            StepStatus.COMPLETED,
            f"Query processed. Needs retrieval: {retrieve}",
            details={
                "original_query": query,
                "processed_query": processed_query,
                "needs_retrieval": retrieve,
            },
        )
        return QueryAnalysis(
            original_query=query,
            processed_query=processed_query,
            needs_retrieval=retrieve,
            thinking_steps=[step],
        )
