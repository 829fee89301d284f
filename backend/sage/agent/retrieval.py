"""Retrieval agent

Deterministic, not an LLM agent: runs one similarity search against the
knowledge store. A failing store never fails the pipeline; it is reported
as an error step and the answer is generated without context.
"""

import logging
from typing import Optional

from .base import Agent
from ..database.vector_db import KnowledgeStore, get_store
from ..schema import RetrievalOutput, StepStatus

logger = logging.getLogger(__name__)


class RetrievalAgent(Agent):
    """Fetches the k most relevant documents for a query"""

    name = "RetrievalAgent"

    def __init__(self, store: Optional[KnowledgeStore] = None):
        """
        Initialize the retrieval agent.

        Args:
            store: Knowledge store, the shared instance is resolved lazily if None
        """
        self.store = store

    async def process(self, query: str, k: int = 5) -> RetrievalOutput:
        steps = [
            self._step(
                "Vector Search",
                StepStatus.PROCESSING,
                "Searching for relevant documents...",
            )
        ]

        logger.info(f"Searching for query: \"{query[:60]}\" with k={k}")

        try:
            store = self.store or await get_store()
            documents = await store.search(query, k)
        except Exception as e:
            logger.error(f"Error during search: {e}")
            steps.append(
                self._step(
                    "Vector Search",
                    StepStatus.ERROR,
                    f"Search failed: {e}",
                )
            )
            return RetrievalOutput(documents=[], thinking_steps=steps)

        if not documents:
            logger.info("No documents found in collection")
        else:
            for doc in documents[:3]:
                logger.debug(f"  [{doc.score:.3f}] {doc.source}: {doc.content[:80]}...")

        steps.append(
            self._step(
                "Vector Search",
                StepStatus.COMPLETED,
                f"Found {len(documents)} relevant documents",
                details={"k": k, "count": len(documents)},
            )
        )
        return RetrievalOutput(documents=documents, thinking_steps=steps)
