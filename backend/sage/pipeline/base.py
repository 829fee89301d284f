"""Base pipeline

A pipeline is a fixed, or bounded, sequence of agent calls. Agents are
created fresh for every run; the store, the provider pair and the config
are the only state a pipeline instance holds.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..agent import QueryAgent, RetrievalAgent
from ..config import get_config
from ..database.vector_db import KnowledgeStore
from ..providers import ProviderFactory, ProviderPair
from ..schema import (
    PipelineOptions,
    PipelineResult,
    QueryAnalysis,
    RetrievedDocument,
    ThinkingStep,
)

logger = logging.getLogger(__name__)


class BasePipeline(ABC):
    """Common wiring for every pipeline"""

    name: str = "Pipeline"

    def __init__(
        self,
        store: Optional[KnowledgeStore] = None,
        providers: Optional[ProviderPair] = None,
        config=None,
    ):
        """
        Initialize the pipeline.

        Args:
            store: Knowledge store (shared instance is used if None)
            providers: Generation providers (built from config if None)
            config: Optional configuration object
        """
        if config is None:
            config = get_config()
        if providers is None:
            providers = ProviderFactory.create_pair(config)

        self.config = config
        self.store = store
        self.providers = providers

    async def _analyze(self, query: str, steps: List[ThinkingStep]) -> QueryAnalysis:
        analysis = await QueryAgent().process(query)
        steps.extend(analysis.thinking_steps)
        return analysis

    async def _retrieve(
        self,
        query: str,
        k: int,
        steps: List[ThinkingStep],
    ) -> List[RetrievedDocument]:
        retrieval = await RetrievalAgent(self.store).process(query, k)
        steps.extend(retrieval.thinking_steps)
        return retrieval.documents

    async def _analyze_and_retrieve(
        self,
        query: str,
        k: int,
        steps: List[ThinkingStep],
        always: bool = False,
    ) -> Tuple[QueryAnalysis, List[RetrievedDocument]]:
        """Run query analysis, then retrieval when needed (or always)"""
        analysis = await self._analyze(query, steps)

        documents: List[RetrievedDocument] = []
        if always or analysis.needs_retrieval:
            documents = await self._retrieve(analysis.processed_query, k, steps)
        else:
            logger.info(f"{self.name}: retrieval skipped for query")

        return analysis, documents

    @abstractmethod
    async def process(
        self,
        query: str,
        options: Optional[PipelineOptions] = None,
    ) -> PipelineResult:
        """
        Run the pipeline for one request.

        Args:
            query: Non-empty user query
            options: Mode-specific options

        Returns:
            Mode-specific result with the combined thinking steps
        """
        pass
