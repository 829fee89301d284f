"""Mode name to pipeline mapping"""

import logging
from typing import Dict, List, Optional, Type

from .base import BasePipeline
from .chat import AdaptivePipeline, SelfRefinementPipeline, SimplePipeline, SmartPipeline
from .learning import QuizPipeline, SuggestionsPipeline, TutorPipeline
from ..database.vector_db import KnowledgeStore
from ..providers import ProviderPair

logger = logging.getLogger(__name__)

PIPELINES: Dict[str, Type[BasePipeline]] = {
    "phase1": SimplePipeline,
    "simple": SimplePipeline,
    "phase2": SmartPipeline,
    "smart": SmartPipeline,
    "phase3": SelfRefinementPipeline,
    "self-refinement": SelfRefinementPipeline,
    "auto": AdaptivePipeline,
    "meta": AdaptivePipeline,
    "quiz": QuizPipeline,
    "tutor": TutorPipeline,
    "suggestions": SuggestionsPipeline,
}

DEFAULT_PIPELINE = AdaptivePipeline


def create_pipeline(
    mode: Optional[str],
    store: Optional[KnowledgeStore] = None,
    providers: Optional[ProviderPair] = None,
    config=None,
) -> BasePipeline:
    """
    Create a new pipeline instance for a mode.

    Args:
        mode: Mode name, case-insensitive
        store: Knowledge store passed to the pipeline
        providers: Generation providers passed to the pipeline
        config: Optional configuration object

    Returns:
        Pipeline instance; unknown modes get the adaptive pipeline
    """
    key = (mode or "").strip().lower()
    pipeline_class = PIPELINES.get(key)
    if pipeline_class is None:
        logger.warning(f"Unknown pipeline mode '{mode}', using {DEFAULT_PIPELINE.name}")
        pipeline_class = DEFAULT_PIPELINE

    return pipeline_class(store=store, providers=providers, config=config)


def available_modes() -> List[str]:
    """Recognised mode names"""
    return list(PIPELINES)
