"""Pipelines composing the agents into request flows"""

from .base import BasePipeline
from .chat import (
    AdaptivePipeline,
    ChatPipeline,
    SelfRefinementPipeline,
    SimplePipeline,
    SmartPipeline,
)
from .learning import QuizPipeline, SuggestionsPipeline, TutorPipeline
from .selector import available_modes, create_pipeline

__all__ = [
    "BasePipeline",
    "ChatPipeline",
    "SimplePipeline",
    "SmartPipeline",
    "SelfRefinementPipeline",
    "AdaptivePipeline",
    "QuizPipeline",
    "TutorPipeline",
    "SuggestionsPipeline",
    "create_pipeline",
    "available_modes",
]
