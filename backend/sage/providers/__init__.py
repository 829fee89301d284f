"""Text generation providers"""

from .base import GenerationProvider, ProviderPair
from .openai_provider import OpenAICompatibleProvider
from .factory import ProviderFactory

__all__ = [
    "GenerationProvider",
    "ProviderPair",
    "OpenAICompatibleProvider",
    "ProviderFactory",
]
