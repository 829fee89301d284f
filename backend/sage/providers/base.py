"""Base generation provider interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional


class GenerationProvider(ABC):
    """Abstract base class for text generation backends"""

    name: str = "provider"

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        """
        Generate a completion for a single prompt.

        Args:
            prompt: Full prompt text
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text

        Raises:
            Exception: Any transport or API error is propagated to the caller
        """
        pass


@dataclass(frozen=True)
class ProviderPair:
    """Primary and secondary generation providers, either may be missing"""
    primary: Optional[GenerationProvider] = None
    secondary: Optional[GenerationProvider] = None

    def __iter__(self) -> Iterator[GenerationProvider]:
        """Iterate over the configured providers in fallback order"""
        for provider in (self.primary, self.secondary):
            if provider is not None:
                yield provider
