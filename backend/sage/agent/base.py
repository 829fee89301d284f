"""Base classes for pipeline agents"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TypeVar

from ..config import get_config
from ..providers import ProviderFactory, ProviderPair
from ..schema import AgentOutput, StepStatus, ThinkingStep

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Agent(ABC):
    """Single-purpose unit of work with a uniform async process() contract"""

    name: str = "Agent"

    def _step(
        self,
        step: str,
        status: StepStatus,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> ThinkingStep:
        """Build a thinking step attributed to this agent"""
        return ThinkingStep(
            agent=self.name,
            step=step,
            status=status,
            message=message,
            details=details,
        )

    @abstractmethod
    async def process(self, *args, **kwargs) -> AgentOutput:
        """
        Run the agent.

        Returns:
            Agent-specific output carrying its thinking steps
        """
        pass


class GenerativeAgent(Agent):
    """
    Agent that calls the generation providers.

    Providers are tried in order (primary, then secondary). A provider that
    raises or returns blank text counts as failed; when every provider has
    failed the helpers return None and the subclass applies its own fallback.
    """

    def __init__(self, providers: Optional[ProviderPair] = None, config=None):
        """
        Initialize the agent.

        Args:
            providers: Primary/secondary providers (built from config if None)
            config: Optional configuration object
        """
        if config is None:
            config = get_config()
        if providers is None:
            providers = ProviderFactory.create_pair(config)

        self.config = config
        self.providers = providers

    async def _generate(self, prompt: str, temperature: float) -> Optional[str]:
        """Return the first non-blank completion, or None if all providers fail"""
        return await self._generate_structured(prompt, temperature, parse=lambda text: text)

    async def _generate_structured(
        self,
        prompt: str,
        temperature: float,
        parse: Callable[[str], Optional[T]],
    ) -> Optional[T]:
        """
        Generate with fallback, accepting the first response that parses.

        Args:
            prompt: Prompt text
            temperature: Sampling temperature
            parse: Converts raw text into a value, None when unusable

        Returns:
            Parsed value from the first successful provider, or None
        """
        for provider in self.providers:
            provider_name = getattr(provider, "name", provider.__class__.__name__)
            try:
                text = await provider.generate(
                    prompt,
                    temperature=temperature,
                    max_tokens=self.config.generation.max_tokens,
                )
            except Exception as e:
                logger.warning(f"{self.name}: provider {provider_name} failed: {e}")
                continue

            if not text or not text.strip():
                logger.warning(f"{self.name}: provider {provider_name} returned an empty response")
                continue

            parsed = parse(text)
            if parsed is None:
                logger.warning(f"{self.name}: could not parse response from {provider_name}")
                continue

            return parsed

        return None
