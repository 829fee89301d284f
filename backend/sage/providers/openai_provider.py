"""OpenAI-compatible chat completion provider (Gemini, Ollama, OpenAI)"""

import os
import logging
from typing import Optional

from openai import AsyncOpenAI

from .base import GenerationProvider
from ..config import ProviderConfig

logger = logging.getLogger(__name__)


class OpenAICompatibleProvider(GenerationProvider):
    """Provider speaking the OpenAI chat completions protocol"""

    def __init__(
        self,
        name: str,
        provider_config: ProviderConfig,
        api_key: Optional[str] = None,
    ):
        """
        Initialize provider.

        Args:
            name: Provider name from config (e.g., "gemini", "ollama")
            provider_config: Endpoint and model settings
            api_key: Optional explicit API key, read from api_key_env otherwise

        Raises:
            ValueError: If the provider requires an API key and none is set
        """
        self.name = name
        self.model = provider_config.model

        if api_key is None and provider_config.api_key_env:
            api_key = os.getenv(provider_config.api_key_env)
            if not api_key:
                raise ValueError(
                    f"{provider_config.api_key_env} not found in environment variables"
                )

        self.client = AsyncOpenAI(
            # Local servers ignore the key but the client requires one
            api_key=api_key or "not-needed",
            base_url=provider_config.base_url,
            timeout=provider_config.timeout,
            max_retries=0,
        )

        logger.info(f"Initialized {name} provider with model: {self.model}")

    async def generate(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        """Call the chat completions endpoint with a single user message"""
        logger.debug(f"Calling {self.name} ({self.model}) with prompt: {prompt[:100]}...")

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )

        text = response.choices[0].message.content or ""
        logger.info(f"{self.name} call successful: {len(text)} chars generated")
        return text
