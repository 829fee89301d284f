"""Provider factory for creating primary/fallback generation backends"""

import logging
from typing import Optional

from .base import GenerationProvider, ProviderPair
from .openai_provider import OpenAICompatibleProvider
from ..config import get_config, Config

logger = logging.getLogger(__name__)


class ProviderFactory:
    """Factory for creating generation providers from configuration"""

    @staticmethod
    def create(name: str, config: Optional[Config] = None) -> GenerationProvider:
        """
        Create a provider instance by configured name.

        Args:
            name: Provider name (e.g., "gemini", "ollama")
            config: Optional configuration object

        Returns:
            Provider instance

        Raises:
            ValueError: If the provider is unknown or its API key is missing
        """
        if config is None:
            config = get_config()

        provider_config = config.get_provider(name)
        logger.info(f"Creating provider: {name} ({provider_config.model})")
        return OpenAICompatibleProvider(name=name, provider_config=provider_config)

    @staticmethod
    def create_primary(config: Optional[Config] = None) -> GenerationProvider:
        """Create provider using the primary model from config"""
        if config is None:
            config = get_config()

        logger.info(f"Creating primary provider: {config.model.primary}")
        return ProviderFactory.create(config.model.primary, config)

    @staticmethod
    def create_fallback(config: Optional[Config] = None) -> Optional[GenerationProvider]:
        """Create provider using the fallback model from config, if any"""
        if config is None:
            config = get_config()

        if not config.model.fallback:
            return None

        logger.info(f"Creating fallback provider: {config.model.fallback}")
        return ProviderFactory.create(config.model.fallback, config)

    @staticmethod
    def create_pair(config: Optional[Config] = None) -> ProviderPair:
        """
        Create the primary/secondary pair used by the agents.

        A provider that cannot be created (missing key, unknown name) is left
        out of the pair so the agents' fallback chain skips it.

        Args:
            config: Optional configuration object

        Returns:
            ProviderPair with None in place of unavailable providers
        """
        if config is None:
            config = get_config()

        try:
            primary = ProviderFactory.create_primary(config)
        except ValueError as e:
            logger.warning(f"Primary provider unavailable: {e}")
            primary = None

        try:
            secondary = ProviderFactory.create_fallback(config)
        except ValueError as e:
            logger.warning(f"Fallback provider unavailable: {e}")
            secondary = None

        return ProviderPair(primary=primary, secondary=secondary)
