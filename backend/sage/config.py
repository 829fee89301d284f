"""Configuration management for SAGE"""

import os
from typing import Optional, List, Dict
from pathlib import Path
import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class ProviderConfig(BaseModel):
    """Connection settings for one OpenAI-compatible generation backend"""
    api_key_env: Optional[str] = None  # None for keyless local servers (Ollama)
    base_url: Optional[str] = None
    model: str
    timeout: float = 60.0


def _default_providers() -> Dict[str, ProviderConfig]:
    return {
        "gemini": ProviderConfig(
            api_key_env="GOOGLE_API_KEY",
            base_url="https://generativelanguage.googleapis.com/v1beta/openai/",
            model="gemini-1.5-flash",
        ),
        "ollama": ProviderConfig(
            base_url="http://localhost:11434/v1",
            model="gemma3:1b",
            timeout=120.0,
        ),
    }


class ModelConfig(BaseModel):
    """Model configuration"""
    primary: str = "gemini"
    fallback: Optional[str] = "ollama"
    providers: Dict[str, ProviderConfig] = Field(default_factory=_default_providers)


class GenerationConfig(BaseModel):
    """Sampling parameters per agent"""
    max_tokens: int = 2048
    answer_temperature: float = 0.7
    refine_temperature: float = 0.7
    quiz_temperature: float = 0.8  # Higher for question variety
    tutor_temperature: float = 0.6
    suggestions_temperature: float = 0.8


class VectorDBConfig(BaseModel):
    """Vector database configuration"""
    provider: str = "qdrant"
    host: str = "localhost"
    port: int = 6333
    url: Optional[str] = None  # Qdrant Cloud URL, takes precedence over host/port
    api_key_env: str = "QDRANT_CLOUD_API_KEY"
    collection_name: str = "sage_bot_collection"
    distance: str = "Cosine"


class EmbeddingConfig(BaseModel):
    """Embedding configuration"""
    api_key_env: str = "GOOGLE_API_KEY"
    base_url: Optional[str] = "https://generativelanguage.googleapis.com/v1beta/openai/"
    model: str = "text-embedding-004"
    dimensions: int = 768
    batch_size: int = 100


class CorpusConfig(BaseModel):
    """Corpus processing configuration"""
    chunk_size: int = 1200
    chunk_overlap: int = 100
    max_document_chars: int = 200_000
    fetch_timeout: float = 30.0


class APIConfig(BaseModel):
    """HTTP API configuration"""
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )


class Config(BaseModel):
    """Main configuration"""
    model: ModelConfig = Field(default_factory=ModelConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    vector_db: VectorDBConfig = Field(default_factory=VectorDBConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    api: APIConfig = Field(default_factory=APIConfig)

    @classmethod
    def from_yaml(cls, config_path: str = "config.yaml") -> "Config":
        """Load configuration from YAML file"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def get_provider(self, name: str) -> ProviderConfig:
        """
        Get provider configuration by name.

        Raises:
            ValueError: If the provider is not configured
        """
        if name not in self.model.providers:
            available = ", ".join(self.model.providers.keys())
            raise ValueError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return self.model.providers[name]

    def get_api_key(self, provider_name: str) -> Optional[str]:
        """Get API key for a generation provider"""
        provider = self.model.providers.get(provider_name)
        if provider and provider.api_key_env:
            return os.getenv(provider.api_key_env)
        return None


# Global config instance
_config: Optional[Config] = None


def get_config(config_path: str = "config.yaml") -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml(config_path)
    return _config


def reload_config(config_path: str = "config.yaml") -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(config_path)
    return _config
