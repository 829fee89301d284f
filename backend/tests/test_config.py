"""
Tests for configuration loading
"""
import pytest
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.config import Config

BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class TestConfig:
    """Test Config defaults and YAML loading"""

    def test_defaults(self):
        config = Config()

        assert config.model.primary == "gemini"
        assert config.model.fallback == "ollama"
        assert config.generation.quiz_temperature == 0.8
        assert config.generation.tutor_temperature == 0.6
        assert config.corpus.chunk_size == 1200
        assert config.corpus.chunk_overlap == 100
        assert config.corpus.max_document_chars == 200_000
        assert config.embedding.dimensions == 768

    def test_shipped_yaml_matches_defaults(self):
        config = Config.from_yaml(os.path.join(BACKEND_DIR, "config.yaml"))

        assert config == Config()

    def test_partial_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("model:\n  primary: ollama\n  fallback: null\n")

        config = Config.from_yaml(str(path))

        assert config.model.primary == "ollama"
        assert config.model.fallback is None
        assert "gemini" in config.model.providers
        assert config.vector_db.collection_name == "sage_bot_collection"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(str(tmp_path / "nope.yaml"))

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            Config().get_provider("mystery")

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "secret")

        config = Config()

        assert config.get_api_key("gemini") == "secret"
        assert config.get_api_key("ollama") is None
