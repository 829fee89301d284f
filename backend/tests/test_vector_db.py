"""
Tests for the Qdrant-backed knowledge store
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import Mock, AsyncMock, patch
import pytest
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.config import Config
from sage.database import vector_db
from sage.database.vector_db import (
    KnowledgeStore,
    extract_content,
    extract_source,
    payload_to_document,
)
from sage.schema import DocumentInput


class TestPayloadExtraction:
    """Test tolerance for payload layouts written by other tools"""

    def test_own_layout(self):
        doc = payload_to_document(
            {"content": "Hello", "metadata": {"source": "a.md", "chunk": 0}}, 0.8
        )

        assert doc.content == "Hello"
        assert doc.metadata == {"source": "a.md", "chunk": 0}
        assert doc.score == 0.8

    def test_flat_layout(self):
        doc = payload_to_document({"text": "Flat text", "url": "https://example.com"}, 0.5)

        assert doc.content == "Flat text"
        assert doc.source == "https://example.com"

    def test_content_keys(self):
        assert extract_content({"page_content": "From LangChain"}) == "From LangChain"
        assert extract_content({"chunk": ["a", "b"]}) == "a b"
        assert extract_content({"payload": {"text": "nested"}}) == "nested"
        assert extract_content({"title": "only string"}) == "only string"
        assert extract_content(None) == ""

    def test_source_keys(self):
        assert extract_source({"link": "l"}) == "l"
        assert extract_source({"metadata": {"source": "m"}}) == "m"
        assert extract_source({"file": "f.pdf"}) == "f.pdf"
        assert extract_source({}) is None


class TestKnowledgeStore:
    """Test KnowledgeStore with mocked Qdrant client and embedder"""

    def setup_method(self):
        self.config = Config()
        self.client = Mock()
        self.client.get_collections = AsyncMock(return_value=SimpleNamespace(collections=[]))
        self.client.create_collection = AsyncMock()
        self.client.upsert = AsyncMock()
        self.client.query_points = AsyncMock()
        self.client.get_collection = AsyncMock()
        self.client.delete_collection = AsyncMock()

        self.embedder = Mock()
        self.embedder.generate = AsyncMock()
        self.embedder.generate_one = AsyncMock(return_value=[0.1, 0.2])

        self.store = KnowledgeStore(self.config, client=self.client, embedder=self.embedder)

    def test_init_creates_missing_collection(self):
        asyncio.run(self.store.init())

        self.client.create_collection.assert_awaited_once()
        kwargs = self.client.create_collection.call_args[1]
        assert kwargs["collection_name"] == "sage_bot_collection"
        assert kwargs["vectors_config"].size == 768

    def test_init_keeps_existing_collection(self):
        self.client.get_collections.return_value = SimpleNamespace(
            collections=[SimpleNamespace(name="sage_bot_collection")]
        )

        asyncio.run(self.store.init())

        self.client.create_collection.assert_not_awaited()

    def test_init_connection_error(self):
        self.client.get_collections.side_effect = OSError("refused")

        with pytest.raises(ConnectionError):
            asyncio.run(self.store.init())

    def test_add(self):
        self.embedder.generate.return_value = [[0.1, 0.2], [0.3, 0.4]]
        docs = [
            DocumentInput(content="one", metadata={"source": "a"}),
            {"content": "two", "metadata": {"source": "b"}},
        ]

        count = asyncio.run(self.store.add(docs))

        assert count == 2
        self.embedder.generate.assert_awaited_once_with(["one", "two"])
        points = self.client.upsert.call_args[1]["points"]
        assert [p.payload for p in points] == [
            {"content": "one", "metadata": {"source": "a"}},
            {"content": "two", "metadata": {"source": "b"}},
        ]
        assert len({p.id for p in points}) == 2

    def test_add_nothing(self):
        assert asyncio.run(self.store.add([])) == 0
        self.client.upsert.assert_not_awaited()

    def test_search(self):
        self.client.query_points.return_value = SimpleNamespace(points=[
            SimpleNamespace(payload={"content": "RAG", "metadata": {"source": "a"}}, score=0.92),
            SimpleNamespace(payload={"text": "Other", "source": "b"}, score=0.5),
        ])

        docs = asyncio.run(self.store.search("What is RAG?", 2))

        assert [d.content for d in docs] == ["RAG", "Other"]
        assert [d.source for d in docs] == ["a", "b"]
        self.embedder.generate_one.assert_awaited_once_with("What is RAG?")
        assert self.client.query_points.call_args[1]["limit"] == 2

    def test_count(self):
        self.client.get_collection.return_value = SimpleNamespace(points_count=7)

        assert asyncio.run(self.store.count()) == 7


class TestSharedStore:
    """Test get_store / reset_store lifecycle"""

    def teardown_method(self):
        vector_db._store = None

    def test_get_store_is_idempotent(self):
        instance = Mock()
        instance.init = AsyncMock()
        instance.close = AsyncMock()

        async def scenario():
            first, second = await asyncio.gather(vector_db.get_store(), vector_db.get_store())
            third = await vector_db.get_store()
            return first, second, third

        with patch("sage.database.vector_db.KnowledgeStore", return_value=instance) as store_class:
            first, second, third = asyncio.run(scenario())

        assert first is second is third is instance
        store_class.assert_called_once()
        instance.init.assert_awaited_once()

    def test_reset_store(self):
        instance = Mock()
        instance.init = AsyncMock()
        instance.close = AsyncMock()

        with patch("sage.database.vector_db.KnowledgeStore", return_value=instance):
            asyncio.run(vector_db.get_store())
            asyncio.run(vector_db.reset_store())

        instance.close.assert_awaited_once()
        assert vector_db._store is None
