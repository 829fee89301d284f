"""
Tests for the retrieval agent
"""
import asyncio
from unittest.mock import Mock, AsyncMock, patch
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.agent.retrieval import RetrievalAgent
from sage.schema import RetrievedDocument, StepStatus


class TestRetrievalAgent:
    """Test RetrievalAgent.process"""

    def setup_method(self):
        self.store = Mock()
        self.store.search = AsyncMock()
        self.agent = RetrievalAgent(self.store)

    def test_returns_documents_from_store(self):
        docs = [
            RetrievedDocument(content="RAG combines retrieval and generation", metadata={"source": "a"}, score=0.9),
            RetrievedDocument(content="Vectors encode meaning", metadata={"source": "b"}, score=0.7),
        ]
        self.store.search.return_value = docs

        result = asyncio.run(self.agent.process("What is RAG?", k=2))

        assert result.documents == docs
        self.store.search.assert_awaited_once_with("What is RAG?", 2)

        statuses = [step.status for step in result.thinking_steps]
        assert statuses == [StepStatus.PROCESSING, StepStatus.COMPLETED]
        assert result.thinking_steps[-1].message == "Found 2 relevant documents"

    def test_store_failure_is_absorbed(self):
        self.store.search.side_effect = ConnectionError("Qdrant unreachable")

        result = asyncio.run(self.agent.process("What is RAG?"))

        assert result.documents == []
        last = result.thinking_steps[-1]
        assert last.status == StepStatus.ERROR
        assert "Qdrant unreachable" in last.message

    def test_empty_collection(self):
        self.store.search.return_value = []

        result = asyncio.run(self.agent.process("anything at all here"))

        assert result.documents == []
        assert result.thinking_steps[-1].status == StepStatus.COMPLETED

    def test_shared_store_failure_is_absorbed(self):
        """Without an explicit store the shared one is resolved lazily"""
        agent = RetrievalAgent()
        with patch("sage.agent.retrieval.get_store", AsyncMock(side_effect=ConnectionError("down"))):
            result = asyncio.run(agent.process("What is RAG?"))

        assert result.documents == []
        assert result.thinking_steps[-1].status == StepStatus.ERROR
