"""
Tests for answer generation and refinement with provider fallback
"""
import asyncio
from unittest.mock import Mock, AsyncMock
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.agent.answer import APOLOGY, AnswerAgent, build_context
from sage.agent.refine import RefineAgent
from sage.config import Config
from sage.providers import ProviderPair
from sage.schema import RetrievedDocument, StepStatus


def make_provider(name, **kwargs):
    provider = Mock()
    provider.name = name
    provider.generate = AsyncMock(**kwargs)
    return provider


DOCS = [
    RetrievedDocument(content="First document", metadata={"source": "a"}),
    RetrievedDocument(content="Second document", metadata={"source": "b"}),
]


class TestBuildContext:
    def test_joins_with_blank_line(self):
        assert build_context(DOCS) == "First document\n\nSecond document"

    def test_empty(self):
        assert build_context([]) == ""


class TestAnswerAgent:
    """Test AnswerAgent fallback order"""

    def setup_method(self):
        self.config = Config()

    def test_primary_answer(self):
        primary = make_provider("primary", return_value="RAG grounds answers in documents.")
        secondary = make_provider("secondary", return_value="unused")
        agent = AnswerAgent(ProviderPair(primary, secondary), self.config)

        result = asyncio.run(agent.process("What is RAG?", DOCS))

        assert result.answer == "RAG grounds answers in documents."
        secondary.generate.assert_not_awaited()

        prompt = primary.generate.call_args[0][0]
        assert "First document\n\nSecond document" in prompt
        assert "What is RAG?" in prompt
        assert primary.generate.call_args[1]["temperature"] == self.config.generation.answer_temperature

    def test_falls_back_to_secondary(self):
        primary = make_provider("primary", side_effect=TimeoutError("timed out"))
        secondary = make_provider("secondary", return_value="Secondary answer")
        agent = AnswerAgent(ProviderPair(primary, secondary), self.config)

        result = asyncio.run(agent.process("What is RAG?", DOCS))

        assert result.answer == "Secondary answer"

    def test_blank_primary_counts_as_failure(self):
        primary = make_provider("primary", return_value="   ")
        secondary = make_provider("secondary", return_value="Secondary answer")
        agent = AnswerAgent(ProviderPair(primary, secondary), self.config)

        result = asyncio.run(agent.process("What is RAG?", DOCS))

        assert result.answer == "Secondary answer"

    def test_apology_when_all_fail(self):
        primary = make_provider("primary", side_effect=RuntimeError("boom"))
        secondary = make_provider("secondary", side_effect=RuntimeError("boom"))
        agent = AnswerAgent(ProviderPair(primary, secondary), self.config)

        result = asyncio.run(agent.process("What is RAG?", DOCS))

        assert result.answer == APOLOGY
        assert [s.status for s in result.thinking_steps] == [
            StepStatus.PROCESSING,
            StepStatus.COMPLETED,
        ]

    def test_apology_without_providers(self):
        agent = AnswerAgent(ProviderPair(), self.config)

        result = asyncio.run(agent.process("What is RAG?", []))

        assert result.answer == APOLOGY


class TestRefineAgent:
    """Test RefineAgent"""

    def setup_method(self):
        self.config = Config()

    def test_refined_answer(self):
        primary = make_provider("primary", return_value="A better answer")
        agent = RefineAgent(ProviderPair(primary), self.config)

        result = asyncio.run(agent.process("q", "short", "Answer is too brief", DOCS))

        assert result.refined_answer == "A better answer"
        prompt = primary.generate.call_args[0][0]
        assert "Answer is too brief" in prompt
        assert "short" in prompt
        assert len(result.thinking_steps) == 1
        assert result.thinking_steps[0].step == "Answer Refinement"

    def test_keeps_original_on_failure(self):
        primary = make_provider("primary", side_effect=RuntimeError("down"))
        secondary = make_provider("secondary", return_value="")
        agent = RefineAgent(ProviderPair(primary, secondary), self.config)

        result = asyncio.run(agent.process("q", "original answer", "critique", DOCS))

        assert result.refined_answer == "original answer"
        assert result.thinking_steps[0].status == StepStatus.COMPLETED
