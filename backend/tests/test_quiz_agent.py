"""
Tests for quiz generation
"""
import asyncio
import json
from unittest.mock import Mock, AsyncMock
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.agent.quiz import QuizAgent
from sage.config import Config
from sage.providers import ProviderPair
from sage.schema import RetrievedDocument


def make_provider(name, **kwargs):
    provider = Mock()
    provider.name = name
    provider.generate = AsyncMock(**kwargs)
    return provider


def question(text, correct=1):
    return {
        "question": text,
        "options": ["A", "B", "C", "D"],
        "correctAnswer": correct,
        "explanation": "Because",
    }


DOCS = [
    RetrievedDocument(content="Doc one", metadata={"source": "one.md"}),
    RetrievedDocument(content="Doc two", metadata={"source": "two.md"}),
]


class TestQuizAgent:
    """Test QuizAgent.process"""

    def setup_method(self):
        self.config = Config()

    def run(self, providers, count=5, documents=DOCS):
        agent = QuizAgent(providers, self.config)
        return asyncio.run(agent.process("RAG", documents, difficulty="hard", question_count=count))

    def assert_well_formed(self, questions):
        for q in questions:
            assert len(q.options) == 4
            assert 0 <= q.correct_answer < 4
            assert q.question

    def test_fallback_when_generation_fails(self):
        primary = make_provider("primary", side_effect=RuntimeError("down"))
        secondary = make_provider("secondary", side_effect=RuntimeError("down"))

        result = self.run(ProviderPair(primary, secondary))

        assert len(result.questions) == 5
        self.assert_well_formed(result.questions)
        assert all(q.id.startswith("fallback_") for q in result.questions)
        assert all(q.correct_answer == 0 for q in result.questions)
        assert all(q.source == "one.md" for q in result.questions)
        assert len({q.id for q in result.questions}) == 5

    def test_fallback_source_without_documents(self):
        result = self.run(ProviderPair(), count=2, documents=[])

        assert [q.source for q in result.questions] == ["Generated content"] * 2

    def test_parses_fenced_json(self):
        payload = json.dumps([question(f"Q{i}?") for i in range(5)])
        primary = make_provider("primary", return_value=f"```json\n{payload}\n```")

        result = self.run(ProviderPair(primary))

        assert [q.question for q in result.questions] == ["Q0?", "Q1?", "Q2?", "Q3?", "Q4?"]
        assert all(q.id.startswith("quiz_") for q in result.questions)
        assert all(q.difficulty == "hard" for q in result.questions)
        assert all(q.category == "RAG" for q in result.questions)

    def test_sources_assigned_round_robin(self):
        payload = json.dumps([question(f"Q{i}?") for i in range(3)])
        primary = make_provider("primary", return_value=payload)

        result = self.run(ProviderPair(primary), count=3)

        assert [q.source for q in result.questions] == ["one.md", "two.md", "one.md"]

    def test_truncates_extra_questions(self):
        payload = json.dumps([question(f"Q{i}?") for i in range(8)])
        primary = make_provider("primary", return_value=payload)

        result = self.run(ProviderPair(primary))

        assert len(result.questions) == 5

    def test_pads_short_result(self):
        payload = json.dumps([question("Only one?")])
        primary = make_provider("primary", return_value=payload)

        result = self.run(ProviderPair(primary))

        assert len(result.questions) == 5
        assert result.questions[0].question == "Only one?"
        assert all(q.id.startswith("fallback_") for q in result.questions[1:])

    def test_drops_invalid_questions(self):
        items = [
            question("Good?"),
            question("Bad index?", correct=4),
            {"question": "Three options?", "options": ["A", "B", "C"], "correctAnswer": 0},
        ]
        primary = make_provider("primary", return_value=json.dumps(items))

        result = self.run(ProviderPair(primary), count=1)

        assert len(result.questions) == 1
        assert result.questions[0].question == "Good?"

    def test_unparseable_primary_uses_secondary(self):
        primary = make_provider("primary", return_value="Sorry, I cannot produce JSON.")
        secondary = make_provider("secondary", return_value=json.dumps([question("From secondary?")]))

        result = self.run(ProviderPair(primary, secondary), count=1)

        assert result.questions[0].question == "From secondary?"

    def test_single_completed_step(self):
        result = self.run(ProviderPair(), count=1)

        assert len(result.thinking_steps) == 1
        assert result.thinking_steps[0].step == "Quiz Generation"

    def test_deeply_nested_output_falls_back(self):
        primary = make_provider("primary", return_value="[" * 100000 + "]" * 100000)

        result = self.run(ProviderPair(primary))

        assert len(result.questions) == 5
        assert all(q.id.startswith("fallback_") for q in result.questions)
