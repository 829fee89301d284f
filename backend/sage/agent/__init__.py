"""Agents composed by the pipelines"""

from .base import Agent, GenerativeAgent
from .query import QueryAgent
from .retrieval import RetrievalAgent
from .answer import AnswerAgent
from .critic import CriticAgent
from .refine import RefineAgent
from .quiz import QuizAgent
from .tutor import TutorAgent
from .suggestions import SuggestionsAgent

__all__ = [
    "Agent",
    "GenerativeAgent",
    "QueryAgent",
    "RetrievalAgent",
    "AnswerAgent",
    "CriticAgent",
    "RefineAgent",
    "QuizAgent",
    "TutorAgent",
    "SuggestionsAgent",
]
