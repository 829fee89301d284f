"""Quiz generation agent"""

import time
import uuid
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .base import GenerativeAgent
from .parsing import extract_json_array
from ..schema import QuizOutput, QuizQuestion, RetrievedDocument, StepStatus

logger = logging.getLogger(__name__)


QUIZ_PROMPT = """Based on the following context about "{topic}", generate exactly {count} DIVERSE multiple choice questions with difficulty level: {difficulty}.

IMPORTANT: Each question MUST focus on a DIFFERENT aspect or concept from the context. Use information from different documents. DO NOT repeat similar questions or test the same concept twice.

For each question, provide:
1. A clear, unique question testing a different concept
2. Exactly 4 options
3. The index of the correct option (0, 1, 2 or 3)
4. A brief explanation of why the answer is correct
5. Vary question types: factual, conceptual, application-based

Format as a JSON array with this structure:
[
  {{
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correctAnswer": 1,
    "explanation": "Explanation here",
    "difficulty": "{difficulty}",
    "category": "{topic}"
  }}
]

Context:
{context}

Generate {count} UNIQUE questions. JSON Response:"""

FALLBACK_OPTIONS = [
    "This is a concept from the provided context",
    "This is not relevant to the topic",
    "This is incorrect information",
    "This is not mentioned in the context",
]


def _unique_suffix() -> str:
    return uuid.uuid4().hex[:9]


def _now_ms() -> int:
    return int(time.time() * 1000)


class QuizAgent(GenerativeAgent):
    """Generates multiple choice questions from retrieved documents"""

    name = "QuizAgent"

    def _build_prompt(
        self,
        topic: str,
        documents: List[RetrievedDocument],
        difficulty: str,
        question_count: int,
    ) -> str:
        context = "\n\n".join(
            f"[Document {i}]\n{doc.content}" for i, doc in enumerate(documents, 1)
        )
        return QUIZ_PROMPT.format(
            topic=topic,
            count=question_count,
            difficulty=difficulty,
            context=context,
        )

    def _parse_questions(
        self,
        text: str,
        topic: str,
        documents: List[RetrievedDocument],
        difficulty: str,
    ) -> Optional[List[QuizQuestion]]:
        """Validate model output; None when no usable question was produced"""
        items = extract_json_array(text)
        if items is None:
            return None

        timestamp = _now_ms()
        questions = []
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                continue

            source = None
            if documents:
                source = documents[idx % len(documents)].source

            data: Dict[str, Any] = {
                "difficulty": difficulty,
                "category": topic,
                **item,
                "id": f"quiz_{timestamp}_{idx}_{_unique_suffix()}",
                "source": source or "Generated from context",
            }
            try:
                questions.append(QuizQuestion.model_validate(data))
            except ValidationError as e:
                logger.warning(f"Dropping malformed question {idx}: {e.error_count()} errors")

        return questions or None

    def _fallback_questions(
        self,
        topic: str,
        documents: List[RetrievedDocument],
        difficulty: str,
        count: int,
        start: int = 0,
    ) -> List[QuizQuestion]:
        """Templated questions used when generation fails or comes up short"""
        source = (documents[0].source if documents else None) or "Generated content"
        timestamp = _now_ms()
        return [
            QuizQuestion(
                id=f"fallback_{timestamp}_{i}_{_unique_suffix()}",
                question=f"What is an important concept related to {topic}?",
                options=list(FALLBACK_OPTIONS),
                correct_answer=0,
                explanation=(
                    f"Based on the provided context about {topic}, the first option "
                    f"represents concepts discussed in the source material."
                ),
                difficulty=difficulty,
                category=topic,
                source=source,
            )
            for i in range(start, start + count)
        ]

    async def process(
        self,
        topic: str,
        documents: List[RetrievedDocument],
        difficulty: str = "medium",
        question_count: int = 5,
    ) -> QuizOutput:
        difficulty = getattr(difficulty, "value", difficulty)
        logger.info(
            f"Creating {question_count} questions about '{topic}' from {len(documents)} documents"
        )

        prompt = self._build_prompt(topic, documents, difficulty, question_count)
        questions = await self._generate_structured(
            prompt,
            self.config.generation.quiz_temperature,
            parse=lambda text: self._parse_questions(text, topic, documents, difficulty),
        )

        if questions is None:
            logger.warning("Quiz generation failed, using fallback questions")
            questions = self._fallback_questions(topic, documents, difficulty, question_count)
            message = f"Generated {len(questions)} fallback quiz questions"
        else:
            questions = questions[:question_count]
            generated = len(questions)
            if generated < question_count:
                questions += self._fallback_questions(
                    topic, documents, difficulty, question_count - generated, start=generated
                )
            message = f"Generated {generated} diverse quiz questions"
            if generated < question_count:
                message += f" ({question_count - generated} filled from templates)"

        step = self._step("Quiz Generation", StepStatus.COMPLETED, message)
        return QuizOutput(questions=questions, thinking_steps=[step])
