"""Tutor agent

Builds a short structured tutorial grounded strictly in the retrieved
documents. The model is asked for a JSON array of typed sections; when
no provider yields a usable array a fixed four-section skeleton is returned.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from .base import GenerativeAgent
from .parsing import extract_json_array
from ..schema import (
    RetrievedDocument,
    SectionType,
    StepStatus,
    TutorOutput,
    TutorSection,
)

logger = logging.getLogger(__name__)

MIN_SECTIONS = 3
MAX_SECTIONS = 5

TUTOR_PROMPT = """You are a patient, expert tutor. Create a short tutorial about "{topic}" for a {user_level} learner who prefers {learning_style} using ONLY the information from the context below.

DO NOT use any external knowledge - base everything strictly on the provided documents. If the context doesn't contain enough information, say so explicitly in the relevant section instead of inventing facts.

The tutorial should include 3-5 sections (a mix of explanation, example, exercise and a brief summary). Keep content concise but meaningful.

Context from retrieved documents:
{context}

Return a JSON array of objects: {{ "id": string, "title": string, "content": string, "type": "explanation" | "example" | "exercise" | "summary" }}
Only output a valid JSON array, nothing else."""


class TutorAgent(GenerativeAgent):
    """Generates tutorial sections for a topic"""

    name = "TutorAgent"

    def _parse_sections(self, text: str) -> Optional[List[TutorSection]]:
        items = extract_json_array(text)
        if items is None:
            return None

        sections = []
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            data = {**item, "id": str(item.get("id") or f"section_{idx + 1}"), "sources": []}
            if isinstance(data.get("type"), str):
                data["type"] = data["type"].strip().lower()
            try:
                sections.append(TutorSection.model_validate(data))
            except ValidationError as e:
                logger.warning(f"Dropping malformed section {idx}: {e.error_count()} errors")

        if len(sections) < MIN_SECTIONS:
            logger.warning(f"Only {len(sections)} usable sections, need at least {MIN_SECTIONS}")
            return None
        return sections[:MAX_SECTIONS]

    def _fallback_sections(
        self,
        topic: str,
        documents: List[RetrievedDocument],
    ) -> List[TutorSection]:
        return [
            TutorSection(
                id="intro",
                title=f"Overview of {topic}",
                content=f"This section introduces {topic} with key ideas based on retrieved sources.",
                type=SectionType.EXPLANATION,
                sources=list(documents),
            ),
            TutorSection(
                id="example",
                title="Worked example",
                content="A small example illustrating the concept.",
                type=SectionType.EXAMPLE,
                sources=list(documents[:1]),
            ),
            TutorSection(
                id="practice",
                title="Practice exercise",
                content="Try to summarize the concept in your own words.",
                type=SectionType.EXERCISE,
            ),
            TutorSection(
                id="summary",
                title="Summary",
                content=f"Key takeaways about {topic}.",
                type=SectionType.SUMMARY,
            ),
        ]

    async def process(
        self,
        topic: str,
        documents: List[RetrievedDocument],
        user_level: str = "intermediate",
        learning_style: str = "reading",
    ) -> TutorOutput:
        user_level = getattr(user_level, "value", user_level)
        steps = [
            self._step(
                "Tutor Planning",
                StepStatus.PROCESSING,
                f"Creating a structured tutorial for: {topic}",
            )
        ]

        prompt = TUTOR_PROMPT.format(
            topic=topic,
            user_level=user_level,
            learning_style=learning_style,
            context="\n".join(f"- {doc.content}" for doc in documents),
        )
        sections = await self._generate_structured(
            prompt,
            self.config.generation.tutor_temperature,
            parse=self._parse_sections,
        )

        if sections is None:
            logger.warning("Tutor generation failed, using fallback sections")
            sections = self._fallback_sections(topic, documents)
            message = f"Generated {len(sections)} fallback tutorial sections"
        else:
            message = f"Generated {len(sections)} tutorial sections"

        steps.append(self._step("Tutor Generation", StepStatus.COMPLETED, message))
        return TutorOutput(tutorial_sections=sections, thinking_steps=steps)
