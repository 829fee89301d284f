"""Suggestions agent"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from .base import GenerativeAgent
from .parsing import extract_json_object
from ..schema import RetrievedDocument, StepStatus, Suggestions, SuggestionsOutput

logger = logging.getLogger(__name__)


SUGGESTIONS_PROMPT = """Based on the topic "{topic}" and the following context, generate creative and practical suggestions organized into 3 categories:

1. Creative Applications - innovative ways to apply this knowledge
2. Learning & Education - educational applications and learning approaches
3. Business Solutions - practical business or professional applications

For each category, provide exactly 3 specific, actionable suggestions that are relevant to the topic.

{context_block}Return a JSON object with this structure:
{{
  "creativeApplications": ["suggestion1", "suggestion2", "suggestion3"],
  "learningEducation": ["suggestion1", "suggestion2", "suggestion3"],
  "businessSolutions": ["suggestion1", "suggestion2", "suggestion3"],
  "proTip": "A helpful tip about combining or applying these suggestions"
}}

Only output valid JSON, nothing else."""

PRO_TIP = (
    "Combine elements from different categories to create unique solutions "
    "tailored to specific needs."
)


def fallback_suggestions(topic: str) -> Suggestions:
    """Templated suggestions with the topic interpolated"""
    return Suggestions(
        creative_applications=[
            f"Build an interactive {topic} visualization tool",
            f"Create a {topic}-based creative writing assistant",
            f"Develop a gamified {topic} learning experience",
        ],
        learning_education=[
            f"Design a {topic} study guide with practice questions",
            f"Create flashcards for key {topic} concepts",
            f"Build a {topic} tutorial series for beginners",
        ],
        business_solutions=[
            f"Develop a {topic} analysis tool for professionals",
            f"Create a {topic} consulting framework",
            f"Build a {topic} knowledge base for teams",
        ],
        pro_tip=PRO_TIP,
    )


def _parse_suggestions(text: str) -> Optional[Suggestions]:
    data = extract_json_object(text)
    if data is None:
        return None
    try:
        return Suggestions.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Suggestions response failed validation: {e.error_count()} errors")
        return None


class SuggestionsAgent(GenerativeAgent):
    """Proposes applications of a topic in three fixed categories"""

    name = "SuggestionsAgent"

    async def process(
        self,
        topic: Optional[str],
        query: str,
        documents: List[RetrievedDocument],
        creativity: str = "balanced",
    ) -> SuggestionsOutput:
        topic = topic or query
        steps = [
            self._step(
                "Suggestions Generation",
                StepStatus.PROCESSING,
                f"Generating creative suggestions for: {topic}",
                details={"creativity": creativity},
            )
        ]

        context = "\n".join(doc.content for doc in documents)
        prompt = SUGGESTIONS_PROMPT.format(
            topic=topic,
            context_block=f"Context:\n{context}\n\n" if context else "",
        )

        suggestions = await self._generate_structured(
            prompt,
            self.config.generation.suggestions_temperature,
            parse=_parse_suggestions,
        )

        if suggestions is None:
            logger.warning("Suggestions generation failed, using fallback suggestions")
            suggestions = fallback_suggestions(topic)
            message = "Generated fallback suggestions"
        else:
            message = "Generated suggestions for all categories"

        steps.append(self._step("Suggestions Generation", StepStatus.COMPLETED, message))
        return SuggestionsOutput(suggestions=suggestions, thinking_steps=steps)
