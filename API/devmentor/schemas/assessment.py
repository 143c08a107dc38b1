from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from devmentor.schemas.requests import AnsweredQuestion

SkillTier = Literal["beginner", "intermediate", "advanced"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class QuizQuestion(_CamelModel):
    id: str
    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str
    difficulty: SkillTier


class PublicQuizQuestion(_CamelModel):
    """Question as shown to the learner: no answer key, no explanation."""

    id: str
    question: str
    options: tuple[str, ...]
    difficulty: SkillTier


class AssessmentSubmission(_CamelModel):
    answers: list[int | None] = Field(default_factory=list)
    code_examples: list[str] = Field(default_factory=list)


class AssessmentResult(_CamelModel):
    raw_score: int
    total_questions: int
    percentage: float
    skill_tier: SkillTier
    strengths: tuple[str, ...] = ()
    areas_for_improvement: tuple[str, ...] = ()
    recommended_topics: tuple[str, ...] = ()
    estimated_learning_time: str = ""
    answered_questions: tuple[AnsweredQuestion, ...] = ()
