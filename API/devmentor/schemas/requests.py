from __future__ import annotations

from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict

from devmentor.schemas.mentor import ChallengeSpec

SkillTier = Literal["beginner", "intermediate", "advanced"]
Difficulty = Literal["easy", "medium", "hard"]


class OperationArgs(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


NonBlank = Annotated[str, AfterValidator(_not_blank)]


class ReviewArgs(OperationArgs):
    code: NonBlank
    language: str = "python"
    skill_level: SkillTier = "beginner"


class ExplainConceptArgs(OperationArgs):
    concept: NonBlank
    current_code: str = ""
    skill_level: SkillTier = "beginner"


class ChallengeArgs(OperationArgs):
    difficulty: Difficulty = "easy"
    language: str = "python"
    topic: str | None = None


class LearningPathArgs(OperationArgs):
    current_skill: str = "beginner"
    target_goal: str = "learn programming fundamentals"
    time_commitment: str = "5 hours per week"


class ValidateSolutionArgs(OperationArgs):
    challenge: ChallengeSpec
    user_code: NonBlank


class DebugArgs(OperationArgs):
    code: NonBlank
    error: str
    language: str = "python"


class AnsweredQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    correct: bool = False


class AssessSkillArgs(OperationArgs):
    code_examples: tuple[str, ...] = ()
    answered_questions: tuple[AnsweredQuestion, ...] = ()


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["learner", "mentor"]
    text: str


class ChatArgs(OperationArgs):
    message: NonBlank
    history: tuple[ConversationTurn, ...] = ()
    code: str | None = None
    language: str | None = None


class RoadmapArgs(OperationArgs):
    current_skills: tuple[str, ...] = ()
    goals: tuple[str, ...] = ()
    time_commitment: str = "5 hours per week"
