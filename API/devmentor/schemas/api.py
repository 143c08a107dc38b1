from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from devmentor.schemas.mentor import ChallengeSpec
from devmentor.schemas.requests import ConversationTurn, Difficulty, SkillTier


class MentorRequest(BaseModel):
    # Requests sharing a slot supersede each other; defaults to the operation name.
    slot: str | None = None


class ReviewRequest(MentorRequest):
    code: str
    language: str = "python"
    skill_level: SkillTier = "beginner"


class ExplainRequest(MentorRequest):
    concept: str
    current_code: str = ""
    skill_level: SkillTier = "beginner"


class ChallengesRequest(MentorRequest):
    difficulty: Difficulty = "easy"
    language: str = "python"
    topic: str | None = None


class LearningPathRequest(MentorRequest):
    current_skill: str = "beginner"
    target_goal: str = "learn programming fundamentals"
    time_commitment: str = "5 hours per week"


class ValidateRequest(MentorRequest):
    challenge: ChallengeSpec
    user_code: str


class SubmitSolutionRequest(ValidateRequest):
    completed_ids: list[str] = Field(default_factory=list)


class DebugRequest(MentorRequest):
    code: str
    error: str = ""
    language: str = "python"


class ChatRequest(MentorRequest):
    message: str
    history: list[ConversationTurn] = Field(default_factory=list)
    code: str | None = None
    language: str | None = None


class RoadmapRequest(MentorRequest):
    current_skills: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)
    time_commitment: str = "5 hours per week"


class MentorResponse(BaseModel):
    token: int
    operation: str
    source: str
    stale: bool
    result: Any


class SubmissionResponse(MentorResponse):
    completed_ids: list[str]


class MentorStatusResponse(BaseModel):
    busy: bool
    in_flight: int
