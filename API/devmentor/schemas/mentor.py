"""Structured reply contracts for the mentor operations.

Field names on the wire follow the JSON documents the model is asked to
produce (camelCase); attributes are snake_case. Numeric ranges such as
``overallRating`` (1-10) and ``score`` (0-100) are advisory and never clamped.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Operation(str, Enum):
    REVIEW = "review"
    EXPLAIN_CONCEPT = "explainConcept"
    GENERATE_CHALLENGES = "generateChallenges"
    GENERATE_LEARNING_PATH = "generateLearningPath"
    VALIDATE_SOLUTION = "validateSolution"
    DEBUG = "debug"
    ASSESS_SKILL = "assessSkill"
    CHAT = "chat"
    PLAN_ROADMAP = "planRoadmap"


class ContractModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def _unique_in_order(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


# ── Code review ──────────────────────────────────────────────────────────────

class CodeImprovement(ContractModel):
    issue: str
    explanation: str
    suggested_fix: str
    line_number: int | None = None


class CodeReview(ContractModel):
    overall_rating: float
    strengths: tuple[str, ...]
    improvements: tuple[CodeImprovement, ...]
    concepts_to_learn: tuple[str, ...]
    best_practices: tuple[str, ...]
    next_steps: str


# ── Concept explanation ──────────────────────────────────────────────────────

class PracticeExercise(ContractModel):
    description: str
    difficulty: str
    starter_code: str


class ConceptExplanation(ContractModel):
    simple_explanation: str
    detailed_explanation: str
    code_example: str
    common_mistakes: tuple[str, ...]
    practice_exercises: tuple[PracticeExercise, ...]
    related_concepts: tuple[str, ...]


# ── Challenges and learning modules ──────────────────────────────────────────

class ChallengeTestCase(ContractModel):
    input: Any
    expected_output: Any
    description: str


class ChallengeSpec(ContractModel):
    id: str
    title: str
    description: str
    difficulty: str
    language: str
    starter_code: str
    reference_solution: str = Field(alias="solution")
    hints: tuple[str, ...]
    test_cases: tuple[ChallengeTestCase, ...]

    @field_validator("difficulty")
    @classmethod
    def _normalize_difficulty(cls, value: str) -> str:
        return value.strip().lower()


class ChallengeBatch(ContractModel):
    challenges: tuple[ChallengeSpec, ...]


class LearningModule(ContractModel):
    id: str
    title: str
    description: str
    concepts: tuple[str, ...]
    exercises: tuple[ChallengeSpec, ...]
    estimated_time: str
    prerequisites: tuple[str, ...]

    @field_validator("concepts", "prerequisites")
    @classmethod
    def _as_ordered_set(cls, values: tuple[str, ...]) -> tuple[str, ...]:
        return _unique_in_order(values)


class LearningModuleBatch(ContractModel):
    modules: tuple[LearningModule, ...]


# ── Solution validation ──────────────────────────────────────────────────────

class ValidationVerdict(ContractModel):
    is_correct: bool
    feedback: str
    suggestions: tuple[str, ...]
    score: float


# ── Debugging ────────────────────────────────────────────────────────────────

class DebuggingStep(ContractModel):
    step: str
    action: str
    expected_result: str


class DebuggingGuidance(ContractModel):
    error_analysis: str
    possible_causes: tuple[str, ...]
    debugging_steps: tuple[DebuggingStep, ...]
    fixed_code: str
    explanation: str
    prevention_tips: tuple[str, ...]


# ── Skill assessment ─────────────────────────────────────────────────────────

class SkillAssessment(ContractModel):
    skill_level: str
    strengths: tuple[str, ...]
    areas_for_improvement: tuple[str, ...]
    recommended_topics: tuple[str, ...]
    estimated_learning_time: str

    @field_validator("skill_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().lower()


# ── Phase-based roadmap ──────────────────────────────────────────────────────

class RoadmapProject(ContractModel):
    name: str
    description: str
    skills: tuple[str, ...]


class RoadmapPhase(ContractModel):
    phase: str
    duration: str
    topics: tuple[str, ...]
    projects: tuple[RoadmapProject, ...]
    milestones: tuple[str, ...]


class LearningRoadmap(ContractModel):
    path_name: str
    estimated_duration: str
    phases: tuple[RoadmapPhase, ...]
    daily_routine: str
    resources: tuple[str, ...]
