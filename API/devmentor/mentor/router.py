from __future__ import annotations

import itertools
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from devmentor.core.app_metrics import record_mentor_outcome
from devmentor.core.errors import TransportFailure
from devmentor.core.llm_provider import BaseLLMProvider
from devmentor.core.logging import DOMAIN_MENTOR, get_domain_logger
from devmentor.core.settings import Settings, settings as default_settings
from devmentor.mentor.context import SEED_TURN
from devmentor.mentor.contracts import ContractError, parse
from devmentor.mentor.fallbacks import fallback
from devmentor.mentor.prompts import ARGS_MODELS, build_prompt
from devmentor.schemas.mentor import (
    ChallengeSpec,
    CodeReview,
    ConceptExplanation,
    DebuggingGuidance,
    LearningModule,
    LearningRoadmap,
    Operation,
    SkillAssessment,
    ValidationVerdict,
)
from devmentor.schemas.requests import AnsweredQuestion, ChatArgs, ConversationTurn, OperationArgs

logger = get_domain_logger(__name__, DOMAIN_MENTOR)

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"


class RequestLedger:
    """Monotonic request tokens per logical slot; only the latest token's reply applies."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def issue(self, slot: str) -> int:
        token = next(self._counter)
        self._latest[slot] = token
        return token

    def latest(self, slot: str) -> int | None:
        return self._latest.get(slot)

    def is_current(self, slot: str, token: int) -> bool:
        return self._latest.get(slot) == token


@dataclass(frozen=True)
class MentorReply:
    token: int
    slot: str
    operation: Operation
    value: Any
    source: str
    stale: bool


class MentorRouter:
    def __init__(self, provider: BaseLLMProvider, config: Settings | None = None):
        self.provider = provider
        self.config = config or default_settings
        self.ledger = RequestLedger()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    async def invoke(self, operation: Operation | str, args: OperationArgs | Mapping[str, Any] | None = None) -> Any:
        value, _source = await self._run(Operation(operation), args)
        return value

    async def request(
        self,
        operation: Operation | str,
        args: OperationArgs | Mapping[str, Any] | None = None,
        *,
        slot: str | None = None,
    ) -> MentorReply:
        operation = Operation(operation)
        slot = slot or operation.value
        token = self.ledger.issue(slot)
        value, source = await self._run(operation, args)
        stale = not self.ledger.is_current(slot, token)
        if stale:
            logger.info("Dropping stale %s reply for slot=%s token=%s", operation.value, slot, token)
        return MentorReply(token=token, slot=slot, operation=operation, value=value, source=source, stale=stale)

    def _coerce_args(self, operation: Operation, args: OperationArgs | Mapping[str, Any] | None) -> OperationArgs:
        validated = ARGS_MODELS[operation].model_validate(args if args is not None else {})
        if isinstance(validated, ChatArgs):
            turns = tuple(turn for turn in validated.history if turn != SEED_TURN)
            limit = max(0, self.config.chat_history_max_turns)
            validated = validated.model_copy(update={"history": turns[-limit:] if limit else ()})
        return validated

    def _degrade(self, operation: Operation) -> tuple[Any, str]:
        record_mentor_outcome(operation.value, SOURCE_FALLBACK)
        return fallback(operation), SOURCE_FALLBACK

    async def _run(self, operation: Operation, args: OperationArgs | Mapping[str, Any] | None) -> tuple[Any, str]:
        self._in_flight += 1
        try:
            try:
                validated = self._coerce_args(operation, args)
            except ValidationError as exc:
                logger.warning("Rejected %s arguments before any provider call (%s errors)", operation.value, exc.error_count())
                return self._degrade(operation)

            prompt = build_prompt(operation, validated)
            try:
                raw_text, usage = await self.provider.generate(prompt, json_mode=operation is not Operation.CHAT)
            except TransportFailure as exc:
                logger.warning("Provider unavailable for %s: %s", operation.value, exc)
                return self._degrade(operation)
            except Exception as exc:
                logger.warning("Provider call for %s failed: %s", operation.value, exc)
                return self._degrade(operation)

            logger.info(json.dumps({"type": "llm_usage", "operation": operation.value, "usage": usage}))
            if raw_text is None:
                logger.warning("No answer for %s (%s)", operation.value, usage.get("reason", "empty_reply"))
                return self._degrade(operation)

            parsed = parse(operation, raw_text)
            if isinstance(parsed, ContractError):
                logger.warning(
                    "Contract failure for %s: %s %s", operation.value, parsed.reason, ", ".join(parsed.details[:5])
                )
                return self._degrade(operation)

            record_mentor_outcome(operation.value, SOURCE_LLM)
            return parsed, SOURCE_LLM
        finally:
            self._in_flight -= 1

    async def review_code(self, code: str, language: str = "python", skill_level: str = "beginner") -> CodeReview:
        return await self.invoke(Operation.REVIEW, {"code": code, "language": language, "skill_level": skill_level})

    async def explain_concept(
        self, concept: str, current_code: str = "", skill_level: str = "beginner"
    ) -> ConceptExplanation:
        return await self.invoke(
            Operation.EXPLAIN_CONCEPT,
            {"concept": concept, "current_code": current_code, "skill_level": skill_level},
        )

    async def generate_challenges(
        self, difficulty: str = "easy", language: str = "python", topic: str | None = None
    ) -> tuple[ChallengeSpec, ...]:
        return await self.invoke(
            Operation.GENERATE_CHALLENGES,
            {"difficulty": difficulty, "language": language, "topic": topic},
        )

    async def generate_learning_path(
        self, current_skill: str, target_goal: str, time_commitment: str
    ) -> tuple[LearningModule, ...]:
        return await self.invoke(
            Operation.GENERATE_LEARNING_PATH,
            {"current_skill": current_skill, "target_goal": target_goal, "time_commitment": time_commitment},
        )

    async def validate_solution(self, challenge: ChallengeSpec, user_code: str) -> ValidationVerdict:
        return await self.invoke(Operation.VALIDATE_SOLUTION, {"challenge": challenge, "user_code": user_code})

    async def debug_code(self, code: str, error: str, language: str = "python") -> DebuggingGuidance:
        return await self.invoke(Operation.DEBUG, {"code": code, "error": error, "language": language})

    async def assess_skill(
        self, code_examples: Iterable[str], answered_questions: Iterable[AnsweredQuestion | Mapping[str, Any]]
    ) -> SkillAssessment:
        return await self.invoke(
            Operation.ASSESS_SKILL,
            {"code_examples": tuple(code_examples), "answered_questions": tuple(answered_questions)},
        )

    async def chat(
        self,
        message: str,
        history: Iterable[ConversationTurn] = (),
        code: str | None = None,
        language: str | None = None,
    ) -> str:
        return await self.invoke(
            Operation.CHAT,
            {"message": message, "history": tuple(history), "code": code, "language": language},
        )

    async def plan_roadmap(
        self, current_skills: Iterable[str], goals: Iterable[str], time_commitment: str
    ) -> LearningRoadmap:
        return await self.invoke(
            Operation.PLAN_ROADMAP,
            {"current_skills": tuple(current_skills), "goals": tuple(goals), "time_commitment": time_commitment},
        )
