from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from devmentor.schemas.mentor import (
    ChallengeBatch,
    CodeReview,
    ConceptExplanation,
    ContractModel,
    DebuggingGuidance,
    LearningModuleBatch,
    LearningRoadmap,
    Operation,
    SkillAssessment,
    ValidationVerdict,
)

CONTRACTS: dict[Operation, type[ContractModel]] = {
    Operation.REVIEW: CodeReview,
    Operation.EXPLAIN_CONCEPT: ConceptExplanation,
    Operation.GENERATE_CHALLENGES: ChallengeBatch,
    Operation.GENERATE_LEARNING_PATH: LearningModuleBatch,
    Operation.VALIDATE_SOLUTION: ValidationVerdict,
    Operation.DEBUG: DebuggingGuidance,
    Operation.ASSESS_SKILL: SkillAssessment,
    Operation.PLAN_ROADMAP: LearningRoadmap,
}

_FENCE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)
_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class ContractError:
    """A reply that cannot stand in for an answer. Never partially populated."""

    operation: Operation
    reason: str
    details: tuple[str, ...] = ()


def _is_object(candidate: str) -> bool:
    try:
        return isinstance(json.loads(candidate), dict)
    except ValueError:
        return False


def extract_json_document(raw_text: str | None) -> str | None:
    """Return the single JSON object carried by a model reply, if any.

    Models often wrap the document in a markdown fence or a sentence of prose.
    """
    if not raw_text:
        return None
    candidates = [raw_text.strip()]
    fenced = _FENCE.search(raw_text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    wrapped = _OBJECT.search(raw_text)
    if wrapped:
        candidates.append(wrapped.group(0))
    for candidate in candidates:
        if candidate and _is_object(candidate):
            return candidate
    return None


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    return f"{location}: {error.get('type')}"


def _unwrap(operation: Operation, parsed: ContractModel) -> Any:
    if isinstance(parsed, ChallengeBatch):
        return parsed.challenges
    if isinstance(parsed, LearningModuleBatch):
        return parsed.modules
    return parsed


def parse(operation: Operation | str, raw_text: str | None) -> Any | ContractError:
    operation = Operation(operation)
    if operation is Operation.CHAT:
        reply = (raw_text or "").strip()
        return reply if reply else ContractError(operation, "empty_reply")

    document = extract_json_document(raw_text)
    if document is None:
        return ContractError(operation, "malformed_document")

    try:
        parsed = CONTRACTS[operation].model_validate_json(document, strict=True)
    except ValidationError as exc:
        errors = exc.errors()
        reason = "missing_field" if any(e.get("type") == "missing" for e in errors) else "type_mismatch"
        return ContractError(operation, reason, tuple(_describe(e) for e in errors))
    return _unwrap(operation, parsed)
