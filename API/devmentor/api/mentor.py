from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from devmentor.api.deps import get_mentor_router
from devmentor.core.errors import require_text
from devmentor.mentor.router import MentorReply, MentorRouter
from devmentor.schemas.api import (
    ChallengesRequest,
    ChatRequest,
    DebugRequest,
    ExplainRequest,
    LearningPathRequest,
    MentorResponse,
    MentorStatusResponse,
    ReviewRequest,
    RoadmapRequest,
    SubmissionResponse,
    SubmitSolutionRequest,
    ValidateRequest,
)
from devmentor.schemas.mentor import Operation
from devmentor.storage.local_store import record_completion

router = APIRouter(prefix="/mentor", tags=["mentor"])


def _respond(reply: MentorReply) -> MentorResponse:
    return MentorResponse(
        token=reply.token,
        operation=reply.operation.value,
        source=reply.source,
        stale=reply.stale,
        result=jsonable_encoder(reply.value, by_alias=True),
    )


async def _call(mentor: MentorRouter, operation: Operation, payload, args: dict[str, Any]) -> MentorResponse:
    reply = await mentor.request(operation, args, slot=payload.slot)
    return _respond(reply)


@router.get("/status", response_model=MentorStatusResponse)
async def mentor_status(mentor: MentorRouter = Depends(get_mentor_router)):
    return MentorStatusResponse(busy=mentor.busy, in_flight=mentor.in_flight)


@router.post("/review", response_model=MentorResponse)
async def review(payload: ReviewRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.code, "code")
    return await _call(
        mentor,
        Operation.REVIEW,
        payload,
        {"code": payload.code, "language": payload.language, "skill_level": payload.skill_level},
    )


@router.post("/explain", response_model=MentorResponse)
async def explain(payload: ExplainRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.concept, "concept")
    return await _call(
        mentor,
        Operation.EXPLAIN_CONCEPT,
        payload,
        {"concept": payload.concept, "current_code": payload.current_code, "skill_level": payload.skill_level},
    )


@router.post("/challenges", response_model=MentorResponse)
async def challenges(payload: ChallengesRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    return await _call(
        mentor,
        Operation.GENERATE_CHALLENGES,
        payload,
        {"difficulty": payload.difficulty, "language": payload.language, "topic": payload.topic},
    )


@router.post("/learning-path", response_model=MentorResponse)
async def learning_path(payload: LearningPathRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    return await _call(
        mentor,
        Operation.GENERATE_LEARNING_PATH,
        payload,
        {
            "current_skill": payload.current_skill,
            "target_goal": payload.target_goal,
            "time_commitment": payload.time_commitment,
        },
    )


@router.post("/validate", response_model=MentorResponse)
async def validate(payload: ValidateRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.user_code, "user_code")
    return await _call(
        mentor,
        Operation.VALIDATE_SOLUTION,
        payload,
        {"challenge": payload.challenge, "user_code": payload.user_code},
    )


@router.post("/submit-solution", response_model=SubmissionResponse)
async def submit_solution(payload: SubmitSolutionRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.user_code, "user_code")
    reply = await mentor.request(
        Operation.VALIDATE_SOLUTION,
        {"challenge": payload.challenge, "user_code": payload.user_code},
        slot=payload.slot,
    )
    completed = frozenset(payload.completed_ids)
    # A superseded verdict never moves progress.
    if not reply.stale:
        completed = record_completion(completed, payload.challenge, reply.value)
    return SubmissionResponse(**_respond(reply).model_dump(), completed_ids=sorted(completed))


@router.post("/debug", response_model=MentorResponse)
async def debug(payload: DebugRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.code, "code")
    return await _call(
        mentor,
        Operation.DEBUG,
        payload,
        {"code": payload.code, "error": payload.error, "language": payload.language},
    )


@router.post("/chat", response_model=MentorResponse)
async def chat(payload: ChatRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    require_text(payload.message, "message")
    return await _call(
        mentor,
        Operation.CHAT,
        payload,
        {
            "message": payload.message,
            "history": tuple(payload.history),
            "code": payload.code,
            "language": payload.language,
        },
    )


@router.post("/roadmap", response_model=MentorResponse)
async def roadmap(payload: RoadmapRequest, mentor: MentorRouter = Depends(get_mentor_router)):
    return await _call(
        mentor,
        Operation.PLAN_ROADMAP,
        payload,
        {
            "current_skills": tuple(payload.current_skills),
            "goals": tuple(payload.goals),
            "time_commitment": payload.time_commitment,
        },
    )
