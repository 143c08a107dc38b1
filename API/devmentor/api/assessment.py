from fastapi import APIRouter, Depends

from devmentor.api.deps import get_mentor_router, get_store
from devmentor.assessment.scorer import assess, public_questions
from devmentor.mentor.router import MentorRouter
from devmentor.schemas.assessment import AssessmentResult, AssessmentSubmission, PublicQuizQuestion
from devmentor.storage.local_store import LocalStore, bump_stats_after_assessment

router = APIRouter(prefix="/assessment", tags=["assessment"])


@router.get("/questions", response_model=list[PublicQuizQuestion], response_model_by_alias=True)
async def list_questions():
    return public_questions()


@router.post("/submit", response_model=AssessmentResult, response_model_by_alias=True)
async def submit_assessment(
    payload: AssessmentSubmission,
    mentor: MentorRouter = Depends(get_mentor_router),
    store: LocalStore = Depends(get_store),
):
    result = await assess(mentor, payload.answers, payload.code_examples)
    store.save_stats(bump_stats_after_assessment(store.load_stats()))
    return result
