from fastapi import APIRouter, Depends

from devmentor.api.deps import get_mentor_router, get_sandbox
from devmentor.core.settings import settings
from devmentor.mentor.router import MentorRouter
from devmentor.sandbox.executor import ExecutionSandbox

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    mentor: MentorRouter = Depends(get_mentor_router),
    sandbox: ExecutionSandbox = Depends(get_sandbox),
):
    return {
        "status": "ok",
        "service": "devmentor-api",
        "llm_provider": mentor.provider.provider_name,
        "mentor_busy": mentor.busy,
        "sandbox_state": sandbox.state.value,
        "env": settings.app_env,
    }
