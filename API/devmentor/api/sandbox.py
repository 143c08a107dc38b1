from fastapi import APIRouter, Depends

from devmentor.api.deps import get_sandbox
from devmentor.core.errors import require_text
from devmentor.sandbox.executor import SOURCE_KIND_ALIASES, ExecutionSandbox
from devmentor.schemas.sandbox import ExecutionResult, RunCodeRequest, SandboxStatusResponse

router = APIRouter(prefix="/sandbox", tags=["sandbox"])


@router.post("/run", response_model=ExecutionResult, response_model_by_alias=True)
async def run_code(payload: RunCodeRequest, sandbox: ExecutionSandbox = Depends(get_sandbox)):
    require_text(payload.code, "code")
    return await sandbox.run(payload.code, payload.language)


@router.get("/status", response_model=SandboxStatusResponse)
async def sandbox_status(sandbox: ExecutionSandbox = Depends(get_sandbox)):
    return SandboxStatusResponse(
        state=sandbox.state,
        last_outcome=sandbox.last_outcome,
        supported_languages=sorted(SOURCE_KIND_ALIASES),
    )
