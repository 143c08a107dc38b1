from __future__ import annotations

from fastapi import APIRouter, Depends

from devmentor.api.deps import get_provider
from devmentor.core.app_metrics import get_metrics
from devmentor.core.llm_provider import BaseLLMProvider

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/app")
async def app_metrics():
    """Request latency (p50/p95), error rate, mentor fallback rate, and alerts."""
    return get_metrics()


@router.get("/resilience")
async def resilience_metrics(provider: BaseLLMProvider = Depends(get_provider)):
    breaker = getattr(provider, "breaker", None)
    breakers = {breaker.name: breaker.status()} if breaker is not None else {}
    return {"provider": provider.provider_name, "breakers": breakers}
