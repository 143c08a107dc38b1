from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from devmentor.api.assessment import router as assessment_router
from devmentor.api.health import router as health_router
from devmentor.api.mentor import router as mentor_router
from devmentor.api.metrics import router as metrics_router
from devmentor.api.sandbox import router as sandbox_router
from devmentor.api.workspace import router as workspace_router
from devmentor.core.app_metrics import metrics_middleware
from devmentor.core.errors import (
    InputError,
    http_exception_handler,
    input_error_handler,
    request_id_middleware,
    unhandled_exception_handler,
    validation_exception_handler,
)
from devmentor.core.llm_provider import build_llm_provider
from devmentor.core.logging import configure_logging
from devmentor.core.settings import settings
from devmentor.mentor.router import MentorRouter
from devmentor.sandbox.executor import ExecutionSandbox
from devmentor.storage.local_store import LocalStore


configure_logging(settings.log_level)

app = FastAPI(title="DevMentor API", version="0.1.0")
app.include_router(health_router)
app.include_router(mentor_router)
app.include_router(sandbox_router)
app.include_router(assessment_router)
app.include_router(workspace_router)
app.include_router(metrics_router)
app.middleware("http")(metrics_middleware)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(InputError, input_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
async def on_startup():
    provider = build_llm_provider(settings)
    app.state.llm_provider = provider
    app.state.mentor_router = MentorRouter(provider, settings)
    app.state.sandbox = ExecutionSandbox(settings)
    app.state.local_store = LocalStore(settings)


@app.on_event("shutdown")
async def on_shutdown():
    await app.state.llm_provider.aclose()
