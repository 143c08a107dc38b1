from fastapi import Request

from devmentor.core.llm_provider import BaseLLMProvider
from devmentor.mentor.router import MentorRouter
from devmentor.sandbox.executor import ExecutionSandbox
from devmentor.storage.local_store import LocalStore


def get_provider(request: Request) -> BaseLLMProvider:
    return request.app.state.llm_provider


def get_mentor_router(request: Request) -> MentorRouter:
    return request.app.state.mentor_router


def get_sandbox(request: Request) -> ExecutionSandbox:
    return request.app.state.sandbox


def get_store(request: Request) -> LocalStore:
    return request.app.state.local_store
