from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SourceKind(str, Enum):
    SCRIPT = "script"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"


class SandboxState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExecutionResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    output: str = ""
    error_message: str | None = None
    elapsed_millis: float = Field(default=0.0, ge=0.0)

    @property
    def succeeded(self) -> bool:
        return self.error_message is None


class RunCodeRequest(BaseModel):
    code: str
    language: str = "python"


class SandboxStatusResponse(BaseModel):
    state: SandboxState
    last_outcome: SandboxState | None = None
    supported_languages: list[str]
