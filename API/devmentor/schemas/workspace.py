from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class _WorkspaceModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CodeProject(_WorkspaceModel):
    id: str
    name: str
    code: str = ""
    language: str = "python"
    created_at: str = Field(default_factory=_now_iso)
    last_modified: str = Field(default_factory=_now_iso)


class UserSession(_WorkspaceModel):
    session_start: str = Field(default_factory=_now_iso)
    code_written: int = 0
    challenges_solved: int = 0
    concepts_learned: list[str] = Field(default_factory=list)


class UserStats(_WorkspaceModel):
    total_challenges_solved: int = 0
    total_code_lines: int = 0
    favorite_language: str = "python"
    last_active_date: str = Field(default_factory=_now_iso)
    sessions_completed: int = 0
