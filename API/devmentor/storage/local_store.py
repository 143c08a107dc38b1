"""Best-effort JSON documents for the learner's workspace.

Nothing here raises to the caller: unreadable documents fall back to defaults
and failed writes are logged.
"""
from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from devmentor.core.logging import DOMAIN_STORAGE, get_domain_logger
from devmentor.core.settings import Settings, settings as default_settings
from devmentor.schemas.mentor import ChallengeSpec, ValidationVerdict
from devmentor.schemas.workspace import CodeProject, UserSession, UserStats

logger = get_domain_logger(__name__, DOMAIN_STORAGE)

PROJECTS_KEY = "devmentor_projects"
SESSION_KEY = "devmentor_session"
STATS_KEY = "devmentor_stats"

ModelT = TypeVar("ModelT", bound=BaseModel)

_projects_adapter = TypeAdapter(list[CodeProject])


class LocalStore:
    def __init__(self, config: Settings | None = None, *, base_dir: str | Path | None = None):
        config = config or default_settings
        self.base = Path(base_dir if base_dir is not None else config.runtime_data_dir)

    def _path(self, key: str) -> Path:
        return self.base / f"{key}.json"

    def _read(self, key: str) -> object | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Error reading stored document %s: %s", key, exc)
            return None

    def _write(self, key: str, payload: object) -> bool:
        try:
            self.base.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(json.dumps(payload, indent=2), encoding="utf-8")
            return True
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Error writing stored document %s: %s", key, exc)
            return False

    def _load_model(self, key: str, model: type[ModelT]) -> ModelT:
        raw = self._read(key)
        if raw is None:
            return model()
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Stored document %s has an unexpected shape, using defaults: %s", key, exc.error_count())
            return model()

    def load_projects(self) -> list[CodeProject]:
        raw = self._read(PROJECTS_KEY)
        if raw is None:
            return []
        try:
            return _projects_adapter.validate_python(raw)
        except ValidationError as exc:
            logger.warning("Stored projects have an unexpected shape, using defaults: %s", exc.error_count())
            return []

    def save_projects(self, projects: Iterable[CodeProject]) -> bool:
        return self._write(PROJECTS_KEY, [p.model_dump(by_alias=True) for p in projects])

    def load_session(self) -> UserSession:
        return self._load_model(SESSION_KEY, UserSession)

    def save_session(self, session: UserSession) -> bool:
        return self._write(SESSION_KEY, session.model_dump(by_alias=True))

    def load_stats(self) -> UserStats:
        return self._load_model(STATS_KEY, UserStats)

    def save_stats(self, stats: UserStats) -> bool:
        return self._write(STATS_KEY, stats.model_dump(by_alias=True))


def record_completion(
    completed_ids: Iterable[str], challenge: ChallengeSpec, verdict: ValidationVerdict
) -> frozenset[str]:
    completed = frozenset(completed_ids)
    if verdict.is_correct:
        return completed | {challenge.id}
    return completed


def upsert_project(projects: Iterable[CodeProject], project: CodeProject) -> list[CodeProject]:
    return [project, *(p for p in projects if p.id != project.id)]


def bump_stats_after_assessment(stats: UserStats) -> UserStats:
    return stats.model_copy(update={"total_challenges_solved": stats.total_challenges_solved + 1})
