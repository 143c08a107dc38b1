from __future__ import annotations

import asyncio
import json
import sys
import time
from pathlib import Path

from devmentor.core.logging import DOMAIN_SANDBOX, get_domain_logger
from devmentor.core.settings import Settings, settings as default_settings
from devmentor.sandbox.markup import preview_markup
from devmentor.sandbox.runner import RESULT_MARKER
from devmentor.sandbox.stylesheet import StylesheetError, check_stylesheet
from devmentor.schemas.sandbox import ExecutionResult, SandboxState, SourceKind

logger = get_domain_logger(__name__, DOMAIN_SANDBOX)

RUNNER_PATH = Path(__file__).with_name("runner.py")

SOURCE_KIND_ALIASES: dict[str, SourceKind] = {
    "python": SourceKind.SCRIPT,
    "py": SourceKind.SCRIPT,
    "html": SourceKind.MARKUP,
    "htm": SourceKind.MARKUP,
    "css": SourceKind.STYLESHEET,
}
SUPPORTED_LANGUAGES_LABEL = "Python, HTML, CSS"
TRUNCATION_NOTICE = "... output truncated"


def resolve_source_kind(language: str | None) -> SourceKind | None:
    return SOURCE_KIND_ALIASES.get((language or "").strip().lower())


class ExecutionSandbox:
    """Runs or previews one snippet at a time: idle -> running -> succeeded|failed -> idle."""

    def __init__(self, config: Settings | None = None, *, python_executable: str | None = None):
        self.config = config or default_settings
        self.python_executable = python_executable or sys.executable
        self._lock = asyncio.Lock()
        self._state = SandboxState.IDLE
        self.last_outcome: SandboxState | None = None
        self.active_pid: int | None = None

    @property
    def state(self) -> SandboxState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is SandboxState.RUNNING

    async def run(self, code: str, source_kind: str | None) -> ExecutionResult:
        async with self._lock:
            self._state = SandboxState.RUNNING
            started = time.perf_counter()
            try:
                try:
                    output, error = await self._dispatch(code or "", source_kind)
                except Exception as exc:
                    logger.exception("Sandbox run failed unexpectedly")
                    output, error = "", f"{type(exc).__name__}: {exc}"
                elapsed_ms = (time.perf_counter() - started) * 1000.0
                self.last_outcome = SandboxState.FAILED if error else SandboxState.SUCCEEDED
                logger.info(
                    "Sandbox run kind=%s outcome=%s elapsed_ms=%.1f",
                    source_kind,
                    self.last_outcome.value,
                    elapsed_ms,
                )
                return ExecutionResult(
                    output=self._truncate(output),
                    error_message=error,
                    elapsed_millis=max(0.0, elapsed_ms),
                )
            finally:
                self._state = SandboxState.IDLE

    async def _dispatch(self, code: str, source_kind: str | None) -> tuple[str, str | None]:
        kind = resolve_source_kind(source_kind)
        if kind is SourceKind.SCRIPT:
            return await self._run_script(code)
        if kind is SourceKind.MARKUP:
            return preview_markup(code), None
        if kind is SourceKind.STYLESHEET:
            try:
                return check_stylesheet(code), None
            except StylesheetError as exc:
                return "", f"CSS parsing error: {exc}"
        return "", f"Language {source_kind} is not supported yet. Currently supporting: {SUPPORTED_LANGUAGES_LABEL}"

    async def _run_script(self, code: str) -> tuple[str, str | None]:
        timeout = self.config.sandbox_timeout_seconds
        try:
            process = await asyncio.create_subprocess_exec(
                self.python_executable,
                "-I",
                "-X",
                "utf8",
                str(RUNNER_PATH),
                str(max(0, self.config.sandbox_max_output_chars)),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            return "", f"Unable to start the Python sandbox: {exc}"

        self.active_pid = process.pid
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(code.encode("utf-8")), timeout=timeout)
        except asyncio.TimeoutError:
            return "", f"Execution timed out after {timeout:g} seconds"
        finally:
            # Timeouts and cancellation both land here; the child must not outlive the run.
            self.active_pid = None
            if process.returncode is None:
                process.kill()
                await process.wait()

        outcome = self._read_outcome(stdout.decode("utf-8", errors="replace"))
        if outcome is None:
            detail = stderr.decode("utf-8", errors="replace").strip().splitlines()
            reason = detail[-1] if detail else f"exit code {process.returncode}"
            return "", f"Sandbox process failed: {reason}"

        lines = list(outcome.get("lines") or [])
        if outcome.get("truncated"):
            lines.append(TRUNCATION_NOTICE)
        if outcome.get("return_value") is not None:
            lines.append(f"Return value: {outcome['return_value']}")
        return "\n".join(lines), outcome.get("error")

    @staticmethod
    def _read_outcome(stdout: str) -> dict | None:
        for line in reversed(stdout.splitlines()):
            if line.startswith(RESULT_MARKER):
                try:
                    return json.loads(line[len(RESULT_MARKER):])
                except ValueError:
                    return None
        return None

    def _truncate(self, output: str) -> str:
        limit = self.config.sandbox_max_output_chars
        if limit and len(output) > limit + len(TRUNCATION_NOTICE) + 1:
            return output[:limit] + "\n" + TRUNCATION_NOTICE
        return output
