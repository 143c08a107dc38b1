from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from devmentor.schemas.requests import ConversationTurn

DEFAULT_CODE_LANGUAGE = "python"

SEED_TURN = ConversationTurn(
    role="mentor",
    text=(
        "Hello! I'm DevMentor AI, your friendly programming tutor. I'm here to help you learn, "
        "debug code, answer questions, or just chat about programming. What would you like to talk about?"
    ),
)


@dataclass(frozen=True)
class ConversationHistory:
    """Append-only, caller-owned chat log. ``append`` returns a new history."""

    turns: tuple[ConversationTurn, ...] = (SEED_TURN,)

    def append(self, role: str, text: str) -> ConversationHistory:
        return ConversationHistory(self.turns + (ConversationTurn(role=role, text=text),))

    def __iter__(self):
        return iter(self.turns)

    def __len__(self) -> int:
        return len(self.turns)


@dataclass(frozen=True)
class ChatPromptPayload:
    message: str
    history: tuple[ConversationTurn, ...]
    code_block: str | None = None


def fence_code(code: str, language: str | None = None) -> str:
    return f"```{language or DEFAULT_CODE_LANGUAGE}\n{code}\n```"


def build_context(
    history: ConversationHistory | Iterable[ConversationTurn],
    new_user_text: str,
    code: str | None = None,
    language: str | None = None,
) -> ChatPromptPayload:
    outbound = tuple(turn for turn in history if turn != SEED_TURN)
    code_block = fence_code(code, language) if code else None
    return ChatPromptPayload(message=new_user_text, history=outbound, code_block=code_block)
