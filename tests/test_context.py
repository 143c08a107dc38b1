from __future__ import annotations

from devmentor.mentor.context import SEED_TURN, ConversationHistory, build_context
from devmentor.mentor.prompts import chat_prompt
from devmentor.schemas.requests import ChatArgs, ConversationTurn


def test_seed_turn_is_excluded_and_order_preserved():
    a = ConversationTurn(role="learner", text="What is a loop?")
    b = ConversationTurn(role="mentor", text="A loop repeats code.")
    payload = build_context([SEED_TURN, a, b], "Show me one")
    assert payload.history == (a, b)
    assert payload.message == "Show me one"
    assert payload.code_block is None


def test_seed_turn_is_excluded_regardless_of_position():
    a = ConversationTurn(role="learner", text="hi")
    payload = build_context([a, SEED_TURN], "again")
    assert payload.history == (a,)


def test_code_is_fenced_with_language_or_default():
    payload = build_context([], "why?", code="print(1)", language="html")
    assert payload.code_block == "```html\nprint(1)\n```"
    default = build_context([], "why?", code="print(1)")
    assert default.code_block == "```python\nprint(1)\n```"


def test_history_append_returns_new_value():
    history = ConversationHistory()
    longer = history.append("learner", "hello").append("mentor", "hi there")
    assert len(history) == 1
    assert len(longer) == 3
    assert [turn.role for turn in longer] == ["mentor", "learner", "mentor"]
    assert build_context(longer, "next").history == longer.turns[1:]


def test_chat_prompt_renders_history_and_code():
    args = ChatArgs(
        message="Is this right?",
        history=(ConversationTurn(role="learner", text="I wrote a loop"),),
        code="for i in range(3):\n    print(i)",
        language="python",
    )
    prompt = chat_prompt(args)
    assert "I wrote a loop" in prompt
    assert "Is this right?" in prompt
    assert "```python\nfor i in range(3):" in prompt
    assert SEED_TURN.text not in prompt
