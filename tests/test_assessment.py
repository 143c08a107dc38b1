from __future__ import annotations

import json

import pytest

from devmentor.assessment.scorer import NO_ANSWER, QUESTION_BANK, assess, score_answers, skill_tier_for
from devmentor.core.llm_provider import BaseLLMProvider, NullLLMProvider
from devmentor.mentor.fallbacks import fallback
from devmentor.mentor.router import MentorRouter
from devmentor.schemas.mentor import Operation

ALL_CORRECT = [0, 0, 1, 1, 1]


class OneReplyProvider(BaseLLMProvider):
    provider_name = "one-reply"

    def __init__(self, text):
        self.text = text
        self.prompts = []

    async def generate(self, prompt, *, temperature=None, max_output_tokens=None, json_mode=False):
        self.prompts.append(prompt)
        return self.text, {}


def test_answer_key_matches_bank():
    assert [q.correct_answer for q in QUESTION_BANK] == ALL_CORRECT


@pytest.mark.parametrize(
    "answers, raw, percentage, tier",
    [
        (ALL_CORRECT, 5, 100.0, "advanced"),
        ([1, 1, 0, 0, 0], 0, 0.0, "beginner"),
        ([0, 0, 1, 0, 0], 3, 60.0, "intermediate"),
        ([0, 0, 1, 1, 0], 4, 80.0, "advanced"),
    ],
)
def test_score_and_tier(answers, raw, percentage, tier):
    result = score_answers(answers)
    assert result.raw_score == raw
    assert result.total_questions == 5
    assert result.percentage == percentage
    assert result.skill_tier == tier


def test_tier_boundaries():
    assert skill_tier_for(79.9) == "intermediate"
    assert skill_tier_for(59.9) == "beginner"
    assert skill_tier_for(60) == "intermediate"


def test_missing_and_out_of_range_answers_count_as_wrong():
    result = score_answers([0, 9, None])
    assert result.raw_score == 1
    answers = [qa.answer for qa in result.answered_questions]
    assert answers[0] == QUESTION_BANK[0].options[0]
    assert answers[1:] == [NO_ANSWER] * 4


def test_extra_answers_are_ignored():
    assert score_answers(ALL_CORRECT + [3, 3]).raw_score == 5


@pytest.mark.asyncio
async def test_assess_merges_fallback_narrative_when_offline():
    result = await assess(MentorRouter(NullLLMProvider()), ALL_CORRECT)
    narrative = fallback(Operation.ASSESS_SKILL)
    assert result.skill_tier == "advanced"
    assert result.strengths == narrative.strengths
    assert result.estimated_learning_time == narrative.estimated_learning_time
    assert len(result.answered_questions) == 5


@pytest.mark.asyncio
async def test_local_tier_wins_over_model_level():
    doc = {
        "skillLevel": "advanced",
        "strengths": ["Curiosity"],
        "areasForImprovement": ["Loops"],
        "recommendedTopics": ["Iteration"],
        "estimatedLearningTime": "6 weeks",
    }
    provider = OneReplyProvider(json.dumps(doc))
    result = await assess(MentorRouter(provider), [1, 1, 0, 0, 0], ["x = 1"])
    assert result.skill_tier == "beginner"
    assert result.strengths == ("Curiosity",)
    assert "x = 1" in provider.prompts[0]
    assert "What is a variable in programming?" in provider.prompts[0]
