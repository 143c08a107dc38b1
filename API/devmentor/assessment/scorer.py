"""Local quiz scoring; the model only contributes the narrative fields."""
from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from devmentor.core.logging import DOMAIN_ASSESSMENT, get_domain_logger
from devmentor.schemas.assessment import AssessmentResult, PublicQuizQuestion, QuizQuestion, SkillTier
from devmentor.schemas.requests import AnsweredQuestion

if TYPE_CHECKING:
    from devmentor.mentor.router import MentorRouter

logger = get_domain_logger(__name__, DOMAIN_ASSESSMENT)

NO_ANSWER = "No answer"
DEFAULT_CODE_EXAMPLES = ('print("Hello World")',)

QUESTION_BANK: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        id="1",
        question="What is a variable in programming?",
        options=(
            "A container that stores data values",
            "A function that performs calculations",
            "A loop that repeats code",
            "A conditional statement",
        ),
        correct_answer=0,
        explanation="A variable is a named container that stores a value your program can use later.",
        difficulty="beginner",
    ),
    QuizQuestion(
        id="2",
        question="Which of the following is the correct way to define a function in Python?",
        options=(
            "def my_function():",
            "function my_function() {}",
            "func my_function():",
            "def my_function[]:",
        ),
        correct_answer=0,
        explanation='Python functions are defined with the "def" keyword, a name, parentheses and a colon.',
        difficulty="beginner",
    ),
    QuizQuestion(
        id="3",
        question="What does a tuple give you that a list does not?",
        options=(
            "It can hold values of different types",
            "Its contents cannot be changed after creation",
            "It is always sorted",
            "It can only hold numbers",
        ),
        correct_answer=1,
        explanation="Tuples are immutable: once created, their items cannot be reassigned.",
        difficulty="beginner",
    ),
    QuizQuestion(
        id="4",
        question="What is the purpose of a for loop?",
        options=(
            "To make decisions in code",
            "To repeat code for each item or a set number of times",
            "To store multiple values",
            "To define a function",
        ),
        correct_answer=1,
        explanation="A for loop repeats a block of code once for each item it iterates over.",
        difficulty="intermediate",
    ),
    QuizQuestion(
        id="5",
        question="What is a list?",
        options=(
            "A single data value",
            "An ordered collection of related items",
            "A type of function",
            "A conditional statement",
        ),
        correct_answer=1,
        explanation="A list stores multiple values, in order, in a single variable.",
        difficulty="intermediate",
    ),
)


def public_questions() -> list[PublicQuizQuestion]:
    return [
        PublicQuizQuestion(id=q.id, question=q.question, options=q.options, difficulty=q.difficulty)
        for q in QUESTION_BANK
    ]


def skill_tier_for(percentage: float) -> SkillTier:
    if percentage >= 80:
        return "advanced"
    if percentage >= 60:
        return "intermediate"
    return "beginner"


def _answer_text(question: QuizQuestion, answer: int | None) -> str:
    if answer is None or not 0 <= answer < len(question.options):
        return NO_ANSWER
    return question.options[answer]


def score_answers(answers: Sequence[int | None]) -> AssessmentResult:
    """Score against the bank; missing or out-of-range answers are wrong, extras are ignored."""
    answered: list[AnsweredQuestion] = []
    raw_score = 0
    for index, question in enumerate(QUESTION_BANK):
        answer = answers[index] if index < len(answers) else None
        correct = answer == question.correct_answer
        raw_score += int(correct)
        answered.append(
            AnsweredQuestion(question=question.question, answer=_answer_text(question, answer), correct=correct)
        )

    total = len(QUESTION_BANK)
    percentage = raw_score / total * 100
    return AssessmentResult(
        raw_score=raw_score,
        total_questions=total,
        percentage=percentage,
        skill_tier=skill_tier_for(percentage),
        answered_questions=tuple(answered),
    )


async def assess(
    router: MentorRouter,
    answers: Sequence[int | None],
    code_examples: Sequence[str] = (),
) -> AssessmentResult:
    local = score_answers(answers)
    narrative = await router.assess_skill(
        tuple(code_examples) or DEFAULT_CODE_EXAMPLES,
        local.answered_questions,
    )
    if narrative.skill_level and narrative.skill_level != local.skill_tier:
        logger.info(
            "Model proposed skill level %s; keeping local tier %s", narrative.skill_level, local.skill_tier
        )
    return local.model_copy(
        update={
            "strengths": narrative.strengths,
            "areas_for_improvement": narrative.areas_for_improvement,
            "recommended_topics": narrative.recommended_topics,
            "estimated_learning_time": narrative.estimated_learning_time,
        }
    )
