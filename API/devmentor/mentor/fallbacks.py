"""Deterministic, network-independent answers for every mentor operation.

The values are built once at import time from frozen models, so every call
returns the very same object regardless of arguments, time or prior state.
"""
from __future__ import annotations

from typing import Any

from devmentor.schemas.mentor import (
    ChallengeSpec,
    ChallengeTestCase,
    CodeImprovement,
    CodeReview,
    ConceptExplanation,
    DebuggingGuidance,
    DebuggingStep,
    LearningModule,
    LearningRoadmap,
    Operation,
    PracticeExercise,
    RoadmapPhase,
    RoadmapProject,
    SkillAssessment,
    ValidationVerdict,
)

CHAT_FALLBACK_REPLY = (
    "I'm having trouble connecting right now. Could you try again? I'm here to help with "
    "programming questions, code review, or just chat about coding!"
)

_FIZZBUZZ_TESTS = (
    ChallengeTestCase(input=3, expected_output="Fizz", description="Multiple of 3"),
    ChallengeTestCase(input=5, expected_output="Buzz", description="Multiple of 5"),
    ChallengeTestCase(input=15, expected_output="FizzBuzz", description="Multiple of both 3 and 5"),
)

FALLBACK_CHALLENGES: tuple[ChallengeSpec, ...] = (
    ChallengeSpec(
        id="fallback-easy",
        title="FizzBuzz Challenge",
        description=(
            'Write a function that prints numbers 1-100, but prints "Fizz" for multiples of 3, '
            '"Buzz" for multiples of 5, and "FizzBuzz" for multiples of both.'
        ),
        difficulty="easy",
        language="python",
        starter_code="def fizz_buzz():\n    # Your code here\n    pass\n",
        reference_solution=(
            "def fizz_buzz():\n"
            "    for i in range(1, 101):\n"
            "        if i % 15 == 0:\n"
            '            print("FizzBuzz")\n'
            "        elif i % 3 == 0:\n"
            '            print("Fizz")\n'
            "        elif i % 5 == 0:\n"
            '            print("Buzz")\n'
            "        else:\n"
            "            print(i)\n"
        ),
        hints=("Use the modulo operator (%)", "Check for multiples of 15 first"),
        test_cases=_FIZZBUZZ_TESTS,
    ),
    ChallengeSpec(
        id="fallback-medium",
        title="FizzBuzz Function",
        description=(
            "Write fizz_buzz(n) that returns a list of strings for 1..n using the FizzBuzz rules "
            "instead of printing them."
        ),
        difficulty="medium",
        language="python",
        starter_code="def fizz_buzz(n):\n    # Return a list of strings\n    pass\n",
        reference_solution=(
            "def fizz_buzz(n):\n"
            "    result = []\n"
            "    for i in range(1, n + 1):\n"
            '        word = ("Fizz" if i % 3 == 0 else "") + ("Buzz" if i % 5 == 0 else "")\n'
            "        result.append(word or str(i))\n"
            "    return result\n"
        ),
        hints=("Build the word from two independent checks", "Fall back to str(i) when the word is empty"),
        test_cases=_FIZZBUZZ_TESTS,
    ),
    ChallengeSpec(
        id="fallback-hard",
        title="Configurable FizzBuzz",
        description=(
            "Write fizz_buzz(n, rules) where rules is a list of (divisor, word) pairs, e.g. "
            '[(3, "Fizz"), (5, "Buzz"), (7, "Bazz")]. Concatenate the words of every matching '
            "divisor in order, or use the number itself."
        ),
        difficulty="hard",
        language="python",
        starter_code="def fizz_buzz(n, rules):\n    # Your code here\n    pass\n",
        reference_solution=(
            "def fizz_buzz(n, rules):\n"
            "    return [\n"
            '        "".join(word for divisor, word in rules if i % divisor == 0) or str(i)\n'
            "        for i in range(1, n + 1)\n"
            "    ]\n"
        ),
        hints=("Keep the rules in the order given", "A generator inside str.join keeps it short"),
        test_cases=_FIZZBUZZ_TESTS,
    ),
)

FALLBACK_LEARNING_PATH: tuple[LearningModule, ...] = (
    LearningModule(
        id="python-basics",
        title="Python Fundamentals",
        description="Learn the core concepts of Python programming",
        concepts=("Variables", "Functions", "Loops", "Conditionals"),
        exercises=FALLBACK_CHALLENGES[:1],
        estimated_time="2 weeks",
        prerequisites=("Basic computer literacy",),
    ),
)

_FALLBACKS: dict[Operation, Any] = {
    Operation.REVIEW: CodeReview(
        overall_rating=7,
        strengths=("Code structure looks good", "Good use of basic syntax"),
        improvements=(
            CodeImprovement(
                issue="Consider adding comments",
                explanation="Comments help explain your code logic",
                suggested_fix="Add # comments above complex lines",
                line_number=1,
            ),
        ),
        concepts_to_learn=("Code documentation", "Best practices"),
        best_practices=("Use meaningful variable names", "Add comments"),
        next_steps="Practice writing clean, documented code",
    ),
    Operation.EXPLAIN_CONCEPT: ConceptExplanation(
        simple_explanation="This is a fundamental programming concept",
        detailed_explanation="Understanding this concept is important for writing effective code",
        code_example="# Example code would go here",
        common_mistakes=("Not understanding the syntax", "Misusing the concept"),
        practice_exercises=(
            PracticeExercise(description="Practice the basic syntax", difficulty="easy", starter_code="# Your code here"),
        ),
        related_concepts=("Variables", "Functions", "Control flow"),
    ),
    Operation.GENERATE_CHALLENGES: FALLBACK_CHALLENGES,
    Operation.GENERATE_LEARNING_PATH: FALLBACK_LEARNING_PATH,
    Operation.VALIDATE_SOLUTION: ValidationVerdict(
        is_correct=False,
        feedback="Unable to validate solution. Please check your code and try again.",
        suggestions=("Make sure your code runs without errors", "Check if you're addressing all requirements"),
        score=0,
    ),
    Operation.DEBUG: DebuggingGuidance(
        error_analysis="There appears to be a syntax or logic error in your code",
        possible_causes=("Syntax error", "Logic mistake", "Type mismatch"),
        debugging_steps=(
            DebuggingStep(
                step="Check syntax",
                action="Look for missing brackets, colons or wrong indentation",
                expected_result="Code should parse correctly",
            ),
        ),
        fixed_code="# Fixed code would appear here",
        explanation="The error was likely due to a syntax issue",
        prevention_tips=("Use a code editor with syntax highlighting", "Test code frequently"),
    ),
    Operation.ASSESS_SKILL: SkillAssessment(
        skill_level="beginner",
        strengths=("Enthusiasm to learn", "Basic understanding"),
        areas_for_improvement=("Syntax mastery", "Problem-solving skills"),
        recommended_topics=("Variables and data types", "Functions", "Control structures"),
        estimated_learning_time="2-3 months to reach intermediate level",
    ),
    Operation.CHAT: CHAT_FALLBACK_REPLY,
    Operation.PLAN_ROADMAP: LearningRoadmap(
        path_name="Programming Fundamentals",
        estimated_duration="3-6 months",
        phases=(
            RoadmapPhase(
                phase="Foundations",
                duration="4 weeks",
                topics=("Variables", "Functions", "Control flow"),
                projects=(
                    RoadmapProject(
                        name="Simple Calculator",
                        description="Build a basic calculator",
                        skills=("Basic syntax", "Functions"),
                    ),
                ),
                milestones=("Understand basic syntax", "Write simple programs"),
            ),
        ),
        daily_routine="30 minutes of coding practice daily",
        resources=("The Python Tutorial (docs.python.org)", "Practice platforms"),
    ),
}


def fallback(operation: Operation | str) -> Any:
    return _FALLBACKS[Operation(operation)]
