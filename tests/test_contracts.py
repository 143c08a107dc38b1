from __future__ import annotations

import copy
import json

import pytest

from devmentor.mentor.contracts import ContractError, extract_json_document, parse
from devmentor.schemas.mentor import ChallengeSpec, CodeReview, LearningModule, Operation, ValidationVerdict

REVIEW_DOC = {
    "overallRating": 8,
    "strengths": ["Readable names"],
    "improvements": [
        {"issue": "No docstring", "explanation": "Explain intent", "suggestedFix": "Add one", "lineNumber": 1}
    ],
    "conceptsToLearn": ["Docstrings"],
    "bestPractices": ["PEP 8"],
    "nextSteps": "Write tests",
}

CHALLENGE_DOC = {
    "id": "sum-list",
    "title": "Sum a list",
    "description": "Return the sum of a list",
    "difficulty": "Easy",
    "language": "python",
    "starterCode": "def total(xs):\n    pass",
    "solution": "def total(xs):\n    return sum(xs)",
    "hints": ["Use sum()"],
    "testCases": [{"input": [1, 2], "expectedOutput": 3, "description": "two items"}],
}


def test_review_document_parses_into_typed_result():
    result = parse(Operation.REVIEW, json.dumps(REVIEW_DOC))
    assert isinstance(result, CodeReview)
    assert result.overall_rating == 8
    assert result.improvements[0].suggested_fix == "Add one"
    assert result.next_steps == "Write tests"


def test_fenced_document_with_prose_is_accepted():
    raw = "Here is the review you asked for:\n```json\n" + json.dumps(REVIEW_DOC) + "\n```\nGood luck!"
    assert isinstance(parse(Operation.REVIEW, raw), CodeReview)


def test_document_embedded_in_prose_without_fence_is_accepted():
    raw = "Sure. " + json.dumps({"isCorrect": True, "feedback": "ok", "suggestions": [], "score": 95})
    verdict = parse("validateSolution", raw)
    assert isinstance(verdict, ValidationVerdict)
    assert verdict.is_correct is True
    assert verdict.score == 95


def test_missing_field_is_a_contract_error():
    doc = dict(REVIEW_DOC)
    doc.pop("nextSteps")
    result = parse(Operation.REVIEW, json.dumps(doc))
    assert isinstance(result, ContractError)
    assert result.reason == "missing_field"
    assert any("nextSteps" in detail for detail in result.details)


def test_wrong_type_is_a_contract_error():
    doc = dict(REVIEW_DOC, strengths="just one string")
    result = parse(Operation.REVIEW, json.dumps(doc))
    assert isinstance(result, ContractError)
    assert result.reason == "type_mismatch"


def test_string_boolean_is_not_coerced():
    raw = json.dumps({"isCorrect": "true", "feedback": "ok", "suggestions": [], "score": 10})
    assert isinstance(parse(Operation.VALIDATE_SOLUTION, raw), ContractError)


def test_non_json_reply_is_malformed():
    result = parse(Operation.DEBUG, "I could not understand the error, sorry.")
    assert isinstance(result, ContractError)
    assert result.reason == "malformed_document"
    assert extract_json_document("[1, 2, 3]") is None


def test_challenges_unwrap_to_ordered_tuple_and_normalize_difficulty():
    second = dict(CHALLENGE_DOC, id="max-list", title="Max of a list", difficulty="MEDIUM")
    raw = json.dumps({"challenges": [CHALLENGE_DOC, second]})
    result = parse(Operation.GENERATE_CHALLENGES, raw)
    assert isinstance(result, tuple)
    assert [c.id for c in result] == ["sum-list", "max-list"]
    assert all(isinstance(c, ChallengeSpec) for c in result)
    assert [c.difficulty for c in result] == ["easy", "medium"]
    assert result[0].reference_solution.endswith("return sum(xs)")
    assert result[0].test_cases[0].input == [1, 2]


def test_learning_modules_dedupe_concepts_in_order():
    module = {
        "id": "m1",
        "title": "Basics",
        "description": "Start here",
        "concepts": ["Loops", "Variables", "Loops"],
        "exercises": [CHALLENGE_DOC],
        "estimatedTime": "1 week",
        "prerequisites": [],
    }
    result = parse(Operation.GENERATE_LEARNING_PATH, json.dumps({"modules": [module]}))
    assert isinstance(result[0], LearningModule)
    assert result[0].concepts == ("Loops", "Variables")


def test_chat_reply_is_plain_text():
    assert parse(Operation.CHAT, "  Try a for loop.  ") == "Try a for loop."
    empty = parse(Operation.CHAT, "   ")
    assert isinstance(empty, ContractError)
    assert empty.reason == "empty_reply"


MODULE_DOC = {
    "id": "m1",
    "title": "Basics",
    "description": "Start here",
    "concepts": ["Loops"],
    "exercises": [CHALLENGE_DOC],
    "estimatedTime": "1 week",
    "prerequisites": [],
}

DOCS = {
    Operation.REVIEW: REVIEW_DOC,
    Operation.EXPLAIN_CONCEPT: {
        "simpleExplanation": "A loop repeats",
        "detailedExplanation": "for walks an iterable",
        "codeExample": "for x in xs: print(x)",
        "commonMistakes": ["Off by one"],
        "practiceExercises": [{"description": "Count", "difficulty": "easy", "starterCode": "n = 0"}],
        "relatedConcepts": ["range"],
    },
    Operation.GENERATE_CHALLENGES: {"challenges": [CHALLENGE_DOC]},
    Operation.GENERATE_LEARNING_PATH: {"modules": [MODULE_DOC]},
    Operation.VALIDATE_SOLUTION: {"isCorrect": True, "feedback": "ok", "suggestions": [], "score": 90},
    Operation.DEBUG: {
        "errorAnalysis": "x is undefined",
        "possibleCauses": ["Typo"],
        "debuggingSteps": [{"step": "1", "action": "Read the name", "expectedResult": "Spot the typo"}],
        "fixedCode": "x = 1\nprint(x)",
        "explanation": "Define before use",
        "preventionTips": ["Use a linter"],
    },
    Operation.ASSESS_SKILL: {
        "skillLevel": "Intermediate",
        "strengths": ["Loops"],
        "areasForImprovement": ["Classes"],
        "recommendedTopics": ["OOP"],
        "estimatedLearningTime": "3 weeks",
    },
    Operation.PLAN_ROADMAP: {
        "pathName": "Backend",
        "estimatedDuration": "6 months",
        "phases": [
            {
                "phase": "Foundations",
                "duration": "1 month",
                "topics": ["HTTP"],
                "projects": [{"name": "API", "description": "Tiny API", "skills": ["REST"]}],
                "milestones": ["Ship it"],
            }
        ],
        "dailyRoutine": "One hour",
        "resources": ["Docs"],
    },
}


def _without(doc, path):
    trimmed = copy.deepcopy(doc)
    *parents, leaf = path
    node = trimmed
    for key in parents:
        node = node[key]
    del node[leaf]
    return trimmed


@pytest.mark.parametrize("operation", list(DOCS))
def test_complete_documents_parse(operation):
    assert not isinstance(parse(operation, json.dumps(DOCS[operation])), ContractError)


@pytest.mark.parametrize(
    "operation, path",
    [
        (Operation.REVIEW, ("nextSteps",)),
        (Operation.REVIEW, ("improvements", 0, "explanation")),
        (Operation.EXPLAIN_CONCEPT, ("relatedConcepts",)),
        (Operation.EXPLAIN_CONCEPT, ("practiceExercises", 0, "starterCode")),
        (Operation.GENERATE_CHALLENGES, ("challenges", 0, "title")),
        (Operation.GENERATE_CHALLENGES, ("challenges", 0, "testCases", 0, "description")),
        (Operation.GENERATE_LEARNING_PATH, ("modules", 0, "estimatedTime")),
        (Operation.GENERATE_LEARNING_PATH, ("modules", 0, "exercises", 0, "testCases", 0, "description")),
        (Operation.VALIDATE_SOLUTION, ("feedback",)),
        (Operation.DEBUG, ("fixedCode",)),
        (Operation.DEBUG, ("debuggingSteps", 0, "expectedResult")),
        (Operation.ASSESS_SKILL, ("estimatedLearningTime",)),
        (Operation.PLAN_ROADMAP, ("dailyRoutine",)),
        (Operation.PLAN_ROADMAP, ("phases", 0, "projects", 0, "skills")),
    ],
)
def test_every_required_field_is_enforced(operation, path):
    result = parse(operation, json.dumps(_without(DOCS[operation], path)))
    assert isinstance(result, ContractError)
    assert result.reason == "missing_field"
    assert any(str(path[-1]) in detail for detail in result.details)


def test_out_of_range_numbers_are_kept_as_sent():
    review = parse(Operation.REVIEW, json.dumps(dict(REVIEW_DOC, overallRating=15)))
    assert isinstance(review, CodeReview)
    assert review.overall_rating == 15.0

    verdict = parse(Operation.VALIDATE_SOLUTION, json.dumps(dict(DOCS[Operation.VALIDATE_SOLUTION], score=150)))
    assert isinstance(verdict, ValidationVerdict)
    assert verdict.score == 150.0
