"""Instruction text for each mentor operation.

Arguments are embedded verbatim; the JSON shapes below are the reply
contracts checked by ``devmentor.mentor.contracts``.
"""
from __future__ import annotations

from typing import Callable

from devmentor.mentor.context import ChatPromptPayload, build_context, fence_code
from devmentor.schemas.mentor import Operation
from devmentor.schemas.requests import (
    AssessSkillArgs,
    ChallengeArgs,
    ChatArgs,
    DebugArgs,
    ExplainConceptArgs,
    LearningPathArgs,
    OperationArgs,
    ReviewArgs,
    RoadmapArgs,
    ValidateSolutionArgs,
)

PERSONA = "As DevMentor AI, an expert programming tutor"

REVIEW_SHAPE = """{
  "overallRating": number (1-10),
  "strengths": ["specific positive aspects"],
  "improvements": [
    {
      "issue": "clear issue description",
      "explanation": "why this is an issue at this level",
      "suggestedFix": "specific code improvement",
      "lineNumber": number (if applicable)
    }
  ],
  "conceptsToLearn": ["programming concepts to study"],
  "bestPractices": ["coding standards and practices"],
  "nextSteps": "what to learn or practice next"
}"""

EXPLAIN_SHAPE = """{
  "simpleExplanation": "easy-to-understand explanation",
  "detailedExplanation": "in-depth technical explanation",
  "codeExample": "practical code demonstration",
  "commonMistakes": ["typical errors beginners make"],
  "practiceExercises": [
    {
      "description": "hands-on exercise description",
      "difficulty": "easy/medium/hard",
      "starterCode": "code template to begin with"
    }
  ],
  "relatedConcepts": ["connected programming topics"]
}"""

CHALLENGE_SHAPE = """{
  "id": "unique-id",
  "title": "Challenge Title",
  "description": "Clear problem description with examples",
  "difficulty": "easy|medium|hard",
  "language": "language name",
  "starterCode": "starting code template",
  "solution": "complete working solution",
  "hints": ["helpful hint 1", "helpful hint 2"],
  "testCases": [
    {
      "input": "example input",
      "expectedOutput": "expected result",
      "description": "what this test validates"
    }
  ]
}"""

MODULE_SHAPE = """{
  "modules": [
    {
      "id": "module-id",
      "title": "Module Title",
      "description": "What students will learn",
      "concepts": ["concept 1", "concept 2"],
      "estimatedTime": "time to complete",
      "prerequisites": ["required knowledge"],
      "exercises": [<challenge objects as below>]
    }
  ]
}"""

VERDICT_SHAPE = """{
  "isCorrect": boolean,
  "feedback": "detailed feedback on the solution",
  "suggestions": ["improvement 1", "improvement 2"],
  "score": number (0-100)
}"""

DEBUG_SHAPE = """{
  "errorAnalysis": "what the error means in simple terms",
  "possibleCauses": ["likely reasons for this error"],
  "debuggingSteps": [
    {
      "step": "step description",
      "action": "what to do",
      "expectedResult": "what should happen"
    }
  ],
  "fixedCode": "corrected version of the code",
  "explanation": "why the fix works",
  "preventionTips": ["how to avoid this error in future"]
}"""

ASSESS_SHAPE = """{
  "skillLevel": "beginner|intermediate|advanced",
  "strengths": ["areas where they excel"],
  "areasForImprovement": ["skills to focus on"],
  "recommendedTopics": ["specific topics to study next"],
  "estimatedLearningTime": "time to reach next level"
}"""

ROADMAP_SHAPE = """{
  "pathName": "descriptive path name",
  "estimatedDuration": "realistic timeframe",
  "phases": [
    {
      "phase": "phase name",
      "duration": "time estimate",
      "topics": ["core topics to learn"],
      "projects": [
        {"name": "project name", "description": "what they'll build", "skills": ["skills practiced"]}
      ],
      "milestones": ["checkpoints to validate progress"]
    }
  ],
  "dailyRoutine": "suggested daily practice",
  "resources": ["recommended learning materials"]
}"""

CHAT_GUIDELINES = (
    "Guidelines:\n"
    "- Be conversational, helpful, and encouraging\n"
    "- If the student asks about programming concepts, explain them clearly with examples\n"
    "- If they share code, offer constructive feedback\n"
    "- If they ask for help with bugs, guide them through debugging\n"
    "- If they want to chat about programming in general, engage naturally\n"
    "- Keep responses concise but informative\n"
    "- Use markdown for code snippets when helpful\n"
)


def review_prompt(args: ReviewArgs) -> str:
    return (
        f"{PERSONA}, review this {args.language} code for a {args.skill_level} developer:\n\n"
        f"{fence_code(args.code, args.language)}\n\n"
        f"Provide comprehensive, educational feedback in JSON format:\n{REVIEW_SHAPE}\n\n"
        f"Focus on educational value and adapt explanations to {args.skill_level} level."
    )


def explain_prompt(args: ExplainConceptArgs) -> str:
    context = f"Context code:\n{fence_code(args.current_code)}\n\n" if args.current_code else ""
    return (
        f'{PERSONA}, explain the programming concept "{args.concept}" to a {args.skill_level} developer.\n\n'
        f"{context}"
        f"Provide a comprehensive explanation in JSON format:\n{EXPLAIN_SHAPE}\n\n"
        f"Make it practical and educational for {args.skill_level} level."
    )


def challenges_prompt(args: ChallengeArgs) -> str:
    focus = f" focusing on {args.topic}" if args.topic else ""
    return (
        f"Generate 3 coding challenges for {args.difficulty} level programmers in {args.language}{focus}.\n\n"
        f'Provide JSON in this exact format, with "difficulty" set to "{args.difficulty}" and '
        f'"language" set to "{args.language}":\n'
        f'{{\n  "challenges": [\n{CHALLENGE_SHAPE}\n  ]\n}}\n\n'
        "Make challenges practical and educational with clear learning objectives."
    )


def learning_path_prompt(args: LearningPathArgs) -> str:
    return (
        f"Create a comprehensive learning path for someone with {args.current_skill} skills who wants to "
        f"{args.target_goal} with {args.time_commitment} available.\n\n"
        f"Generate 5-7 learning modules in JSON format:\n{MODULE_SHAPE}\n\n"
        f"Each exercise is a challenge object:\n{CHALLENGE_SHAPE}\n\n"
        "Make it progressive and practical with hands-on exercises."
    )


def validate_prompt(args: ValidateSolutionArgs) -> str:
    challenge = args.challenge
    return (
        "Evaluate this solution for the coding challenge:\n\n"
        f"Challenge: {challenge.title}\n"
        f"Description: {challenge.description}\n"
        f"Expected Solution: {challenge.reference_solution}\n"
        f"User's Code: {args.user_code}\n\n"
        f"Provide evaluation in JSON:\n{VERDICT_SHAPE}\n\n"
        "Be constructive and educational in feedback."
    )


def debug_prompt(args: DebugArgs) -> str:
    return (
        f'Help debug this {args.language} code that\'s producing the error: "{args.error}"\n\n'
        f"Code:\n{fence_code(args.code, args.language)}\n\n"
        f"Provide step-by-step debugging guidance in JSON:\n{DEBUG_SHAPE}\n\n"
        "Focus on teaching the debugging process, not just providing the fix."
    )


def assess_prompt(args: AssessSkillArgs) -> str:
    examples = "\n\n".join(fence_code(code) for code in args.code_examples)
    answers = "\n\n".join(f"Q: {qa.question}\nA: {qa.answer}" for qa in args.answered_questions)
    return (
        "Assess the programming skill level based on:\n\n"
        f"Code Examples:\n{examples}\n\n"
        f"Q&A Responses:\n{answers}\n\n"
        f"Provide assessment in JSON:\n{ASSESS_SHAPE}\n\n"
        "Be encouraging but honest in assessment."
    )


def roadmap_prompt(args: RoadmapArgs) -> str:
    return (
        "Create a personalized learning path for a developer with:\n\n"
        f"Current Skills: {', '.join(args.current_skills)}\n"
        f"Goals: {', '.join(args.goals)}\n"
        f"Time Commitment: {args.time_commitment}\n\n"
        f"Generate a structured learning plan in JSON:\n{ROADMAP_SHAPE}\n\n"
        "Make it practical and achievable."
    )


def render_chat(payload: ChatPromptPayload) -> str:
    history = ""
    if payload.history:
        lines = "\n".join(
            f"{'Student' if turn.role == 'learner' else 'DevMentor'}: {turn.text}" for turn in payload.history
        )
        history = f"\n\nConversation History:\n{lines}\n"
    code = f"\n\nCurrent Code Context:\n{payload.code_block}" if payload.code_block else ""
    return (
        "You are DevMentor AI, a friendly and knowledgeable programming tutor. You help students learn "
        "programming in a natural, conversational way.\n\n"
        f'Student Message: "{payload.message}"{history}{code}\n\n'
        f"{CHAT_GUIDELINES}\n"
        "Respond naturally as a helpful programming mentor:"
    )


def chat_prompt(args: ChatArgs) -> str:
    return render_chat(build_context(args.history, args.message, args.code, args.language))


PROMPT_BUILDERS: dict[Operation, Callable[..., str]] = {
    Operation.REVIEW: review_prompt,
    Operation.EXPLAIN_CONCEPT: explain_prompt,
    Operation.GENERATE_CHALLENGES: challenges_prompt,
    Operation.GENERATE_LEARNING_PATH: learning_path_prompt,
    Operation.VALIDATE_SOLUTION: validate_prompt,
    Operation.DEBUG: debug_prompt,
    Operation.ASSESS_SKILL: assess_prompt,
    Operation.CHAT: chat_prompt,
    Operation.PLAN_ROADMAP: roadmap_prompt,
}

ARGS_MODELS: dict[Operation, type[OperationArgs]] = {
    Operation.REVIEW: ReviewArgs,
    Operation.EXPLAIN_CONCEPT: ExplainConceptArgs,
    Operation.GENERATE_CHALLENGES: ChallengeArgs,
    Operation.GENERATE_LEARNING_PATH: LearningPathArgs,
    Operation.VALIDATE_SOLUTION: ValidateSolutionArgs,
    Operation.DEBUG: DebugArgs,
    Operation.ASSESS_SKILL: AssessSkillArgs,
    Operation.CHAT: ChatArgs,
    Operation.PLAN_ROADMAP: RoadmapArgs,
}


def build_prompt(operation: Operation, args: OperationArgs) -> str:
    return PROMPT_BUILDERS[operation](args)
