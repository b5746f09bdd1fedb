"""System prompt templates for the coach proxy.

Each coaching type maps to one fixed template. The workout, meal and general
templates embed the caller's context as compact JSON; the form template never
looks at it.
"""

import json
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from fitcoach.coach.errors import ContextSerializationError


class CoachType(StrEnum):
    WORKOUT = "workout"
    MEAL = "meal"
    FORM = "form"
    GENERAL = "general"


# The indented blank line is part of the deployed prompt text
WORKOUT_TEMPLATE = (
    "You are an expert fitness coach and personal trainer. "
    "Analyze the user's profile and provide personalized workout recommendations.\n"
    "        \n"
    "User Context: {context}\n"
    "\n"
    "Provide specific workout suggestions including:\n"
    "- Exercise selection based on goals and fitness level\n"
    "- Sets, reps, and rest periods\n"
    "- Form cues and safety tips\n"
    "- Progressive overload strategies\n"
    "\n"
    "Keep responses actionable and motivating."
)

MEAL_TEMPLATE = """You are a certified nutritionist and meal planning expert. Analyze the user's nutrition goals and current intake.

User Context: {context}

Provide personalized meal suggestions including:
- Specific meal ideas with approximate macros
- Portion sizes and timing recommendations
- Food substitutions for variety
- Tips to hit daily macro targets

Keep responses practical and easy to follow."""

FORM_TEMPLATE = """You are an experienced strength coach specializing in exercise form and injury prevention.

Provide detailed form analysis and corrections including:
- Proper setup and positioning
- Movement cues for each phase
- Common mistakes to avoid
- Mobility or strength limitations to address

Be specific and safety-focused."""

GENERAL_TEMPLATE = """You are a holistic fitness and wellness coach. Help users with workout planning, nutrition advice, recovery strategies, and motivation.

User Context: {context}

Provide personalized, science-based advice that's encouraging and actionable."""


def resolve_coach_type(value: Any) -> CoachType:
    """Map a requested type to a CoachType, falling back to GENERAL.

    Unknown, absent or non-string values are not an error.
    """
    if isinstance(value, str):
        try:
            return CoachType(value)
        except ValueError:
            pass
    return CoachType.GENERAL


def serialize_user_context(user_context: Any) -> str:
    """Render userContext as compact JSON.

    Raises:
        ContextSerializationError: If the value is cyclic, holds NaN/Infinity,
            or contains objects JSON cannot represent
    """
    try:
        return json.dumps(user_context, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise ContextSerializationError(f"userContext is not JSON serializable: {e}") from e


def _with_context(template: str) -> Callable[[Any], str]:
    def build(user_context: Any) -> str:
        return template.format(context=serialize_user_context(user_context))

    return build


def _form_prompt(_user_context: Any) -> str:
    return FORM_TEMPLATE


PROMPT_BUILDERS: dict[CoachType, Callable[[Any], str]] = {
    CoachType.WORKOUT: _with_context(WORKOUT_TEMPLATE),
    CoachType.MEAL: _with_context(MEAL_TEMPLATE),
    CoachType.FORM: _form_prompt,
    CoachType.GENERAL: _with_context(GENERAL_TEMPLATE),
}


def build_system_prompt(coach_type: CoachType | str | None, user_context: Any = None) -> str:
    """Build the system prompt for a coaching type.

    Args:
        coach_type: Requested type; anything unrecognized selects the general template
        user_context: Arbitrary JSON-compatible value describing the user

    Returns:
        System prompt text
    """
    return PROMPT_BUILDERS[resolve_coach_type(coach_type)](user_context)


def build_messages(system_prompt: str, message: str) -> list[dict[str, str]]:
    """Build the two-message chat exchange sent upstream."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": message},
    ]
