"""
Quiz payload schema.

Validates raw language model output before anything is persisted. The model
is asked for a JSON array of question objects; the first invalid item rejects
the whole payload.

Dependencies: pydantic, json
System role: Structured output validation for quiz generation
"""

import json
import re
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
)

from studycast.core.exceptions import QuizGenerationError
from studycast.models.quiz import OPTION_COUNT, QuizQuestion

_FENCE = re.compile(r"^```(?:json)?\s*\n?(?P<body>.*?)\n?\s*```$", re.DOTALL | re.IGNORECASE)


class GeneratedQuestion(BaseModel):
    """One question object as emitted by the language model."""

    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    text: str = Field(
        min_length=1,
        validation_alias=AliasChoices("question", "text"),
    )
    options: list[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_option_index: StrictInt = Field(
        ge=0,
        lt=OPTION_COUNT,
        validation_alias=AliasChoices("correct_answer", "correct_option_index", "correctIndex"),
    )
    explanation: str | None = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("question text is blank")
        return value

    @field_validator("options")
    @classmethod
    def options_not_blank(cls, value: list[str]) -> list[str]:
        if any(not option.strip() for option in value):
            raise ValueError("options must be non-empty")
        return value


class GeneratedQuiz(BaseModel):
    """Whole payload: a non-empty list of questions."""

    questions: list[GeneratedQuestion] = Field(min_length=1)


def strip_code_fence(raw: str) -> str:
    """Remove one enclosing ``` or ```json fence, if present."""
    text = raw.strip()
    match = _FENCE.match(text)
    return match.group("body").strip() if match else text


def parse_quiz_payload(raw: str, document_id: Any = None) -> list[QuizQuestion]:
    """
    Parse and validate raw quiz output into questions.

    Question ids come from the payload when every item has one and they are
    unique; otherwise ids "1".."n" are assigned in order.

    Args:
        raw: Model output
        document_id: Document the quiz is for (error context only)

    Returns:
        list[QuizQuestion]: Validated questions, at least one

    Raises:
        QuizGenerationError: If the payload is not a valid non-empty question list
    """
    try:
        payload = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise QuizGenerationError(
            f"Quiz payload is not valid JSON: {e.msg}",
            document_id=document_id,
        ) from e

    if not isinstance(payload, list):
        raise QuizGenerationError(
            f"Quiz payload must be a JSON array, got {type(payload).__name__}",
            document_id=document_id,
        )

    try:
        generated = GeneratedQuiz(questions=payload)
    except ValidationError as e:
        raise QuizGenerationError(
            "Quiz payload failed validation",
            document_id=document_id,
            details={"errors": e.error_count(), "first_error": e.errors()[0]["msg"]},
        ) from e

    payload_ids = [str(item.id).strip() if item.id is not None else "" for item in generated.questions]
    use_payload_ids = all(payload_ids) and len(set(payload_ids)) == len(payload_ids)

    return [
        QuizQuestion(
            id=payload_ids[index] if use_payload_ids else str(index + 1),
            text=item.text,
            options=item.options,
            correct_option_index=item.correct_option_index,
            explanation=item.explanation,
        )
        for index, item in enumerate(generated.questions)
    ]
