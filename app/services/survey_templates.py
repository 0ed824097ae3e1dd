# app/services/survey_templates.py
from __future__ import annotations

from app.core.exceptions import SurveyAnswerError, ValidationError
from app.schemas.feedback import QuestionType, SurveyQuestion, SurveyTemplate
from app.schemas.feedback_summary import LENGTH_OPTIONS

_DECISION_MADE = SurveyQuestion(
    id="decision_made",
    prompt="Was a decision made in this meeting?",
    type=QuestionType.BOOLEAN,
)
_ACTION_ITEMS = SurveyQuestion(
    id="action_items",
    prompt="Were clear action items assigned?",
    type=QuestionType.BOOLEAN,
)
_PARTICIPATION = SurveyQuestion(
    id="participation",
    prompt="What percentage of attendees actively participated?",
    type=QuestionType.PERCENTAGE,
)
_COULD_BE_ASYNC = SurveyQuestion(
    id="could_be_async",
    prompt="Could this meeting have been an email or a shared document?",
    type=QuestionType.BOOLEAN,
)
_MEETING_LENGTH = SurveyQuestion(
    id="meeting_length",
    prompt="How was the length of the meeting?",
    type=QuestionType.CHOICE,
    options=list(LENGTH_OPTIONS),
)

TEMPLATES: dict[str, SurveyTemplate] = {
    "standard": SurveyTemplate(
        name="standard",
        questions=[
            _DECISION_MADE,
            _ACTION_ITEMS,
            _PARTICIPATION,
            _COULD_BE_ASYNC,
            _MEETING_LENGTH,
        ],
    ),
    "quick": SurveyTemplate(
        name="quick",
        questions=[_DECISION_MADE, _COULD_BE_ASYNC, _MEETING_LENGTH],
    ),
}


def get_template(name: str) -> SurveyTemplate:
    template = TEMPLATES.get(name)
    if template is None:
        raise ValidationError(
            f"unknown survey template '{name}' (expected one of: {', '.join(TEMPLATES)})",
            field="template_name",
        )
    return template


def validate_answers(template: SurveyTemplate, answers: dict) -> dict:
    """
    Check submitted answers against the template's question types.

    Returns a copy of the answers; raises SurveyAnswerError on the first
    answer that does not fit.
    """
    if not answers:
        raise SurveyAnswerError("at least one answer is required", field="responses")

    questions = {question.id: question for question in template.questions}

    for question_id, value in answers.items():
        question = questions.get(question_id)
        if question is None:
            raise SurveyAnswerError(
                f"not part of survey template '{template.name}'",
                field=question_id,
            )

        if question.type == QuestionType.BOOLEAN:
            if not isinstance(value, bool):
                raise SurveyAnswerError("must be true or false", field=question_id)
        elif question.type == QuestionType.PERCENTAGE:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise SurveyAnswerError("must be a number between 0 and 100", field=question_id)
            if not 0 <= value <= 100:
                raise SurveyAnswerError("must be a number between 0 and 100", field=question_id)
        elif question.type == QuestionType.CHOICE:
            if value not in (question.options or []):
                raise SurveyAnswerError(
                    f"must be one of: {', '.join(question.options or [])}",
                    field=question_id,
                )

    return dict(answers)
