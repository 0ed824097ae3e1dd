# app/schemas/feedback.py
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FeedbackStatus(str, Enum):
    """
    Lifecycle of a feedback record.

    scheduled -> completed (first submitted response) -> processed (terminal).
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    PROCESSED = "processed"


class QuestionType(str, Enum):
    BOOLEAN = "boolean"
    PERCENTAGE = "percentage"
    CHOICE = "choice"


class SurveyQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., examples=["decision_made"])
    prompt: str = Field(..., examples=["Was a decision made in this meeting?"])
    type: QuestionType
    options: list[str] | None = Field(
        None,
        description="Allowed answers for 'choice' questions.",
    )


class SurveyTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., examples=["standard"])
    questions: list[SurveyQuestion]


class FeedbackResponse(BaseModel):
    """
    A single submitted set of survey answers (question id -> answer).
    """

    model_config = ConfigDict(frozen=True)

    answers: dict[str, Any] = Field(
        ...,
        examples=[{"decision_made": True, "participation": 60, "meeting_length": "Just right"}],
    )
    submitted_at: datetime


class FeedbackRecord(BaseModel):
    """
    Feedback collected for one meeting instance.

    Records without a `recurring_meeting_id` are kept but excluded from
    series aggregation.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique token.")
    meeting_title: str = Field(..., examples=["Weekly Product Sync"])
    recurring_meeting_id: str | None = Field(None, examples=["weekly-product-sync"])
    template_name: str = Field("standard", examples=["standard"])
    status: FeedbackStatus = FeedbackStatus.SCHEDULED
    responses: tuple[FeedbackResponse, ...] = ()
    created_at: datetime


class ScheduleFeedbackRequest(BaseModel):
    title: str = Field(..., examples=["Weekly Product Sync"])
    recurring_meeting_id: str | None = Field(None, examples=["weekly-product-sync"])
    template_name: str = Field("standard", examples=["standard"])


class SubmitFeedbackRequest(BaseModel):
    feedback_id: str
    responses: dict[str, Any] = Field(
        ...,
        description="Answers keyed by question id.",
        examples=[{"decision_made": True, "action_items": False, "meeting_length": "Too long"}],
    )


class FeedbackSurvey(BaseModel):
    """
    Survey to present to an attendee for a scheduled feedback record.
    """

    feedback_id: str
    meeting_title: str
    status: FeedbackStatus
    template: SurveyTemplate
