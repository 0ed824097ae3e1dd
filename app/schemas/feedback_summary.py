# app/schemas/feedback_summary.py
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

LENGTH_TOO_SHORT = "Too short"
LENGTH_JUST_RIGHT = "Just right"
LENGTH_TOO_LONG = "Too long"

LENGTH_OPTIONS = (LENGTH_TOO_SHORT, LENGTH_JUST_RIGHT, LENGTH_TOO_LONG)


class AggregatedFeedback(BaseModel):
    """
    Reduction of every completed survey response of one recurring meeting
    series into rate statistics.
    """

    model_config = ConfigDict(frozen=True)

    recurring_meeting_id: str = Field(..., examples=["weekly-product-sync"])
    total_responses: int = Field(..., description="Responses across all completed records.", examples=[10])
    decisions_rate: float = Field(..., ge=0.0, le=1.0, examples=[0.4])
    action_items_rate: float | None = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Null when no response came from a survey asking about action items.",
        examples=[0.7],
    )
    could_be_async_rate: float = Field(..., ge=0.0, le=1.0, examples=[0.2])
    average_participation: float | None = Field(
        ...,
        description=(
            "Participation sum divided by the responses whose survey asks it "
            "(0 when never answered, null when never asked)."
        ),
        examples=[55.0],
    )
    length_ratings: dict[str, int] = Field(
        ...,
        description="Count per length option; sums to the responses that answered the question.",
        examples=[{"Too short": 1, "Just right": 6, "Too long": 3}],
    )


class SuggestionArea(str, Enum):
    DECISION_MAKING = "Decision Making"
    ACTION_ITEMS = "Action Items"
    PARTICIPATION = "Participation"
    MEETING_FORMAT = "Meeting Format"
    MEETING_LENGTH = "Meeting Length"


class SuggestionPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: SuggestionArea
    text: str
    priority: SuggestionPriority


class SeriesFeedbackReport(BaseModel):
    """
    Response of GET /feedback/series/{recurring_meeting_id}/suggestions.
    """

    recurring_meeting_id: str
    aggregated: AggregatedFeedback | None = Field(
        None,
        description="Null when the series has no completed feedback yet.",
    )
    suggestions: list[Suggestion]


class MonthlyFeedbackTrend(BaseModel):
    """
    Effectiveness rates of the responses submitted in one calendar month.
    """

    month: str = Field(..., description="UTC month, YYYY-MM.", examples=["2025-11"])
    total_responses: int = Field(..., examples=[14])
    decisions_rate: float | None = Field(None, examples=[0.5])
    action_items_rate: float | None = Field(None, examples=[0.64])
    could_be_async_rate: float | None = Field(None, examples=[0.21])
    average_participation: float | None = Field(None, examples=[58.0])


class FeedbackTrends(BaseModel):
    """
    Response of GET /feedback/trends.
    """

    months: int = Field(..., description="Number of months covered, current month included.")
    recurring_meeting_id: str | None = Field(
        None,
        description="Series the trends are restricted to; null for all feedback.",
    )
    periods: list[MonthlyFeedbackTrend] = Field(..., description="One entry per month, oldest first.")
