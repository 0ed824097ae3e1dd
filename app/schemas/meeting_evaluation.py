# app/schemas/meeting_evaluation.py
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.meeting import Meeting
from app.schemas.score_weights import ScoreWeights


class ScoreBand(str, Enum):
    """
    Qualitative classification of a usefulness score.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(str, Enum):
    """
    Action suggested to the attendee for a scored meeting.
    """

    KEEP = "keep"
    CONSIDER_ASYNC = "consider-async"
    CONSIDER_DECLINE = "consider-decline"


class ScoringFactor(str, Enum):
    """
    Factors contributing to a usefulness score, in evaluation order.
    """

    DECISION_MADE = "decision_made"
    AGENDA_PROVIDED = "agenda_provided"
    FOLLOW_UP_SENT = "follow_up_sent"
    COULD_BE_ASYNC = "could_be_async"
    PARTICIPATION_RATIO = "participation_ratio"
    LONG_MEETING_PENALTY = "long_meeting_penalty"


class ContributingFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    factor: ScoringFactor = Field(..., description="Name of the scoring factor.")
    contribution: float = Field(
        ...,
        description="Signed amount this factor added to the score (0 when it did not apply).",
        examples=[30.0],
    )


class MeetingEvaluation(BaseModel):
    """
    Result of scoring a single meeting.

    `contributing_factors` always lists every factor in evaluation order;
    base score + sum of contributions equals the score before clamping.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the evaluated meeting.")
    score: float = Field(
        ...,
        description="Usefulness score, clamped to [0, 100].",
        examples=[93.0],
    )
    band: ScoreBand = Field(..., description="Band derived from the score.", examples=["high"])
    contributing_factors: list[ContributingFactor] = Field(
        ...,
        description="Ordered, signed contributions of every scoring factor.",
    )
    recommendation: Recommendation = Field(
        ...,
        description="keep / consider-async / consider-decline.",
        examples=["keep"],
    )


class CalendarSummary(BaseModel):
    """
    Per-meeting evaluations for a calendar plus fleet-level statistics.
    """

    evaluations: list[MeetingEvaluation] = Field(
        ...,
        description="One evaluation per input meeting, in input order.",
    )
    meeting_count: int = Field(..., description="Number of evaluated meetings.", examples=[12])
    total_minutes: int = Field(..., description="Sum of all meeting durations.", examples=[540])
    average_score: float | None = Field(
        None,
        description="Mean score across meetings; null when no meetings were evaluated.",
        examples=[61.5],
    )
    low_value_minutes: int = Field(
        ...,
        description="Sum of durations of meetings in the 'low' band.",
        examples=[90],
    )
    reclaimable_minutes: int = Field(
        ...,
        description=(
            "Sum of durations of meetings recommended 'consider-decline' or "
            "'consider-async'."
        ),
        examples=[120],
    )
    reclaimable_hours: float = Field(
        ...,
        description="reclaimable_minutes expressed in hours, rounded to 2 decimals.",
        examples=[2.0],
    )


class EvaluateMeetingRequest(BaseModel):
    """
    Request body for POST /meetings/evaluate-single.
    """

    meeting: Meeting
    weights: ScoreWeights | None = Field(
        None,
        description="Optional per-call override of the default score weights.",
    )


class EvaluateCalendarRequest(BaseModel):
    """
    Request body for POST /meetings/evaluate.

    Meetings are accepted as raw objects so that a malformed entry is
    reported with its position in the batch.
    """

    meetings: list[dict] = Field(..., description="Meetings to evaluate, in display order.")
    weights: ScoreWeights | None = Field(
        None,
        description="Optional per-call override of the default score weights.",
    )
