# app/schemas/meeting.py
from pydantic import BaseModel, ConfigDict, Field


class Meeting(BaseModel):
    """
    Attributes of a single meeting, as handed over by the calendar
    integration. This is the input to the usefulness scorer.

    Range checks (positive duration, speaker count within participants)
    are enforced by the scorer, so that a malformed meeting is reported
    with the field that failed instead of being silently coerced.

    `decision_made` and `follow_up_sent` are unknown (None) for meetings
    that have not happened yet.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(
        ...,
        description="Human-readable meeting title.",
        examples=["Weekly Product Sync"],
    )
    duration_minutes: int = Field(
        ...,
        description="Scheduled meeting length in minutes (> 0).",
        examples=[45],
    )
    participant_count: int = Field(
        ...,
        description="Number of invited participants (>= 1).",
        examples=[8],
    )
    expected_speaker_count: int = Field(
        ...,
        description=(
            "Number of participants expected to actively contribute. "
            "Must be between 0 and participant_count."
        ),
        examples=[3],
    )
    has_agenda: bool = Field(
        ...,
        description="True if the invite carries an agenda.",
    )
    decision_made: bool | None = Field(
        None,
        description="Whether a decision was made. Unknown for future meetings.",
    )
    follow_up_sent: bool | None = Field(
        None,
        description="Whether a follow-up was sent. Unknown for future meetings.",
    )
    could_be_async: bool = Field(
        ...,
        description="Heuristic or user-declared flag: the meeting could be handled asynchronously.",
    )
