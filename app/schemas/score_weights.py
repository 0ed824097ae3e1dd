# app/schemas/score_weights.py
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreWeights(BaseModel):
    """
    Named weights and thresholds controlling the usefulness score.

    Each factor weight is a signed contribution added to the base score when
    the factor applies (`participation_ratio` is multiplied by the ratio of
    expected speakers to participants). Bands are inclusive lower bounds:
    score >= high_band => "high", score >= medium_band => "medium".
    """

    model_config = ConfigDict(frozen=True)

    decision_made: float = Field(30.0, description="Added when a decision was made.")
    agenda_provided: float = Field(15.0, description="Added when the meeting has an agenda.")
    follow_up_sent: float = Field(20.0, description="Added when a follow-up was sent.")
    could_be_async: float = Field(
        -25.0,
        description="Added when the meeting could have been async (negative by default).",
    )
    participation_ratio: float = Field(
        20.0,
        description="Multiplied by expected_speaker_count / participant_count.",
    )
    long_meeting_penalty: float = Field(
        -10.0,
        description="Added when the duration exceeds long_meeting_minutes.",
    )

    long_meeting_minutes: int = Field(
        60,
        description="Duration (minutes) above which the long-meeting penalty applies.",
    )
    high_band: float = Field(70.0, description="Lower bound (inclusive) of the 'high' band.")
    medium_band: float = Field(40.0, description="Lower bound (inclusive) of the 'medium' band.")

    @model_validator(mode="after")
    def _check_band_order(self) -> "ScoreWeights":
        if self.medium_band > self.high_band:
            raise ValueError("medium_band must be less than or equal to high_band")
        return self


DEFAULT_SCORE_WEIGHTS = ScoreWeights()
