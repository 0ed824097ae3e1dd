# app/services/meeting_scorer.py
from __future__ import annotations

import logging
from functools import lru_cache

from app.core.config import get_settings
from app.core.exceptions import ValidationError
from app.schemas.meeting import Meeting
from app.schemas.meeting_evaluation import (
    ContributingFactor,
    MeetingEvaluation,
    Recommendation,
    ScoreBand,
    ScoringFactor,
)
from app.schemas.score_weights import DEFAULT_SCORE_WEIGHTS, ScoreWeights

logger = logging.getLogger(__name__)

BASE_SCORE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0


@lru_cache()
def get_default_weights() -> ScoreWeights:
    """
    Process-wide default weights: the built-in defaults with any threshold
    overrides from settings applied.
    """
    settings = get_settings()
    overrides = {
        "long_meeting_minutes": settings.SCORE_LONG_MEETING_MINUTES,
        "high_band": settings.SCORE_HIGH_BAND,
        "medium_band": settings.SCORE_MEDIUM_BAND,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return DEFAULT_SCORE_WEIGHTS
    return ScoreWeights(**{**DEFAULT_SCORE_WEIGHTS.model_dump(), **overrides})


class MeetingScorer:
    """
    Converts a meeting's attributes into a usefulness score, a band and a
    recommendation.

    Rules (applied in this order, each recorded as a contributing factor)
    -----
    1) decision_made is True          => + weights.decision_made
    2) has_agenda is True             => + weights.agenda_provided
    3) follow_up_sent is True         => + weights.follow_up_sent
    4) could_be_async is True         => + weights.could_be_async
    5) always                         => + weights.participation_ratio * speakers / participants
    6) duration > long_meeting_minutes => + weights.long_meeting_penalty

    The total starts from BASE_SCORE and is clamped to [0, 100].

    Recommendation
    --------------
    - band "low" and not could_be_async     => consider-decline
    - could_be_async and band is not "high" => consider-async
    - otherwise                             => keep
    """

    @staticmethod
    def validate(meeting: Meeting) -> None:
        """
        Reject out-of-range attributes instead of coercing them.
        """
        if meeting.duration_minutes <= 0:
            raise ValidationError("must be greater than 0", field="duration_minutes")
        if meeting.participant_count < 1:
            raise ValidationError("must be at least 1", field="participant_count")
        if meeting.expected_speaker_count < 0:
            raise ValidationError("must not be negative", field="expected_speaker_count")
        if meeting.expected_speaker_count > meeting.participant_count:
            raise ValidationError(
                "must not exceed participant_count",
                field="expected_speaker_count",
            )

    @staticmethod
    def classify(score: float, weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS) -> ScoreBand:
        """
        Map a score to its band. A score equal to a threshold belongs to that band.
        """
        if score >= weights.high_band:
            return ScoreBand.HIGH
        if score >= weights.medium_band:
            return ScoreBand.MEDIUM
        return ScoreBand.LOW

    @staticmethod
    def recommend(band: ScoreBand, could_be_async: bool) -> Recommendation:
        if band == ScoreBand.LOW and not could_be_async:
            return Recommendation.CONSIDER_DECLINE
        if could_be_async and band != ScoreBand.HIGH:
            return Recommendation.CONSIDER_ASYNC
        return Recommendation.KEEP

    @staticmethod
    def score(
        meeting: Meeting,
        weights: ScoreWeights | None = None,
    ) -> MeetingEvaluation:
        """
        Score a single meeting.

        Raises
        ------
        ValidationError
            If duration <= 0, participant_count < 1 or
            expected_speaker_count is outside [0, participant_count].
        """
        if weights is None:
            weights = get_default_weights()
        try:
            MeetingScorer.validate(meeting)
        except ValidationError as exc:
            logger.debug("Rejected meeting %r: %s", meeting.title, exc)
            raise

        participation_ratio = meeting.expected_speaker_count / meeting.participant_count

        contributions = [
            (ScoringFactor.DECISION_MADE, weights.decision_made if meeting.decision_made else 0.0),
            (ScoringFactor.AGENDA_PROVIDED, weights.agenda_provided if meeting.has_agenda else 0.0),
            (ScoringFactor.FOLLOW_UP_SENT, weights.follow_up_sent if meeting.follow_up_sent else 0.0),
            (ScoringFactor.COULD_BE_ASYNC, weights.could_be_async if meeting.could_be_async else 0.0),
            (ScoringFactor.PARTICIPATION_RATIO, weights.participation_ratio * participation_ratio),
            (
                ScoringFactor.LONG_MEETING_PENALTY,
                weights.long_meeting_penalty
                if meeting.duration_minutes > weights.long_meeting_minutes
                else 0.0,
            ),
        ]

        raw_score = BASE_SCORE + sum(value for _, value in contributions)
        score = min(MAX_SCORE, max(MIN_SCORE, raw_score))

        band = MeetingScorer.classify(score, weights)
        recommendation = MeetingScorer.recommend(band, meeting.could_be_async)

        return MeetingEvaluation(
            title=meeting.title,
            score=score,
            band=band,
            contributing_factors=[
                ContributingFactor(factor=factor, contribution=value)
                for factor, value in contributions
            ],
            recommendation=recommendation,
        )
