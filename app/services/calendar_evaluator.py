# app/services/calendar_evaluator.py
from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import ValidationError
from app.schemas.meeting import Meeting
from app.schemas.meeting_evaluation import (
    CalendarSummary,
    MeetingEvaluation,
    Recommendation,
    ScoreBand,
)
from app.schemas.score_weights import ScoreWeights
from app.services.meeting_scorer import MeetingScorer

logger = logging.getLogger(__name__)

RECLAIMABLE_RECOMMENDATIONS = (
    Recommendation.CONSIDER_DECLINE,
    Recommendation.CONSIDER_ASYNC,
)


def _coerce_meeting(item: Meeting | Mapping[str, Any]) -> Meeting:
    """
    Accept either a Meeting or a raw mapping (e.g. a JSON object).

    Type errors from the raw payload are reported as ValidationError on the
    first failing field.
    """
    if isinstance(item, Meeting):
        return item
    if not isinstance(item, Mapping):
        raise ValidationError("must be a meeting object", field="meeting")
    try:
        return Meeting.model_validate(item)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "meeting"
        raise ValidationError(first["msg"], field=field) from exc


class CalendarEvaluator:
    """
    Scores a calendar (an ordered batch of meetings) and folds the
    per-meeting results into calendar-level statistics.

    Fail-fast: the first invalid meeting aborts the whole batch and is
    reported with its position, so a failure is never returned alongside
    partial results.
    """

    @staticmethod
    def evaluate_all(
        meetings: Sequence[Meeting | Mapping[str, Any]],
        weights: ScoreWeights | None = None,
    ) -> CalendarSummary:
        if isinstance(meetings, (str, bytes)) or not isinstance(meetings, Sequence):
            raise ValidationError("must be a sequence of meetings", field="meetings")

        evaluations: list[MeetingEvaluation] = []
        total_minutes = 0
        low_value_minutes = 0
        reclaimable_minutes = 0
        scores: list[float] = []

        for index, item in enumerate(meetings):
            try:
                meeting = _coerce_meeting(item)
                evaluation = MeetingScorer.score(meeting, weights)
            except ValidationError as exc:
                logger.warning("Calendar evaluation rejected meeting %d: %s", index, exc)
                raise exc.at_index(index) from exc

            evaluations.append(evaluation)
            total_minutes += meeting.duration_minutes
            scores.append(evaluation.score)
            if evaluation.band == ScoreBand.LOW:
                low_value_minutes += meeting.duration_minutes
            if evaluation.recommendation in RECLAIMABLE_RECOMMENDATIONS:
                reclaimable_minutes += meeting.duration_minutes

        meeting_count = len(evaluations)
        average_score = math.fsum(scores) / meeting_count if meeting_count else None

        logger.debug(
            "Evaluated %d meetings (total=%d min, low_value=%d min, reclaimable=%d min)",
            meeting_count,
            total_minutes,
            low_value_minutes,
            reclaimable_minutes,
        )

        return CalendarSummary(
            evaluations=evaluations,
            meeting_count=meeting_count,
            total_minutes=total_minutes,
            average_score=average_score,
            low_value_minutes=low_value_minutes,
            reclaimable_minutes=reclaimable_minutes,
            reclaimable_hours=round(reclaimable_minutes / 60.0, 2),
        )
