# app/services/feedback_aggregator.py
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from app.core.exceptions import ValidationError
from app.schemas.feedback import FeedbackRecord, FeedbackStatus
from app.schemas.feedback_summary import (
    LENGTH_OPTIONS,
    AggregatedFeedback,
    FeedbackTrends,
    MonthlyFeedbackTrend,
)
from app.services.survey_templates import TEMPLATES

DECISION_MADE = "decision_made"
ACTION_ITEMS = "action_items"
COULD_BE_ASYNC = "could_be_async"
PARTICIPATION = "participation"
MEETING_LENGTH = "meeting_length"

TREND_STATUSES = (FeedbackStatus.COMPLETED, FeedbackStatus.PROCESSED)


def _asked_questions(template_name: str) -> frozenset[str] | None:
    """
    Question ids asked by a template; None for an unknown template, which is
    treated as asking every question.
    """
    template = TEMPLATES.get(template_name)
    if template is None:
        return None
    return frozenset(question.id for question in template.questions)


def _percentage(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or not 0 <= value <= 100:
        return None
    return float(value)


@dataclass
class _Tally:
    """
    Running sums of one reduction. Rates use the number of responses whose
    template asked the question as denominator.
    """

    total: int = 0
    decisions: int = 0
    action_items: int = 0
    action_items_asked: int = 0
    could_be_async: int = 0
    participation: list[float] = field(default_factory=list)
    participation_asked: int = 0
    length_ratings: dict[str, int] = field(
        default_factory=lambda: {option: 0 for option in LENGTH_OPTIONS}
    )

    def add(self, answers: Mapping[str, Any], asked: frozenset[str] | None) -> None:
        self.total += 1
        if answers.get(DECISION_MADE):
            self.decisions += 1
        if answers.get(COULD_BE_ASYNC):
            self.could_be_async += 1

        if asked is None or ACTION_ITEMS in asked:
            self.action_items_asked += 1
            if answers.get(ACTION_ITEMS):
                self.action_items += 1

        if asked is None or PARTICIPATION in asked:
            self.participation_asked += 1
            value = _percentage(answers.get(PARTICIPATION))
            if value is not None:
                self.participation.append(value)

        rating = answers.get(MEETING_LENGTH)
        if isinstance(rating, str) and rating in self.length_ratings:
            self.length_ratings[rating] += 1

    def rate(self, count: int, denominator: int) -> float | None:
        return count / denominator if denominator else None

    @property
    def average_participation(self) -> float | None:
        if not self.participation_asked:
            return None
        return math.fsum(self.participation) / self.participation_asked


class FeedbackAggregator:
    """
    Reduces the completed survey responses of one recurring meeting series
    into rate statistics.

    Only records matching the series id, with status COMPLETED and at least
    one response, are considered. Every response of a record counts, not
    just the latest one. The reduction is a plain sum, so the result does not
    depend on the order of records or of responses within a record.

    Both templates ask decision_made and could_be_async, so those rates are
    taken over all responses. action_items and participation only count
    responses whose template asks them; they are None when no such response
    exists. Answers of the wrong type are skipped, never raised on.

    Returns None when nothing matches: an unscored series is a normal state.
    """

    @staticmethod
    def select_records(
        records: Iterable[FeedbackRecord],
        recurring_meeting_id: str,
    ) -> list[FeedbackRecord]:
        return [
            record
            for record in records
            if record.recurring_meeting_id is not None
            and record.recurring_meeting_id == recurring_meeting_id
            and record.status == FeedbackStatus.COMPLETED
            and record.responses
        ]

    @staticmethod
    def aggregate(
        records: Iterable[FeedbackRecord],
        recurring_meeting_id: str,
    ) -> AggregatedFeedback | None:
        matching = FeedbackAggregator.select_records(records, recurring_meeting_id)
        if not matching:
            return None

        tally = _Tally()
        for record in matching:
            asked = _asked_questions(record.template_name)
            for response in record.responses:
                tally.add(response.answers, asked)

        return AggregatedFeedback(
            recurring_meeting_id=recurring_meeting_id,
            total_responses=tally.total,
            decisions_rate=tally.decisions / tally.total,
            action_items_rate=tally.rate(tally.action_items, tally.action_items_asked),
            could_be_async_rate=tally.could_be_async / tally.total,
            average_participation=tally.average_participation,
            length_ratings=tally.length_ratings,
        )

    @staticmethod
    def trends(
        records: Iterable[FeedbackRecord],
        months: int = 3,
        now: datetime | None = None,
        recurring_meeting_id: str | None = None,
    ) -> FeedbackTrends:
        """
        Per-month effectiveness rates over the last `months` calendar months
        (the current month included), oldest first.

        Responses are bucketed by the UTC month they were submitted in.
        Completed and processed records both count. Months without responses
        are listed with total_responses=0 and null rates.
        """
        if months < 1:
            raise ValidationError("must be at least 1", field="months")

        now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
        keys = _month_keys(now, months)
        tallies = {key: _Tally() for key in keys}

        for record in records:
            if record.status not in TREND_STATUSES:
                continue
            if recurring_meeting_id is not None and record.recurring_meeting_id != recurring_meeting_id:
                continue
            asked = _asked_questions(record.template_name)
            for response in record.responses:
                tally = tallies.get(_month_key(response.submitted_at))
                if tally is not None:
                    tally.add(response.answers, asked)

        return FeedbackTrends(
            months=months,
            recurring_meeting_id=recurring_meeting_id,
            periods=[
                MonthlyFeedbackTrend(
                    month=key,
                    total_responses=tally.total,
                    decisions_rate=tally.rate(tally.decisions, tally.total),
                    action_items_rate=tally.rate(tally.action_items, tally.action_items_asked),
                    could_be_async_rate=tally.rate(tally.could_be_async, tally.total),
                    average_participation=tally.average_participation,
                )
                for key, tally in tallies.items()
            ],
        )


def _month_key(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return f"{moment.year:04d}-{moment.month:02d}"


def _month_keys(now: datetime, months: int) -> list[str]:
    year, month = now.year, now.month
    keys = []
    for _ in range(months):
        keys.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    return list(reversed(keys))
