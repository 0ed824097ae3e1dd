# tests/test_calendar_evaluator.py
import pytest

from app.core.exceptions import ValidationError
from app.schemas.meeting import Meeting
from app.schemas.meeting_evaluation import Recommendation, ScoreBand
from app.services.calendar_evaluator import CalendarEvaluator


def _calendar() -> list[Meeting]:
    return [
        # 93 => high, keep
        Meeting(
            title="Roadmap Review",
            duration_minutes=90,
            participant_count=10,
            expected_speaker_count=4,
            has_agenda=True,
            decision_made=True,
            follow_up_sent=False,
            could_be_async=False,
        ),
        # 38 => low, consider-async
        Meeting(
            title="Status Update",
            duration_minutes=90,
            participant_count=10,
            expected_speaker_count=4,
            has_agenda=True,
            decision_made=False,
            follow_up_sent=False,
            could_be_async=True,
        ),
        # 50 + 2 - 10 = 42 => medium, keep
        Meeting(
            title="All Hands",
            duration_minutes=120,
            participant_count=100,
            expected_speaker_count=10,
            has_agenda=False,
            could_be_async=False,
        ),
        # 50 + 20 * 0.2 - 25 = 29 => low, consider-async
        Meeting(
            title="Weekly Report Readout",
            duration_minutes=30,
            participant_count=5,
            expected_speaker_count=1,
            has_agenda=False,
            could_be_async=True,
        ),
    ]


def test_evaluate_all_computes_calendar_statistics():
    summary = CalendarEvaluator.evaluate_all(_calendar())

    assert summary.meeting_count == 4
    assert summary.total_minutes == 330
    assert [e.title for e in summary.evaluations] == [
        "Roadmap Review",
        "Status Update",
        "All Hands",
        "Weekly Report Readout",
    ]
    assert [e.band for e in summary.evaluations] == [
        ScoreBand.HIGH,
        ScoreBand.LOW,
        ScoreBand.MEDIUM,
        ScoreBand.LOW,
    ]
    assert summary.average_score == pytest.approx((93 + 38 + 42 + 29) / 4)
    assert summary.low_value_minutes == 120
    assert summary.reclaimable_minutes == 120
    assert summary.reclaimable_hours == 2.0


def test_evaluate_all_preserves_order_and_stats_under_permutation():
    meetings = _calendar()
    reversed_meetings = list(reversed(meetings))

    forward = CalendarEvaluator.evaluate_all(meetings)
    backward = CalendarEvaluator.evaluate_all(reversed_meetings)

    assert backward.evaluations == list(reversed(forward.evaluations))
    assert backward.average_score == forward.average_score
    assert backward.low_value_minutes == forward.low_value_minutes
    assert backward.reclaimable_minutes == forward.reclaimable_minutes


def test_evaluate_all_empty_calendar_has_no_average():
    summary = CalendarEvaluator.evaluate_all([])

    assert summary.meeting_count == 0
    assert summary.total_minutes == 0
    assert summary.average_score is None
    assert summary.evaluations == []


def test_evaluate_all_medium_meeting_is_not_reclaimable():
    meeting = Meeting(
        title="Sync Without Purpose",
        duration_minutes=45,
        participant_count=12,
        expected_speaker_count=0,
        has_agenda=False,
        could_be_async=False,
    )

    summary = CalendarEvaluator.evaluate_all([meeting])

    # 50 => medium with default bands; nothing reclaimable
    assert summary.evaluations[0].recommendation == Recommendation.KEEP
    assert summary.reclaimable_minutes == 0


def test_evaluate_all_accepts_raw_mappings():
    summary = CalendarEvaluator.evaluate_all(
        [
            {
                "title": "Design Critique",
                "duration_minutes": 30,
                "participant_count": 4,
                "expected_speaker_count": 4,
                "has_agenda": True,
                "could_be_async": False,
            }
        ]
    )

    # 50 + 15 + 20
    assert summary.evaluations[0].score == pytest.approx(85.0)


def test_evaluate_all_fails_fast_with_index_of_invalid_meeting():
    meetings = _calendar()
    meetings.insert(
        2,
        Meeting(
            title="Broken",
            duration_minutes=0,
            participant_count=3,
            expected_speaker_count=1,
            has_agenda=True,
            could_be_async=False,
        ),
    )

    with pytest.raises(ValidationError) as exc_info:
        CalendarEvaluator.evaluate_all(meetings)

    assert exc_info.value.index == 2
    assert exc_info.value.field == "duration_minutes"
    assert "meeting[2]" in str(exc_info.value)


def _raw_meeting(**overrides) -> dict:
    data = {
        "title": "Design Critique",
        "duration_minutes": 30,
        "participant_count": 4,
        "expected_speaker_count": 2,
        "has_agenda": True,
        "could_be_async": False,
    }
    data.update(overrides)
    return data


def test_evaluate_all_reports_malformed_payload_with_index():
    missing_duration = _raw_meeting()
    del missing_duration["duration_minutes"]

    with pytest.raises(ValidationError) as exc_info:
        CalendarEvaluator.evaluate_all([_raw_meeting(), missing_duration])

    assert exc_info.value.index == 1
    assert exc_info.value.field == "duration_minutes"


@pytest.mark.parametrize("missing", ["expected_speaker_count", "has_agenda", "could_be_async"])
def test_evaluate_all_rejects_meeting_without_required_attribute(missing):
    incomplete = _raw_meeting()
    del incomplete[missing]

    with pytest.raises(ValidationError) as exc_info:
        CalendarEvaluator.evaluate_all([incomplete])

    assert exc_info.value.index == 0
    assert exc_info.value.field == missing


def test_evaluate_all_keeps_unknown_outcomes_optional():
    summary = CalendarEvaluator.evaluate_all([_raw_meeting()])

    assert summary.evaluations[0].contributing_factors[0].contribution == 0.0
    assert summary.evaluations[0].contributing_factors[2].contribution == 0.0


@pytest.mark.parametrize("payload", [None, "meetings", 42, {"title": "not a list"}])
def test_evaluate_all_rejects_non_sequence_input(payload):
    with pytest.raises(ValidationError) as exc_info:
        CalendarEvaluator.evaluate_all(payload)

    assert exc_info.value.field == "meetings"
