# tests/test_meetings_api.py
from http import HTTPStatus


def _meeting_payload(**overrides) -> dict:
    payload = {
        "title": "Roadmap Review",
        "duration_minutes": 90,
        "participant_count": 10,
        "expected_speaker_count": 4,
        "has_agenda": True,
        "decision_made": True,
        "follow_up_sent": False,
        "could_be_async": False,
    }
    payload.update(overrides)
    return payload


def test_evaluate_single_meeting(client):
    response = client.post("/meetings/evaluate-single", json={"meeting": _meeting_payload()})
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert abs(data["score"] - 93.0) < 1e-9
    assert data["band"] == "high"
    assert data["recommendation"] == "keep"
    assert [f["factor"] for f in data["contributing_factors"]] == [
        "decision_made",
        "agenda_provided",
        "follow_up_sent",
        "could_be_async",
        "participation_ratio",
        "long_meeting_penalty",
    ]


def test_evaluate_single_meeting_with_weight_override(client):
    response = client.post(
        "/meetings/evaluate-single",
        json={
            "meeting": _meeting_payload(could_be_async=True, decision_made=False),
            "weights": {"high_band": 80, "medium_band": 30},
        },
    )
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    # 38 falls into medium with the overridden bands
    assert data["band"] == "medium"
    assert data["recommendation"] == "consider-async"


def test_evaluate_single_meeting_rejects_invalid_attributes(client):
    response = client.post(
        "/meetings/evaluate-single",
        json={"meeting": _meeting_payload(expected_speaker_count=12)},
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert response.json()["detail"]["field"] == "expected_speaker_count"


def test_evaluate_calendar(client):
    response = client.post(
        "/meetings/evaluate",
        json={
            "meetings": [
                _meeting_payload(),
                _meeting_payload(title="Status Update", could_be_async=True, decision_made=False),
            ]
        },
    )
    assert response.status_code == HTTPStatus.OK

    data = response.json()
    assert data["meeting_count"] == 2
    assert data["total_minutes"] == 180
    assert data["low_value_minutes"] == 90
    assert data["reclaimable_minutes"] == 90
    assert data["reclaimable_hours"] == 1.5
    assert [e["title"] for e in data["evaluations"]] == ["Roadmap Review", "Status Update"]
    assert [e["recommendation"] for e in data["evaluations"]] == ["keep", "consider-async"]


def test_evaluate_empty_calendar_has_null_average(client):
    response = client.post("/meetings/evaluate", json={"meetings": []})
    assert response.status_code == HTTPStatus.OK
    assert response.json()["average_score"] is None


def test_evaluate_calendar_reports_offending_meeting(client):
    response = client.post(
        "/meetings/evaluate",
        json={"meetings": [_meeting_payload(), _meeting_payload(duration_minutes=-5)]},
    )
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY

    detail = response.json()["detail"]
    assert detail["index"] == 1
    assert detail["field"] == "duration_minutes"


def test_evaluate_calendar_requires_a_list(client):
    response = client.post("/meetings/evaluate", json={"meetings": "tomorrow"})
    assert response.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
