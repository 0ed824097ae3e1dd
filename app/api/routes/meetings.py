# app/api/routes/meetings.py
from http import HTTPStatus

from fastapi import APIRouter, HTTPException

from app.core.exceptions import ValidationError
from app.schemas.meeting_evaluation import (
    CalendarSummary,
    EvaluateCalendarRequest,
    EvaluateMeetingRequest,
    MeetingEvaluation,
)
from app.services.calendar_evaluator import CalendarEvaluator
from app.services.meeting_scorer import MeetingScorer

router = APIRouter(prefix="/meetings", tags=["Meetings"])


def _validation_detail(exc: ValidationError) -> dict:
    return {
        "message": str(exc),
        "field": exc.field,
        "index": exc.index,
    }


@router.post(
    "/evaluate",
    response_model=CalendarSummary,
    status_code=HTTPStatus.OK,
    summary="Evaluate a calendar of meetings",
    description=(
        "Score every meeting in the request and return per-meeting evaluations "
        "(in request order) plus calendar-level statistics.\n\n"
        "The batch is rejected as a whole if any meeting is invalid; the "
        "response then names the offending meeting's index and field."
    ),
    responses={
        422: {"description": "A meeting is malformed or has out-of-range attributes."},
    },
)
async def evaluate_calendar(payload: EvaluateCalendarRequest) -> CalendarSummary:
    try:
        return CalendarEvaluator.evaluate_all(payload.meetings, payload.weights)
    except ValidationError as exc:
        raise HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=_validation_detail(exc),
        ) from exc


@router.post(
    "/evaluate-single",
    response_model=MeetingEvaluation,
    status_code=HTTPStatus.OK,
    summary="Evaluate a single meeting",
    description=(
        "Return the usefulness score, band, contributing factors and "
        "recommendation for one (typically upcoming) meeting."
    ),
    responses={
        422: {"description": "The meeting has out-of-range attributes."},
    },
)
async def evaluate_single(payload: EvaluateMeetingRequest) -> MeetingEvaluation:
    try:
        return MeetingScorer.score(payload.meeting, payload.weights)
    except ValidationError as exc:
        raise HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=_validation_detail(exc),
        ) from exc
