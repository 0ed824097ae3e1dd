# app/api/routes/feedback.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from app.api.dependencies.feedback_store import get_store
from app.core.exceptions import FeedbackNotFoundError, ValidationError
from app.schemas.feedback import (
    FeedbackRecord,
    FeedbackSurvey,
    ScheduleFeedbackRequest,
    SubmitFeedbackRequest,
)
from app.schemas.feedback_summary import FeedbackTrends, SeriesFeedbackReport
from app.services.feedback_aggregator import FeedbackAggregator
from app.services.feedback_store import InMemoryFeedbackStore
from app.services.suggestion_engine import SuggestionEngine
from app.services.survey_templates import get_template

router = APIRouter(prefix="/feedback", tags=["Feedback"])


def _not_found(exc: FeedbackNotFoundError) -> HTTPException:
    return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))


def _unprocessable(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        detail={"message": str(exc), "field": exc.field},
    )


@router.post(
    "/schedule",
    response_model=FeedbackRecord,
    status_code=HTTPStatus.CREATED,
    summary="Schedule post-meeting feedback",
    description=(
        "Create a feedback record for a meeting using the given survey template "
        "(`standard` or `quick`). The record starts in status `scheduled`.\n\n"
        "Delivering the survey to attendees is handled outside this service."
    ),
    responses={422: {"description": "Unknown survey template."}},
)
async def schedule_feedback(
    payload: ScheduleFeedbackRequest,
    store: InMemoryFeedbackStore = Depends(get_store),
) -> FeedbackRecord:
    try:
        return store.schedule(
            title=payload.title,
            recurring_meeting_id=payload.recurring_meeting_id,
            template_name=payload.template_name,
        )
    except ValidationError as exc:
        raise _unprocessable(exc) from exc


@router.get(
    "/survey/{feedback_id}",
    response_model=FeedbackSurvey,
    summary="Get the survey for a feedback record",
    responses={404: {"description": "Feedback record not found."}},
)
async def get_survey(
    feedback_id: str = Path(..., description="Feedback record id."),
    store: InMemoryFeedbackStore = Depends(get_store),
) -> FeedbackSurvey:
    try:
        record = store.get(feedback_id)
    except FeedbackNotFoundError as exc:
        raise _not_found(exc) from exc

    return FeedbackSurvey(
        feedback_id=record.id,
        meeting_title=record.meeting_title,
        status=record.status,
        template=get_template(record.template_name),
    )


@router.post(
    "/submit",
    response_model=FeedbackRecord,
    summary="Submit survey answers",
    description=(
        "Append a set of answers to a feedback record. The first submission "
        "moves the record to `completed`; later submissions are kept as "
        "additional responses."
    ),
    responses={
        404: {"description": "Feedback record not found."},
        422: {"description": "Answers do not match the survey template."},
    },
)
async def submit_feedback(
    payload: SubmitFeedbackRequest,
    store: InMemoryFeedbackStore = Depends(get_store),
) -> FeedbackRecord:
    try:
        return store.submit(payload.feedback_id, payload.responses)
    except FeedbackNotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _unprocessable(exc) from exc


@router.post(
    "/{feedback_id}/processed",
    response_model=FeedbackRecord,
    summary="Mark feedback as processed",
    description="Idempotent. Only completed records can be marked as processed.",
    responses={
        404: {"description": "Feedback record not found."},
        422: {"description": "The record has no responses yet."},
    },
)
async def mark_processed(
    feedback_id: str = Path(..., description="Feedback record id."),
    store: InMemoryFeedbackStore = Depends(get_store),
) -> FeedbackRecord:
    try:
        return store.mark_processed(feedback_id)
    except FeedbackNotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise _unprocessable(exc) from exc


@router.get(
    "/series/{recurring_meeting_id}/suggestions",
    response_model=SeriesFeedbackReport,
    summary="Aggregated feedback and improvement suggestions for a meeting series",
    description=(
        "Aggregate every completed response of the recurring meeting series and "
        "return the rate statistics together with prioritized suggestions.\n\n"
        "A series without completed feedback returns `aggregated: null` and an "
        "empty suggestion list."
    ),
)
async def get_series_suggestions(
    recurring_meeting_id: str = Path(..., description="Recurring meeting series id."),
    store: InMemoryFeedbackStore = Depends(get_store),
) -> SeriesFeedbackReport:
    aggregated = FeedbackAggregator.aggregate(store.snapshot(), recurring_meeting_id)
    return SeriesFeedbackReport(
        recurring_meeting_id=recurring_meeting_id,
        aggregated=aggregated,
        suggestions=SuggestionEngine.generate(aggregated),
    )


@router.get(
    "/trends",
    response_model=FeedbackTrends,
    summary="Monthly meeting effectiveness trends",
    description=(
        "Per-month decision, action-item and async rates, plus average "
        "participation, over completed and processed feedback of the last "
        "`months` calendar months (current month included), oldest first.\n\n"
        "Pass `recurring_meeting_id` to restrict the trends to one series."
    ),
)
async def get_trends(
    months: int = Query(3, ge=1, le=36, description="Number of months to cover."),
    recurring_meeting_id: str | None = Query(None, description="Optional series filter."),
    store: InMemoryFeedbackStore = Depends(get_store),
) -> FeedbackTrends:
    return FeedbackAggregator.trends(
        store.snapshot(),
        months=months,
        recurring_meeting_id=recurring_meeting_id,
    )
