# app/services/feedback_store.py
from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict

from app.core.exceptions import FeedbackNotFoundError, ValidationError
from app.schemas.feedback import FeedbackRecord, FeedbackResponse, FeedbackStatus
from app.services.survey_templates import get_template, validate_answers

logger = logging.getLogger(__name__)


class InMemoryFeedbackStore:
    """
    Process-local repository of feedback records.

    Responsibilities
    ----------------
    - Schedule feedback for a meeting and hand out the survey to fill in.
    - Validate and append submitted responses, moving the record
      scheduled -> completed.
    - Let callers mark a record as processed once its suggestions were used.
    - Provide consistent snapshots for aggregation.

    Notes
    -----
    - Records are frozen models; every update replaces the stored record, so
      a snapshot handed out earlier never changes underneath its reader.
    - All access goes through a single lock; `snapshot()` copies under it so
      a concurrent submission cannot produce a torn read.
    - Durability is the caller's concern: nothing is persisted.
    """

    def __init__(self) -> None:
        self._records: Dict[str, FeedbackRecord] = {}
        self._lock = threading.Lock()

    def schedule(
        self,
        title: str,
        recurring_meeting_id: str | None = None,
        template_name: str = "standard",
    ) -> FeedbackRecord:
        get_template(template_name)

        record = FeedbackRecord(
            id=uuid.uuid4().hex,
            meeting_title=title,
            recurring_meeting_id=recurring_meeting_id,
            template_name=template_name,
            status=FeedbackStatus.SCHEDULED,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._records[record.id] = record

        logger.info(
            "Scheduled feedback %s for %r (series=%s, template=%s)",
            record.id,
            title,
            recurring_meeting_id,
            template_name,
        )
        return record

    def get(self, feedback_id: str) -> FeedbackRecord:
        with self._lock:
            record = self._records.get(feedback_id)
        if record is None:
            raise FeedbackNotFoundError(feedback_id)
        return record

    def submit(self, feedback_id: str, answers: Dict[str, Any]) -> FeedbackRecord:
        """
        Append a response to the record.

        Resubmissions are kept as additional responses. The first response
        moves the record to COMPLETED; a PROCESSED record stays PROCESSED.
        """
        with self._lock:
            record = self._records.get(feedback_id)
            if record is None:
                raise FeedbackNotFoundError(feedback_id)

            template = get_template(record.template_name)
            response = FeedbackResponse(
                answers=validate_answers(template, answers),
                submitted_at=datetime.now(timezone.utc),
            )

            status = record.status
            if status == FeedbackStatus.SCHEDULED:
                status = FeedbackStatus.COMPLETED

            updated = record.model_copy(
                update={
                    "responses": record.responses + (response,),
                    "status": status,
                }
            )
            self._records[feedback_id] = updated

        logger.info(
            "Feedback %s received response #%d (status=%s)",
            feedback_id,
            len(updated.responses),
            updated.status.value,
        )
        return updated

    def mark_processed(self, feedback_id: str) -> FeedbackRecord:
        """
        Move a COMPLETED record to PROCESSED. Idempotent on PROCESSED records.
        """
        with self._lock:
            record = self._records.get(feedback_id)
            if record is None:
                raise FeedbackNotFoundError(feedback_id)

            if record.status == FeedbackStatus.PROCESSED:
                return record
            if record.status != FeedbackStatus.COMPLETED:
                raise ValidationError(
                    "only completed feedback can be marked as processed",
                    field="status",
                )

            updated = record.model_copy(update={"status": FeedbackStatus.PROCESSED})
            self._records[feedback_id] = updated

        logger.info("Feedback %s marked as processed", feedback_id)
        return updated

    def snapshot(self) -> tuple[FeedbackRecord, ...]:
        with self._lock:
            return tuple(self._records.values())


@lru_cache()
def get_feedback_store() -> InMemoryFeedbackStore:
    """
    Process-wide store instance, shared by the API routes.
    """
    return InMemoryFeedbackStore()
