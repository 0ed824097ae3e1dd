# app/core/exceptions.py
from __future__ import annotations


class ValidationError(ValueError):
    """
    Raised when a meeting (or a survey answer) carries malformed or
    out-of-range attributes.

    Caller-correctable; never retried internally. `field` names the
    offending attribute and `index` is set when the failure happened inside
    a batch, pointing at the offending meeting's position.
    """

    def __init__(self, message: str, field: str | None = None, index: int | None = None) -> None:
        self.message = message
        self.field = field
        self.index = index
        super().__init__(self._render())

    def _render(self) -> str:
        parts = []
        if self.index is not None:
            parts.append(f"meeting[{self.index}]")
        if self.field:
            parts.append(self.field)
        prefix = ".".join(parts)
        return f"{prefix}: {self.message}" if prefix else self.message

    def at_index(self, index: int) -> "ValidationError":
        """
        Return a copy of this error annotated with a batch position.
        """
        return type(self)(self.message, field=self.field, index=index)


class SurveyAnswerError(ValidationError):
    """
    Raised when submitted survey answers do not match the record's template.
    """


class FeedbackNotFoundError(LookupError):
    """
    Raised when a feedback record id is unknown to the store.
    """

    def __init__(self, feedback_id: str) -> None:
        self.feedback_id = feedback_id
        super().__init__(f"Feedback record '{feedback_id}' not found")
