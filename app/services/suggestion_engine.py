# app/services/suggestion_engine.py
from __future__ import annotations

from app.schemas.feedback_summary import (
    LENGTH_TOO_LONG,
    LENGTH_TOO_SHORT,
    AggregatedFeedback,
    Suggestion,
    SuggestionArea,
    SuggestionPriority,
)

DECISION_MAKING_TEXT = (
    "Few attendees report that decisions are being made. State the decisions "
    "this meeting needs to reach in the agenda and close each item explicitly."
)
ACTION_ITEMS_TEXT = (
    "Action items are often missing. Capture owners and due dates before the "
    "meeting ends and include them in the follow-up."
)
PARTICIPATION_TEXT = (
    "Participation is low. Reduce the invite list to the people who need to "
    "contribute and share the rest as notes."
)
MEETING_FORMAT_TEXT = (
    "Most attendees think this meeting could be handled asynchronously. "
    "Try replacing it with a written update or a shared document."
)
MEETING_TOO_LONG_TEXT = (
    "More than half of attendees find this meeting too long. Shorten the "
    "default duration or trim the agenda."
)
MEETING_TOO_SHORT_TEXT = (
    "More than half of attendees find this meeting too short. Extend the "
    "default duration or split the agenda across sessions."
)


class SuggestionEngine:
    """
    Turns aggregated feedback into improvement suggestions.

    Rules (output order is fixed)
    -----
    Rules over a question no survey asked (rate is None) do not fire.

    1) decisions_rate < 0.5          => Decision Making (high if < 0.2)
    2) action_items_rate < 0.6       => Action Items    (high if < 0.3)
    3) average_participation < 50    => Participation   (high if < 30)
    4) could_be_async_rate > 0.6     => Meeting Format  (high if > 0.8)
    5) "Too long" > half of responses  => Meeting Length (high)
       else "Too short" > half         => Meeting Length (medium)
    """

    @staticmethod
    def generate(aggregated: AggregatedFeedback | None) -> list[Suggestion]:
        if aggregated is None or aggregated.total_responses == 0:
            return []

        suggestions: list[Suggestion] = []

        if aggregated.decisions_rate < 0.5:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.DECISION_MAKING,
                    text=DECISION_MAKING_TEXT,
                    priority=_priority(aggregated.decisions_rate < 0.2),
                )
            )

        if aggregated.action_items_rate is not None and aggregated.action_items_rate < 0.6:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.ACTION_ITEMS,
                    text=ACTION_ITEMS_TEXT,
                    priority=_priority(aggregated.action_items_rate < 0.3),
                )
            )

        if aggregated.average_participation is not None and aggregated.average_participation < 50:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.PARTICIPATION,
                    text=PARTICIPATION_TEXT,
                    priority=_priority(aggregated.average_participation < 30),
                )
            )

        if aggregated.could_be_async_rate > 0.6:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.MEETING_FORMAT,
                    text=MEETING_FORMAT_TEXT,
                    priority=_priority(aggregated.could_be_async_rate > 0.8),
                )
            )

        half = aggregated.total_responses * 0.5
        if aggregated.length_ratings.get(LENGTH_TOO_LONG, 0) > half:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.MEETING_LENGTH,
                    text=MEETING_TOO_LONG_TEXT,
                    priority=SuggestionPriority.HIGH,
                )
            )
        elif aggregated.length_ratings.get(LENGTH_TOO_SHORT, 0) > half:
            suggestions.append(
                Suggestion(
                    area=SuggestionArea.MEETING_LENGTH,
                    text=MEETING_TOO_SHORT_TEXT,
                    priority=SuggestionPriority.MEDIUM,
                )
            )

        return suggestions


def _priority(is_high: bool) -> SuggestionPriority:
    return SuggestionPriority.HIGH if is_high else SuggestionPriority.MEDIUM
