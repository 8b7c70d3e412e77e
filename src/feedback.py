from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from src.airtable_client import AirtableClient

logger = logging.getLogger(__name__)

FEEDBACK_COMPANIES: Tuple[str, ...] = (
    "Renn",
    "Alethica",
    "PrettyData",
    "Solim",
    "Tova",
    "Parasol",
    "Ovida",
)

THUMBS_UP = "thumbsUp"
THUMBS_NEUTRAL = "thumbsNeutral"
FEEDBACK_SUFFIXES: Dict[str, str] = {
    THUMBS_UP: "up",
    THUMBS_NEUTRAL: "neutral",
}


def feedback_field_name(company: str, feedback_type: str) -> str:
    """Column name on the mentor table, e.g. "Renn thumbs up"."""
    try:
        suffix = FEEDBACK_SUFFIXES[feedback_type]
    except KeyError:
        raise ValueError(f"Unsupported feedback type: {feedback_type}") from None
    return f"{company} thumbs {suffix}"


def toggle_feedback(
    client: AirtableClient,
    mentor_id: str,
    company: str,
    feedback_type: str,
) -> bool:
    """
    Flip one feedback checkbox on a mentor record and return the value written.

    Read-modify-write with no version check: two clients toggling the same box
    at once race, and whichever PATCH lands last wins.
    """
    field_name = feedback_field_name(company, feedback_type)
    record = client.get_record(mentor_id, action="fetch mentor record")
    fields = record.get("fields") or {}
    current_value = fields.get(field_name) is True
    new_value = not current_value
    logger.info("Toggling %s on %s from %s to %s", field_name, mentor_id, current_value, new_value)
    client.patch_record(mentor_id, {field_name: new_value}, action="update mentor record")
    return new_value


@dataclass
class FeedbackState:
    """Per-(company, feedback type) booleans shown by the feedback widget."""

    active: Dict[Tuple[str, str], bool] = field(default_factory=dict)

    def is_active(self, company: str, feedback_type: str) -> bool:
        return self.active.get((company, feedback_type), False)

    def set(self, company: str, feedback_type: str, value: bool) -> None:
        self.active[(company, feedback_type)] = bool(value)
