from __future__ import annotations

from typing import List, Optional, Tuple

from src.airtable_client import AirtableClient
from src.feedback import (
    FEEDBACK_COMPANIES,
    FEEDBACK_SUFFIXES,
    THUMBS_NEUTRAL,
    THUMBS_UP,
    FeedbackState,
    toggle_feedback,
)
from src.mentors_service import fetch_mentor_by_slug
from src.pages.detail import render_person_detail
from src.records import MAIN_MENTOR_LABEL, Mentor

FEEDBACK_LABELS = {
    THUMBS_UP: "Yes",
    THUMBS_NEUTRAL: "Maybe",
}
ACTIVE_MARK = "✓"
FEEDBACK_KEYS: List[Tuple[str, str]] = [
    (company, feedback_type) for company in FEEDBACK_COMPANIES for feedback_type in FEEDBACK_SUFFIXES
]


def feedback_button_label(feedback_type: str, active: bool) -> str:
    base = FEEDBACK_LABELS[feedback_type]
    return f"{ACTIVE_MARK} {base}" if active else base


def feedback_button_labels(state: FeedbackState) -> List[str]:
    """Labels for every button in `FEEDBACK_KEYS` order, marked from `state`."""
    return [
        feedback_button_label(feedback_type, state.is_active(company, feedback_type))
        for company, feedback_type in FEEDBACK_KEYS
    ]


def feedback_enabled(mentor: Optional[Mentor]) -> bool:
    """Feedback is collected for main-cohort mentors only."""
    return mentor is not None and mentor.lookbook_label == MAIN_MENTOR_LABEL


def load_mentor(client: AirtableClient, slug: str) -> Optional[Mentor]:
    return fetch_mentor_by_slug(client, slug)


def render_mentor_detail(mentor: Mentor) -> str:
    return render_person_detail(
        mentor,
        badge_label="Techstars Mentor",
        sections=[("Bio", mentor.bio)],
    )


def submit_feedback(
    client: AirtableClient,
    mentor: Mentor,
    state: FeedbackState,
    company: str,
    feedback_type: str,
) -> str:
    """Toggle one checkbox and record the result on `state`. Returns the status message."""
    if company not in FEEDBACK_COMPANIES:
        raise ValueError(f"Unknown feedback company: {company}")
    is_active = toggle_feedback(client, mentor.id, company, feedback_type)
    state.set(company, feedback_type, is_active)
    if not is_active:
        return "Feedback removed"
    tone = "positive" if feedback_type == THUMBS_UP else "neutral"
    return f"Thanks for your {tone} feedback!"
