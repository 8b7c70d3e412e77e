from __future__ import annotations

import time
from typing import List, Optional, Sequence, Tuple

from src.airtable_client import AirtableClient
from src.filters import all_tags, apply_filters, available_dates
from src.mentors_service import fetch_mentors
from src.page_timing import log_timing
from src.pages.cards import render_person_cards
from src.records import LOOKBOOK_TAGS, MAIN_MENTOR_LABEL, Mentor

DATE_FILTER_ALL_OPTION = "All dates"
MENTOR_DETAIL_PATH = "/mentor-display/"


def normalize_date_selection(value: object) -> Optional[str]:
    text = str(value or "").strip()
    if not text or text == DATE_FILTER_ALL_OPTION:
        return None
    return text


def build_date_choices(mentors: Sequence[Mentor], *, newest_first: bool = False) -> List[str]:
    return [DATE_FILTER_ALL_OPTION, *available_dates(mentors, newest_first=newest_first)]


def build_tag_choices(mentors: Sequence[Mentor]) -> List[str]:
    """Known lookbook tags first, then anything else seen on the records."""
    seen = all_tags(mentors)
    ordered = [tag for tag in LOOKBOOK_TAGS if tag in seen]
    ordered.extend(tag for tag in seen if tag not in ordered)
    return ordered or list(LOOKBOOK_TAGS)


def load_mentor_listing(
    client: AirtableClient,
    label: str = MAIN_MENTOR_LABEL,
    *,
    newest_first: bool = False,
) -> Tuple[List[Mentor], List[str], List[str]]:
    start = time.perf_counter()
    mentors = fetch_mentors(client, label)
    date_choices = build_date_choices(mentors, newest_first=newest_first)
    tag_choices = build_tag_choices(mentors)
    log_timing(
        "mentors.page",
        "load_mentor_listing",
        start,
        label=label,
        mentors=len(mentors),
        dates=len(date_choices) - 1,
    )
    return mentors, date_choices, tag_choices


def render_mentor_listing(
    mentors: Sequence[Mentor],
    selected_date: object = None,
    selected_tags: Sequence[str] | None = None,
) -> str:
    filtered = apply_filters(mentors, normalize_date_selection(selected_date), selected_tags)
    if mentors and not filtered:
        return render_person_cards(
            [],
            detail_path=MENTOR_DETAIL_PATH,
            empty_message="No mentors match the selected filters.",
        )
    return render_person_cards(
        filtered,
        detail_path=MENTOR_DETAIL_PATH,
        empty_message="No mentors found.",
    )
