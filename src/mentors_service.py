from __future__ import annotations

import logging
import time
from typing import List, Optional

from src.airtable_client import AirtableClient, field_equals, normalized_name_equals
from src.page_timing import log_timing
from src.records import ADDITIONAL_MENTOR_LABEL, MAIN_MENTOR_LABEL, Mentor, normalize_mentor
from src.slugs import name_lookup_key, slug_to_name

logger = logging.getLogger(__name__)

MENTOR_LABELS = (MAIN_MENTOR_LABEL, ADDITIONAL_MENTOR_LABEL)


def fetch_mentors(client: AirtableClient, label: str = MAIN_MENTOR_LABEL) -> List[Mentor]:
    start = time.perf_counter()
    records = client.list_records(
        field_equals("lookbookLabel", label),
        action="fetch mentors" if label == MAIN_MENTOR_LABEL else "fetch additional mentors",
    )
    mentors = [normalize_mentor(record) for record in records]
    log_timing("mentors", "fetch_mentors", start, label=label, mentors=len(mentors))
    return mentors


def _slug_formula(slug: str) -> str:
    label_clause = ", ".join(field_equals("lookbookLabel", label) for label in MENTOR_LABELS)
    lookup_key = name_lookup_key(slug_to_name(slug))
    return f"AND(OR({label_clause}), {normalized_name_equals('Name', lookup_key)})"


def find_mentors_by_slug(client: AirtableClient, slug: str) -> List[Mentor]:
    """All mentors (either label) whose normalized name matches the slug, in remote order."""
    if not str(slug or "").strip():
        return []
    records = client.list_records(_slug_formula(slug), action="fetch mentor")
    return [normalize_mentor(record) for record in records]


def fetch_mentor_by_slug(client: AirtableClient, slug: str) -> Optional[Mentor]:
    start = time.perf_counter()
    matches = find_mentors_by_slug(client, slug)
    log_timing("mentors", "fetch_mentor_by_slug", start, slug=slug, matches=len(matches))
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Slug %r matches %d mentors (%s); using the first returned.",
            slug,
            len(matches),
            ", ".join(mentor.id for mentor in matches),
        )
    return matches[0]
