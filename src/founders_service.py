from __future__ import annotations

import logging
import time
from typing import List, Optional

from src.airtable_client import (
    AirtableClient,
    AirtableError,
    field_equals,
    normalized_name_equals,
)
from src.page_timing import log_timing
from src.records import Founder, normalize_founder
from src.slugs import name_lookup_key, slug_to_name

logger = logging.getLogger(__name__)

LOOKBOOK_BIO_FIELD = "lookbookBio"


def fetch_founder_lookbook_bio(client: AirtableClient, founder_name: str) -> str:
    """Secondary lookup of the free-text lookbook bio; failures degrade to an empty bio."""
    if not founder_name:
        return ""
    try:
        records = client.list_records(
            field_equals("Name", founder_name),
            action="fetch founder lookbook bio",
        )
    except AirtableError as exc:
        logger.warning("Failed to fetch founder lookbook bio for %r: %s", founder_name, exc)
        return ""
    if not records:
        return ""
    fields = records[0].get("fields") or {}
    value = fields.get(LOOKBOOK_BIO_FIELD)
    return str(value).strip() if isinstance(value, str) else ""


def _normalize_with_bio(client: AirtableClient, record) -> Founder:
    fields = record.get("fields") or {}
    name = fields.get("Name") if isinstance(fields.get("Name"), str) else ""
    return normalize_founder(record, lookbook_bio=fetch_founder_lookbook_bio(client, name))


def find_founders_by_slug(client: AirtableClient, slug: str) -> List[Founder]:
    if not str(slug or "").strip():
        return []
    lookup_key = name_lookup_key(slug_to_name(slug))
    records = client.list_records(normalized_name_equals("Name", lookup_key), action="fetch founder")
    return [_normalize_with_bio(client, record) for record in records]


def fetch_founder_by_slug(client: AirtableClient, slug: str) -> Optional[Founder]:
    start = time.perf_counter()
    matches = find_founders_by_slug(client, slug)
    log_timing("founders", "fetch_founder_by_slug", start, slug=slug, matches=len(matches))
    if not matches:
        logger.info("No founder found for slug %r", slug)
        return None
    if len(matches) > 1:
        logger.warning(
            "Slug %r matches %d founders (%s); using the first returned.",
            slug,
            len(matches),
            ", ".join(founder.id for founder in matches),
        )
    return matches[0]


def update_founder_onboarding_field(
    client: AirtableClient,
    founder_name: str,
    field_name: str,
    value: str,
) -> str:
    """Write one field on the founder's onboarding record, located by exact name. Returns the record id."""
    records = client.list_records(field_equals("Name", founder_name), action="fetch founder record")
    if not records:
        raise AirtableError(f"Founder record not found: {founder_name}")
    record_id = str(records[0].get("id") or "")
    client.patch_record(record_id, {field_name: value}, action="update founder field")
    logger.info("Updated %s for founder %r (%s)", field_name, founder_name, record_id)
    return record_id
