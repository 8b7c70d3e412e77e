from __future__ import annotations

import dataclasses
import logging
import time
from typing import Dict, List, Optional, Tuple

from src.airtable_client import AirtableClient, AirtableError
from src.founders_service import fetch_founder_by_slug
from src.page_timing import log_timing
from src.records import Company, Founder, normalize_company
from src.slugs import derive_slug, founder_names

logger = logging.getLogger(__name__)

INTRODUCTIONS_FIELD = "introductionsNeeded"
SPECIFIC_SUPPORT_FIELD = "specificSupport"
EDITABLE_COMPANY_FIELDS: Dict[str, str] = {
    INTRODUCTIONS_FIELD: "introductions_needed",
    SPECIFIC_SUPPORT_FIELD: "specific_support",
}


def fetch_companies(client: AirtableClient) -> List[Company]:
    start = time.perf_counter()
    records = client.list_records(sort=[("company", "asc")], action="fetch companies")
    companies = [normalize_company(record) for record in records]
    log_timing("companies", "fetch_companies", start, companies=len(companies))
    return companies


def find_companies_by_slug(client: AirtableClient, slug: str) -> List[Company]:
    wanted = str(slug or "").strip()
    if not wanted:
        return []
    return [company for company in fetch_companies(client) if company.slug == wanted]


def fetch_company_by_slug(client: AirtableClient, slug: str) -> Optional[Company]:
    matches = find_companies_by_slug(client, slug)
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Slug %r matches %d companies (%s); using the first returned.",
            slug,
            len(matches),
            ", ".join(company.id for company in matches),
        )
    return matches[0]


def update_company_field(client: AirtableClient, company_id: str, field_name: str, value: str) -> None:
    client.patch_record(company_id, {field_name: value}, action="update company field")


def apply_company_edit(company: Company, field_name: str, value: str) -> Company:
    """In-memory copy of `company` reflecting a field update already sent to Airtable."""
    attr = EDITABLE_COMPANY_FIELDS.get(field_name)
    if attr is None:
        raise ValueError(f"Field {field_name!r} is not editable from the lookbook")
    return dataclasses.replace(company, **{attr: str(value or "").strip()})


def fetch_company_founders(
    company: Company,
    founder_client: AirtableClient,
) -> Tuple[List[Founder], Optional[str]]:
    """
    Resolve the comma-separated founder names to founder records.

    Lookups that fail are logged and skipped. The second element is a notice to
    show when names were listed but none of them could be loaded.
    """
    names = founder_names(company.founders)
    founders: List[Founder] = []
    for name in names:
        try:
            founder = fetch_founder_by_slug(founder_client, derive_slug(name))
        except AirtableError as exc:
            logger.error("Error fetching founder %r for %s: %s", name, company.company, exc)
            continue
        if founder is not None:
            founders.append(founder)
    if names and not founders:
        return founders, "Unable to load founder details"
    return founders, None
