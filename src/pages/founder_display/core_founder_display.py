from __future__ import annotations

import dataclasses
import html
from typing import Optional

from src.airtable_client import AirtableClient
from src.founders_service import (
    LOOKBOOK_BIO_FIELD,
    fetch_founder_by_slug,
    update_founder_onboarding_field,
)
from src.pages.detail import render_person_detail
from src.records import Founder

_COMPANY_FACTS = (
    ("Stage", "company_stage"),
    ("Funding round", "funding_round"),
    ("Team size", "team_size"),
    ("Location", "location"),
)


def load_founder(client: AirtableClient, slug: str) -> Optional[Founder]:
    return fetch_founder_by_slug(client, slug)


def render_company_facts(founder: Founder) -> str:
    items = []
    for label, attr in _COMPANY_FACTS:
        value = getattr(founder, attr)
        if value:
            items.append(f"<span class='detail-pill'>{html.escape(label)}: {html.escape(value)}</span>")
    if not items:
        return ""
    return f"<h3>Company details</h3><div>{''.join(items)}</div>"


def render_founder_detail(founder: Founder) -> str:
    detail = render_person_detail(
        founder,
        badge_label="Techstars Founder",
        sections=[
            ("About the Company", founder.company_description),
            ("About the Founder", founder.bio),
        ],
        show_intro=False,
    )
    return detail + render_company_facts(founder)


def save_lookbook_bio(client: AirtableClient, founder: Founder, bio: str) -> Founder:
    """Write the bio to the onboarding table and return the founder with the new value."""
    value = str(bio or "").strip()
    update_founder_onboarding_field(client, founder.name, LOOKBOOK_BIO_FIELD, value)
    return dataclasses.replace(founder, lookbook_bio=value)
