from __future__ import annotations

import html
import logging
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

from src.airtable_client import AirtableClient
from src.companies_service import (
    INTRODUCTIONS_FIELD,
    SPECIFIC_SUPPORT_FIELD,
    apply_company_edit,
    fetch_company_by_slug,
    update_company_field,
)
from src.display import display_name, role_and_company
from src.pages.cards import render_company_logo, render_message
from src.placeholders import resolve_image
from src.records import Company, Founder

logger = logging.getLogger(__name__)


def load_company(client: AirtableClient, slug: str) -> Optional[Company]:
    return fetch_company_by_slug(client, slug)


def render_company_asks(company: Company) -> str:
    if not company.introductions_needed and not company.specific_support:
        return ""
    rows = []
    if company.introductions_needed:
        rows.append(f"<p><strong>Introductions to:</strong> {html.escape(company.introductions_needed)}</p>")
    if company.specific_support:
        rows.append(f"<p><strong>Specific support with:</strong> {html.escape(company.specific_support)}</p>")
    return f"<h3>Looking for help with:</h3>{''.join(rows)}"


def render_company_header(company: Company) -> str:
    links = []
    for label, url in (
        ("LinkedIn", company.company_linkedin),
        ("Website", company.url),
        ("Investment memo", company.notion_investment_memo),
    ):
        if url:
            links.append(
                f"<a href='{html.escape(url, quote=True)}' target='_blank' rel='noopener noreferrer'>"
                f"{html.escape(label)}</a>"
            )
    return f"""
<div class="detail-grid">
  <div>{render_company_logo(company)}</div>
  <div>
    <h1>{html.escape(company.company or company.lookbook_company_name)}</h1>
    <p>{html.escape(company.one_liner)}</p>
    <div class="detail-links">{''.join(links)}</div>
    {render_company_asks(company)}
  </div>
</div>
""".strip()


def render_founders_list(founders: Sequence[Founder], notice: Optional[str] = None) -> str:
    if notice:
        return render_message(notice, error=True)
    if not founders:
        return ""
    items = []
    for founder in founders:
        image_url, _is_placeholder = resolve_image(founder.headshot, founder.name)
        href = f"/founder-display/?slug={quote(founder.slug, safe='-')}"
        bio = founder.lookbook_bio or founder.bio
        items.append(
            f"""
            <div class="lookbook-card">
              <a href="{html.escape(href, quote=True)}">
                <img class="lookbook-card__image" src="{html.escape(image_url, quote=True)}" alt="{html.escape(founder.name, quote=True)}" loading="lazy" />
              </a>
              <div class="lookbook-card__content">
                <h3 class="lookbook-card__title">{html.escape(display_name(founder.name))}</h3>
                <p class="lookbook-card__role">{html.escape(role_and_company(founder.role, founder.company))}</p>
                <p>{html.escape(bio)}</p>
              </div>
            </div>
            """.strip()
        )
    return f'<h2>Founders</h2><div class="lookbook-grid">{"".join(items)}</div>'


def save_company_asks(
    client: AirtableClient,
    company: Company,
    introductions: str,
    support: str,
) -> Tuple[Company, List[str]]:
    """PATCH only the ask fields whose text changed; returns the updated company and the changed field names."""
    changed: List[str] = []
    for field_name, new_value, current in (
        (INTRODUCTIONS_FIELD, introductions, company.introductions_needed),
        (SPECIFIC_SUPPORT_FIELD, support, company.specific_support),
    ):
        value = str(new_value or "").strip()
        if value == current:
            continue
        update_company_field(client, company.id, field_name, value)
        company = apply_company_edit(company, field_name, value)
        changed.append(field_name)
    if changed:
        logger.info("Updated %s on company %s", ", ".join(changed), company.id)
    return company, changed
