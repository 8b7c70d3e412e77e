from __future__ import annotations

import html
import time
from typing import List, Sequence
from urllib.parse import quote

import gradio as gr

from src.display import (
    CARD_ROLE_MAX_LENGTH,
    display_name,
    intro_request_mailto,
    link_or_hash,
    role_and_company,
    truncate_with_tooltip,
)
from src.page_timing import log_timing
from src.placeholders import resolve_image
from src.records import Company, Mentor

PLACEHOLDER_BADGE = "May Look Different"


def query_param(request: gr.Request | None, key: str) -> str:
    if request is None:
        return ""
    request_obj = getattr(request, "request", request)
    query_params = getattr(request_obj, "query_params", None)
    if not query_params:
        return ""
    return str(query_params.get(key, "")).strip()


def render_message(message: str, *, error: bool = False) -> str:
    css_class = "lookbook-error" if error else "lookbook-empty"
    return f'<div class="{css_class}">{html.escape(message)}</div>'


def render_tag_chips(tags: Sequence[str]) -> str:
    return "".join(f'<span class="lookbook-tag">{html.escape(tag)}</span>' for tag in tags)


def render_role_line(role: str, company: str, max_length: int = CARD_ROLE_MAX_LENGTH) -> str:
    text, tooltip = truncate_with_tooltip(role_and_company(role, company), max_length)
    if not text:
        return ""
    title_attr = f' title="{html.escape(tooltip, quote=True)}"' if tooltip else ""
    return f'<p class="lookbook-card__role"{title_attr}>{html.escape(text)}</p>'


def render_person_cards(
    people: Sequence[Mentor],
    *,
    detail_path: str,
    empty_message: str,
) -> str:
    start = time.perf_counter()
    if not people:
        log_timing("cards", "render_person_cards.empty", start)
        return render_message(empty_message)

    cards: List[str] = []
    for person in people:
        name = display_name(person.name)
        image_url, is_placeholder = resolve_image(person.headshot, person.name)
        href = f"{detail_path}?slug={quote(person.slug, safe='-')}"
        badge = f'<div class="lookbook-card__badge">{PLACEHOLDER_BADGE}</div>' if is_placeholder else ""
        email_link = (
            f'<a href="mailto:{html.escape(person.email, quote=True)}" title="Email Directly">Email</a>'
            if person.email
            else ""
        )
        cards.append(
            f"""
            <div class="lookbook-card">
              <a href="{html.escape(href, quote=True)}" title="View Full Profile">
                <img class="lookbook-card__image" src="{html.escape(image_url, quote=True)}" alt="{html.escape(name, quote=True)}" loading="lazy" />
              </a>
              {badge}
              <div class="lookbook-card__content">
                <h3 class="lookbook-card__title">{html.escape(name)}</h3>
                {render_role_line(person.role, person.company)}
                <div>{render_tag_chips(person.lookbook_tag)}</div>
                <div class="lookbook-card__actions">
                  <a href="{html.escape(link_or_hash(person.linkedin_url), quote=True)}" target="_blank" rel="noopener noreferrer" title="View LinkedIn Profile">LinkedIn</a>
                  <a href="{html.escape(href, quote=True)}" title="View Full Profile">Profile</a>
                  {email_link}
                  <a href="{html.escape(intro_request_mailto(person.name), quote=True)}" title="Request Introduction">RI</a>
                </div>
              </div>
            </div>
            """.strip()
        )

    html_value = f'<div class="lookbook-grid">{"".join(cards)}</div>'
    log_timing("cards", "render_person_cards", start, people=len(people), html_bytes=len(html_value))
    return html_value


def render_company_logo(company: Company) -> str:
    label = company.company or company.lookbook_company_name
    if company.logo:
        return (
            f'<img class="company-card__logo" src="{html.escape(company.logo, quote=True)}" '
            f'alt="{html.escape(label, quote=True)} logo" loading="lazy" />'
        )
    initial = html.escape((label or "?")[:1].upper())
    return f'<div class="company-card__logo company-card__logo--empty">{initial}</div>'


def render_company_cards(companies: Sequence[Company]) -> str:
    start = time.perf_counter()
    if not companies:
        return render_message("No companies found.")

    cards: List[str] = []
    for company in companies:
        href = f"/company-display/?slug={quote(company.slug, safe='-')}"
        cards.append(
            f"""
            <a class="company-card" href="{html.escape(href, quote=True)}">
              {render_company_logo(company)}
              <h3>{html.escape(company.company or company.lookbook_company_name)}</h3>
              <p>{html.escape(company.one_liner)}</p>
            </a>
            """.strip()
        )
    html_value = f'<div class="lookbook-grid">{"".join(cards)}</div>'
    log_timing("cards", "render_company_cards", start, companies=len(companies))
    return html_value
