from __future__ import annotations

import html
from typing import Iterable, Sequence, Tuple

from src.display import (
    DETAIL_ROLE_MAX_LENGTH,
    display_name,
    intro_request_mailto,
    link_or_hash,
    role_and_company,
    truncate_with_tooltip,
)
from src.pages.cards import PLACEHOLDER_BADGE, render_tag_chips
from src.placeholders import resolve_image
from src.records import Mentor


def render_missing(kind: str, slug: str) -> str:
    safe_slug = html.escape(slug or "unknown")
    return (
        "<section class='lookbook-empty'>"
        f"<h2>{html.escape(kind)} not found</h2>"
        f"<p>No {html.escape(kind.lower())} matched slug <code>{safe_slug}</code>.</p>"
        "</section>"
    )


def render_selection_prompt(kind: str, listing_label: str, listing_href: str) -> str:
    return (
        "<section class='lookbook-empty'>"
        f"<h2>Select a {html.escape(kind.lower())}</h2>"
        f"<p>Open a card from <a href='{html.escape(listing_href, quote=True)}'>"
        f"{html.escape(listing_label)}</a> to view it here.</p>"
        "</section>"
    )


def render_back_link(label: str, href: str) -> str:
    return f'<p><a href="{html.escape(href, quote=True)}">&larr; {html.escape(label)}</a></p>'


def _render_role_block(person: Mentor) -> str:
    full_text = role_and_company(person.role, person.company)
    text, tooltip = truncate_with_tooltip(full_text, DETAIL_ROLE_MAX_LENGTH)
    if not text:
        return ""
    block = f"<p class='lookbook-card__role'>{html.escape(text)}</p>"
    if tooltip:
        block += (
            "<details><summary>View full role details</summary>"
            f"<p>{html.escape(tooltip)}</p></details>"
        )
    return block


def _render_pills(values: Sequence[str]) -> str:
    return "".join(f"<span class='detail-pill'>{html.escape(value)}</span>" for value in values)


def render_person_detail(
    person: Mentor,
    *,
    badge_label: str,
    sections: Iterable[Tuple[str, str]] = (),
    show_intro: bool = True,
) -> str:
    """
    Two-column profile: image and contact links on the left, name, role and
    the given (heading, text) sections on the right. Empty sections are skipped.
    """
    name = display_name(person.name)
    image_url, is_placeholder = resolve_image(person.headshot, person.name)
    badge = f"<div class='lookbook-card__badge'>{PLACEHOLDER_BADGE}</div>" if is_placeholder else ""

    links = []
    if person.phone_number:
        links.append(f"<span>{html.escape(person.phone_number)}</span>")
    links.append(
        f"<a href='{html.escape(link_or_hash(person.linkedin_url), quote=True)}' "
        "target='_blank' rel='noopener noreferrer'>LinkedIn Profile</a>"
    )
    if person.email:
        links.append(f"<a href='mailto:{html.escape(person.email, quote=True)}'>Email Directly</a>")
    if show_intro:
        links.append(
            f"<a href='{html.escape(intro_request_mailto(person.name), quote=True)}'>Request Introduction</a>"
        )

    body = []
    for heading, text in sections:
        if not text:
            continue
        body.append(f"<h3>{html.escape(heading)}</h3><p>{html.escape(text)}</p>")
    if person.expertise:
        body.append(f"<h3>Areas of Expertise</h3><div>{_render_pills(person.expertise)}</div>")
    if person.industries:
        body.append(f"<h3>Industries of Interest</h3><div>{_render_pills(person.industries)}</div>")

    return f"""
<div class="detail-grid">
  <div>
    <div style="position:relative">
      <img class="detail-image" src="{html.escape(image_url, quote=True)}" alt="{html.escape(name, quote=True)}" />
      {badge}
    </div>
    <div class="detail-links">{''.join(links)}</div>
  </div>
  <div>
    <span class="lookbook-tag">{html.escape(badge_label)}</span>
    {render_tag_chips(person.lookbook_tag)}
    <h1>{html.escape(name)}</h1>
    {_render_role_block(person)}
    {''.join(body)}
  </div>
</div>
""".strip()
