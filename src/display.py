from __future__ import annotations

import os
from typing import Optional, Tuple
from urllib.parse import quote

CARD_ROLE_MAX_LENGTH = 60
DETAIL_ROLE_MAX_LENGTH = 80
DEFAULT_INTRO_EMAIL = "georgie@techstars.com"
UNKNOWN_NAME = "Unknown"


def role_and_company(role: str, company: str) -> str:
    role = str(role or "").strip()
    company = str(company or "").strip()
    if role and company:
        return f"{role} at {company}"
    return role or company


def truncate_with_tooltip(text: str, max_length: int) -> Tuple[str, Optional[str]]:
    """Return (display text, tooltip). The tooltip is only set when the text was cut."""
    value = str(text or "")
    if len(value) <= max_length:
        return value, None
    return f"{value[:max_length]}...", value


def display_name(name: str) -> str:
    return str(name or "").strip() or UNKNOWN_NAME


def link_or_hash(url: str) -> str:
    return str(url or "").strip() or "#"


def intro_request_mailto(person_name: str) -> str:
    recipient = (os.getenv("LOOKBOOK_INTRO_EMAIL") or DEFAULT_INTRO_EMAIL).strip()
    name = display_name(person_name)
    first_name = recipient.split("@")[0].split(".")[0].capitalize()
    subject = quote(f"Request Intro - {name}")
    body = quote(f"Hi {first_name},\n\nI would like to request an introduction to {name}.\n\nThanks!")
    return f"mailto:{recipient}?subject={subject}&body={body}"
