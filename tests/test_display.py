from urllib.parse import unquote

from src.display import (
    CARD_ROLE_MAX_LENGTH,
    display_name,
    intro_request_mailto,
    link_or_hash,
    role_and_company,
    truncate_with_tooltip,
)


def test_role_and_company_joins_present_parts():
    assert role_and_company("Partner", "Acme") == "Partner at Acme"
    assert role_and_company("", "Acme") == "Acme"
    assert role_and_company("Partner", "") == "Partner"
    assert role_and_company("", "") == ""


def test_truncate_only_sets_tooltip_when_cut():
    assert truncate_with_tooltip("short", CARD_ROLE_MAX_LENGTH) == ("short", None)
    long_text = "x" * 61
    text, tooltip = truncate_with_tooltip(long_text, CARD_ROLE_MAX_LENGTH)
    assert text == "x" * 60 + "..."
    assert tooltip == long_text


def test_truncate_boundary_is_inclusive():
    assert truncate_with_tooltip("y" * 60, 60) == ("y" * 60, None)


def test_display_fallbacks():
    assert display_name("") == "Unknown"
    assert link_or_hash("") == "#"


def test_intro_mailto_names_person(monkeypatch):
    monkeypatch.setenv("LOOKBOOK_INTRO_EMAIL", "team@example.com")
    link = intro_request_mailto("Jane Doe")
    assert link.startswith("mailto:team@example.com?subject=")
    assert "Request Intro - Jane Doe" in unquote(link)
