from types import SimpleNamespace

from conftest import RecordTable, make_client, make_config
from src.feedback import FeedbackState, THUMBS_NEUTRAL, THUMBS_UP
from src.pages.cards import PLACEHOLDER_BADGE, query_param, render_company_cards, render_person_cards
from src.pages.company_display.core_company_display import render_founders_list, save_company_asks
from src.pages.detail import render_person_detail
from src.pages.founder_display.core_founder_display import save_lookbook_bio
from src.pages.mentor_display.core_mentor_display import (
    FEEDBACK_KEYS,
    feedback_button_label,
    feedback_button_labels,
    feedback_enabled,
    submit_feedback,
)
from src.pages.mentors.core_mentors import (
    DATE_FILTER_ALL_OPTION,
    build_date_choices,
    build_tag_choices,
    render_mentor_listing,
)
from src.records import Company, Founder, Mentor


def test_person_card_shows_placeholder_badge_and_truncated_role():
    mentor = Mentor(id="rec1", name="Jane Doe", slug="jane-doe", role="R" * 70, company="Acme")
    html_value = render_person_cards([mentor], detail_path="/mentor-display/", empty_message="none")
    assert PLACEHOLDER_BADGE in html_value
    assert "/mentor-display/?slug=jane-doe" in html_value
    assert 'title="' + "R" * 70 + ' at Acme"' in html_value
    assert "R" * 60 + "..." in html_value


def test_person_card_with_headshot_has_no_badge():
    mentor = Mentor(name="Jane", headshot="https://cdn/j.png", slug="jane")
    html_value = render_person_cards([mentor], detail_path="/mentor-display/", empty_message="none")
    assert PLACEHOLDER_BADGE not in html_value
    assert "https://cdn/j.png" in html_value


def test_person_cards_empty_message():
    assert "Nobody here" in render_person_cards([], detail_path="/x/", empty_message="Nobody here")


def test_company_cards_link_to_display_page():
    html_value = render_company_cards([Company(company="Tova", slug="tova-health", one_liner="Care")])
    assert "/company-display/?slug=tova-health" in html_value
    assert "company-card__logo--empty" in html_value


def test_mentor_listing_filters_and_reports_no_match():
    mentors = [
        Mentor(name="A", slug="a", date="2024-01-01", lookbook_tag=["Investor"]),
        Mentor(name="B", slug="b", date="2024-01-02", lookbook_tag=["Operator"]),
    ]
    assert build_date_choices(mentors, newest_first=True) == [DATE_FILTER_ALL_OPTION, "2024-01-02", "2024-01-01"]
    assert build_tag_choices(mentors) == ["Investor", "Operator"]
    filtered = render_mentor_listing(mentors, "2024-01-01", [])
    assert "?slug=a" in filtered and "?slug=b" not in filtered
    assert "No mentors match" in render_mentor_listing(mentors, DATE_FILTER_ALL_OPTION, ["Investor", "Operator"])


def test_detail_page_uses_longer_role_limit():
    mentor = Mentor(name="Jane", role="R" * 75, company="Acme")
    html_value = render_person_detail(mentor, badge_label="Techstars Mentor")
    assert "View full role details" in html_value
    assert "R" * 75 + " at Acme" in html_value


def test_feedback_buttons_and_submission():
    assert feedback_button_label(THUMBS_UP, False) == "Yes"
    assert feedback_button_label(THUMBS_NEUTRAL, True) == "✓ Maybe"
    assert feedback_enabled(Mentor(lookbook_label="MM"))
    assert not feedback_enabled(Mentor(lookbook_label="AM"))

    table = RecordTable([{"id": "rec1", "fields": {}}])
    client, _ = make_client(table)
    state = FeedbackState()
    message = submit_feedback(client, Mentor(id="rec1"), state, "Solim", THUMBS_NEUTRAL)
    assert state.is_active("Solim", THUMBS_NEUTRAL)
    assert table.records[0]["fields"]["Solim thumbs neutral"] is True
    assert message == "Thanks for your neutral feedback!"
    message = submit_feedback(client, Mentor(id="rec1"), state, "Solim", THUMBS_NEUTRAL)
    assert not state.is_active("Solim", THUMBS_NEUTRAL)
    assert message == "Feedback removed"


def test_feedback_button_labels_follow_session_state():
    state = FeedbackState()
    assert len(FEEDBACK_KEYS) == 14
    assert all(not label.startswith("✓") for label in feedback_button_labels(state))

    state.set("Solim", THUMBS_NEUTRAL, True)
    state.set("Renn", THUMBS_UP, True)
    labels = dict(zip(FEEDBACK_KEYS, feedback_button_labels(state)))
    assert labels[("Solim", THUMBS_NEUTRAL)] == "✓ Maybe"
    assert labels[("Renn", THUMBS_UP)] == "✓ Yes"
    assert labels[("Solim", THUMBS_UP)] == "Yes"
    assert sum(label.startswith("✓") for label in labels.values()) == 2


def test_save_company_asks_only_patches_changes():
    table = RecordTable([{"id": "rec1", "fields": {"introductionsNeeded": "Banks"}}])
    client, session = make_client(table, make_config("companies"))
    company = Company(id="rec1", introductions_needed="Banks")
    updated, changed = save_company_asks(client, company, "Banks", "Pricing")
    assert changed == ["specificSupport"]
    assert updated.specific_support == "Pricing"
    assert [call["method"] for call in session.calls] == ["PATCH"]


def test_save_lookbook_bio_updates_founder():
    table = RecordTable([{"id": "recF", "fields": {"Name": "Bo Chen"}}])
    client, _ = make_client(table, make_config("founderOnboarding"))
    founder = save_lookbook_bio(client, Founder(id="recF", name="Bo Chen"), "  Fresh bio ")
    assert founder.lookbook_bio == "Fresh bio"
    assert table.records[0]["fields"]["lookbookBio"] == "Fresh bio"


def test_founders_list_notice_and_cards():
    assert "Unable to load founder details" in render_founders_list([], "Unable to load founder details")
    html_value = render_founders_list([Founder(name="Bo Chen", slug="bo-chen", lookbook_bio="Hi")])
    assert "/founder-display/?slug=bo-chen" in html_value
    assert "Hi" in html_value


def test_query_param_reads_wrapped_request():
    request = SimpleNamespace(request=SimpleNamespace(query_params={"slug": " jane-doe "}))
    assert query_param(request, "slug") == "jane-doe"
    assert query_param(None, "slug") == ""
