import pytest

from src.filters import all_tags, apply_filters, available_dates
from src.records import Mentor


def _mentor(name, date="", tags=()):
    return Mentor(id=name, name=name, date=date, lookbook_tag=list(tags))


MENTORS = [
    _mentor("a", "2024-01-10", ["Investor"]),
    _mentor("b", "2024-01-12", ["Investor", "Operator"]),
    _mentor("c", "2024-01-10", ["Operator"]),
    _mentor("d", ""),
]


def test_no_filters_returns_everything_in_order():
    assert [m.name for m in apply_filters(MENTORS, None, [])] == ["a", "b", "c", "d"]


def test_date_filter_is_exact_match():
    assert [m.name for m in apply_filters(MENTORS, "2024-01-10", None)] == ["a", "c"]


def test_tag_filter_requires_every_selected_tag():
    assert [m.name for m in apply_filters(MENTORS, None, ["Investor"])] == ["a", "b"]
    assert [m.name for m in apply_filters(MENTORS, None, ["Investor", "Operator"])] == ["b"]


def test_date_and_tags_combine():
    assert [m.name for m in apply_filters(MENTORS, "2024-01-10", ["Operator"])] == ["c"]


def test_filter_result_can_be_empty():
    assert apply_filters(MENTORS, "1999-01-01", None) == []


@pytest.mark.parametrize(
    "selected_date, selected_tags",
    [
        (None, None),
        (None, []),
        ("2024-01-10", None),
        (None, ["Investor"]),
        ("2024-01-12", ["Investor", "Operator"]),
        ("", [""]),
    ],
)
def test_empty_input_stays_empty_for_any_filters(selected_date, selected_tags):
    assert apply_filters([], selected_date, selected_tags) == []


@pytest.mark.parametrize(
    "selected_date, selected_tags",
    [
        ("2024-01-10", ["Operator"]),
        ("2024-01-12", ["Investor"]),
        ("2024-01-10", ["Investor", "Operator"]),
        ("", ["Investor"]),
    ],
)
def test_date_and_tag_filters_commute(selected_date, selected_tags):
    date_first = apply_filters(apply_filters(MENTORS, selected_date, None), None, selected_tags)
    tags_first = apply_filters(apply_filters(MENTORS, None, selected_tags), selected_date, None)
    combined = apply_filters(MENTORS, selected_date, selected_tags)
    assert date_first == tags_first == combined


def test_available_dates_sorted_and_unique():
    assert available_dates(MENTORS) == ["2024-01-10", "2024-01-12"]
    assert available_dates(MENTORS, newest_first=True) == ["2024-01-12", "2024-01-10"]


def test_all_tags_first_seen_order():
    assert all_tags(MENTORS) == ["Investor", "Operator"]

