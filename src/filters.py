from __future__ import annotations

from datetime import date as Date
from typing import List, Optional, Sequence, TypeVar

from src.records import Mentor

EntityT = TypeVar("EntityT", bound=Mentor)


def apply_filters(
    entities: Sequence[EntityT],
    selected_date: Optional[str],
    selected_tags: Sequence[str] | None,
) -> List[EntityT]:
    """
    Stable subsequence of `entities` matching both filters.

    - a selected date keeps only exact `date` string matches
    - selected tags keep only entities carrying every selected tag
    Empty selections leave the list untouched.
    """
    required_tags = [tag for tag in (selected_tags or []) if tag]
    filtered: List[EntityT] = []
    for entity in entities:
        if selected_date and entity.date != selected_date:
            continue
        if required_tags and not all(tag in entity.lookbook_tag for tag in required_tags):
            continue
        filtered.append(entity)
    return filtered


def _date_sort_key(value: str) -> tuple[int, str]:
    try:
        return Date.fromisoformat(value[:10]).toordinal(), value
    except ValueError:
        return 0, value


def available_dates(entities: Sequence[Mentor], *, newest_first: bool = False) -> List[str]:
    unique = {entity.date for entity in entities if entity.date}
    if newest_first:
        return sorted(unique, key=_date_sort_key, reverse=True)
    return sorted(unique)


def all_tags(entities: Sequence[Mentor]) -> List[str]:
    tags: List[str] = []
    for entity in entities:
        for tag in entity.lookbook_tag:
            if tag not in tags:
                tags.append(tag)
    return tags

