from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Sequence

from src.slugs import derive_slug

RawRecord = Mapping[str, Any]

TAG_INVESTOR = "Investor"
TAG_OPERATOR = "Operator"
LOOKBOOK_TAGS = (TAG_INVESTOR, TAG_OPERATOR)

MAIN_MENTOR_LABEL = "MM"
ADDITIONAL_MENTOR_LABEL = "AM"


@dataclass
class Mentor:
    id: str = ""
    name: str = ""
    headshot: str = ""
    linkedin_url: str = ""
    role: str = ""
    company: str = ""
    bio: str = ""
    expertise: List[str] = field(default_factory=list)
    email: str = ""
    phone_number: str = ""
    slug: str = ""
    industries: List[str] = field(default_factory=list)
    date: str = ""
    lookbook_label: str = ""
    lookbook_tag: List[str] = field(default_factory=list)


@dataclass
class Founder(Mentor):
    company_stage: str = ""
    company_description: str = ""
    funding_round: str = ""
    team_size: str = ""
    location: str = ""
    lookbook_bio: str = ""


@dataclass
class Company:
    id: str = ""
    company: str = ""
    lookbook_company_name: str = ""
    url: str = ""
    company_linkedin: str = ""
    logo: str = ""
    one_liner: str = ""
    founders: str = ""
    introductions_needed: str = ""
    specific_support: str = ""
    notion_investment_memo: str = ""
    slug: str = ""


def _fields(raw: RawRecord | None) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        return {}
    fields = raw.get("fields")
    return fields if isinstance(fields, Mapping) else {}


def _record_id(raw: RawRecord | None) -> str:
    if not isinstance(raw, Mapping):
        return ""
    return _text(raw.get("id"))


def _text(value: Any) -> str:
    if value is None or isinstance(value, (list, tuple, dict)):
        return ""
    if isinstance(value, bool):
        return "true" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    items: Iterable[Any] = value if isinstance(value, (list, tuple)) else [value]
    return [text for text in (_text(item) for item in items) if text]


def _attachment_url(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        if not value:
            return ""
        value = value[0]
    if isinstance(value, Mapping):
        return _text(value.get("url"))
    return _text(value)


def filter_lookbook_tags(value: Any, allowed: Sequence[str] = LOOKBOOK_TAGS) -> List[str]:
    """Keep recognized tag literals in source order; anything else is dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    tags: List[str] = []
    for item in value:
        if isinstance(item, str) and item in allowed and item not in tags:
            tags.append(item)
    return tags


def normalize_mentor(raw: RawRecord | None) -> Mentor:
    fields = _fields(raw)
    name = _text(fields.get("Name"))
    return Mentor(
        id=_record_id(raw),
        name=name,
        headshot=_attachment_url(fields.get("Headshot")),
        linkedin_url=_text(fields.get("LinkedIn")),
        role=_text(fields.get("Role")),
        company=_text(fields.get("Company")),
        bio=_text(fields.get("Bio")),
        expertise=_text_list(fields.get("Expertise")),
        email=_text(fields.get("Email")),
        phone_number=_text(fields.get("phoneNumber")),
        slug=derive_slug(name),
        industries=_text_list(fields.get("Industries of Interest")),
        date=_text(fields.get("Date")),
        lookbook_label=_text(fields.get("lookbookLabel")),
        lookbook_tag=filter_lookbook_tags(fields.get("lookbookTag")),
    )


def normalize_founder(raw: RawRecord | None, lookbook_bio: str = "") -> Founder:
    fields = _fields(raw)
    name = _text(fields.get("Name"))
    return Founder(
        id=_record_id(raw),
        name=name,
        headshot=_attachment_url(fields.get("Headshot")),
        linkedin_url=_text(fields.get("LinkedIn")),
        role=_text(fields.get("Title")),
        company=_text(fields.get("Company Name")),
        bio=_text(fields.get("Bio")),
        expertise=_text_list(fields.get("Expertise")),
        email=_text(fields.get("Email")),
        phone_number=_text(fields.get("Cell Phone Number")),
        slug=derive_slug(name),
        industries=_text_list(fields.get("Industries of Interest")),
        date=_text(fields.get("Date")),
        lookbook_label=_text(fields.get("lookbookLabel")),
        lookbook_tag=filter_lookbook_tags(fields.get("lookbookTag")),
        company_stage=_text(fields.get("Company Stage")),
        company_description=_text(fields.get("Company Description")),
        funding_round=_text(fields.get("Funding Round")),
        team_size=_text(fields.get("Team Size")),
        location=_text(fields.get("Location")),
        lookbook_bio=_text(lookbook_bio),
    )


def normalize_company(raw: RawRecord | None) -> Company:
    fields = _fields(raw)
    display_name = _text(fields.get("lookbookCompanyName"))
    return Company(
        id=_record_id(raw),
        company=_text(fields.get("company")),
        lookbook_company_name=display_name,
        url=_text(fields.get("URL")),
        company_linkedin=_text(fields.get("companyLinkedIn")),
        logo=_attachment_url(fields.get("logo")),
        one_liner=_text(fields.get("oneLiner")),
        founders=_text(fields.get("founders")),
        introductions_needed=_text(fields.get("introductionsNeeded")),
        specific_support=_text(fields.get("specificSupport")),
        notion_investment_memo=_text(fields.get("notionInvestmentMemo")),
        slug=derive_slug(display_name),
    )
