from __future__ import annotations

import re
from typing import List

_NON_WORD_RE = re.compile(r"[^\w\s]", re.ASCII)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def derive_slug(name: str) -> str:
    """Lowercase, drop non-word characters, and join whitespace runs with a single hyphen."""
    lowered = str(name or "").lower()
    return _WHITESPACE_RE.sub("-", _NON_WORD_RE.sub("", lowered))


def slug_to_name(slug: str) -> str:
    """
    Best-effort inverse of `derive_slug` for building a lookup query.

    Punctuation removed by the forward direction cannot be recovered, so callers
    must compare with `name_lookup_key` rather than exact equality.
    """
    words = [word[:1].upper() + word[1:] for word in str(slug or "").split("-")]
    candidate = _NON_WORD_RE.sub("", " ".join(words))
    return _WHITESPACE_RE.sub(" ", candidate).strip()


def name_lookup_key(name: str) -> str:
    cleaned = _NON_ALNUM_RE.sub("", str(name or ""))
    return _WHITESPACE_RE.sub(" ", cleaned).strip().lower()


def founder_names(founders_field: str) -> List[str]:
    return [name.strip() for name in str(founders_field or "").split(",") if name.strip()]
