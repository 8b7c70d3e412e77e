from __future__ import annotations

import os
from typing import Sequence, Tuple

NO_IMAGE_SENTINEL = "/placeholder.svg"

DEFAULT_PLACEHOLDER_IMAGES: Tuple[str, ...] = (
    "https://images.unsplash.com/photo-1485827404703-89b55fcc595e?w=600&fit=crop",
    "https://images.unsplash.com/photo-1582562124811-c09040d0a901?w=600&fit=crop",
    "https://images.unsplash.com/photo-1472396961693-142e6e269027?w=600&fit=crop",
    "https://images.unsplash.com/photo-1535268647677-300dbf3d78d1?w=600&fit=crop",
)


def placeholder_pool() -> Tuple[str, ...]:
    raw_value = str(os.getenv("LOOKBOOK_PLACEHOLDER_IMAGES") or "").strip()
    if not raw_value:
        return DEFAULT_PLACEHOLDER_IMAGES
    pool = tuple(part.strip() for part in raw_value.split(",") if part.strip())
    return pool or DEFAULT_PLACEHOLDER_IMAGES


def select_placeholder(name: str, pool: Sequence[str]) -> str:
    if not pool:
        raise ValueError("Placeholder pool must not be empty")
    name_sum = sum(ord(char) for char in str(name or ""))
    return pool[name_sum % len(pool)]


def has_real_image(image: str) -> bool:
    value = str(image or "").strip()
    return bool(value) and value != NO_IMAGE_SENTINEL


def resolve_image(image: str, name: str, pool: Sequence[str] | None = None) -> Tuple[str, bool]:
    """Return (url, is_placeholder) for an entity image field."""
    if has_real_image(image):
        return str(image).strip(), False
    return select_placeholder(name, pool or placeholder_pool()), True
