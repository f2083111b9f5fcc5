"""Text helpers shared by the catalog and admin code."""

import re

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def create_slug(text: str) -> str:
    """Derive a URL slug from a display name.

    Lowercases, drops everything except ASCII letters, digits, whitespace,
    underscores and hyphens, then collapses separator runs into single
    hyphens and trims them from both ends.

    >>> create_slug("T Shirts!!")
    't-shirts'
    >>> create_slug("  Hoodies -- Winter_2024 ")
    'hoodies-winter-2024'
    """
    slug = _DISALLOWED.sub("", text.lower())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def calculate_discount_percentage(original_price: float | None, sale_price: float) -> int:
    """Whole-number discount of sale_price against original_price.

    Zero unless the original price is strictly higher.
    """
    if not original_price or original_price <= sale_price:
        return 0
    return round((original_price - sale_price) / original_price * 100)
