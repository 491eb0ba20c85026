"""Site display mode (full e-commerce storefront vs basic marketing site)."""

from __future__ import annotations

from enum import Enum


class SiteMode(str, Enum):
    ECOMMERCE = "ecommerce"
    BASIC = "basic"


DEFAULT_SITE_MODE = SiteMode.ECOMMERCE


def normalize_site_mode(value: str | SiteMode | None) -> SiteMode:
    if isinstance(value, SiteMode):
        return value
    try:
        return SiteMode(str(value or "").strip().lower())
    except ValueError:
        return DEFAULT_SITE_MODE
