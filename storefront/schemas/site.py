"""Pydantic schemas for the public site configuration."""

from __future__ import annotations

from storefront.core.site import SiteMode
from storefront.schemas.common import OkResponse


class SiteResponse(OkResponse):
    mode: SiteMode
    ecommerce_enabled: bool
