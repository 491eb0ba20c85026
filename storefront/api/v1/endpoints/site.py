"""
Public site configuration: the display mode the front-end starts in.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.api.v1.deps import get_app_settings
from storefront.core.config import Settings
from storefront.core.site import SiteMode
from storefront.schemas.site import SiteResponse

router = APIRouter(tags=["site"])


@router.get("/site", response_model=SiteResponse)
async def site_config(settings: Settings = Depends(get_app_settings)) -> SiteResponse:
    mode = settings.site_mode
    return SiteResponse(mode=mode, ecommerce_enabled=mode is SiteMode.ECOMMERCE)
