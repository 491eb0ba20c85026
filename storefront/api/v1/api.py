"""
API router aggregator: wires all endpoint modules together.
"""

from fastapi import APIRouter

from storefront.api.v1.endpoints import auth, site

api_router = APIRouter()

# Signup, login, provider login, logout
api_router.include_router(auth.router)

# Public site configuration
api_router.include_router(site.router)
