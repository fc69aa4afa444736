"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from discovery.api.v1.endpoints import catalog, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(catalog.router, prefix="", tags=["Catalog"])
