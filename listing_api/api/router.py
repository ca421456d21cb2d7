"""Main API router - aggregates all route modules."""
from fastapi import APIRouter

from listing_api.api.routes import scraper

api_router = APIRouter(prefix="/api")

api_router.include_router(scraper.router)
