"""Pydantic schemas."""
from listing_api.schemas.scraper import CrawlRequest, MessageResponse

__all__ = ["CrawlRequest", "MessageResponse"]
