"""Scraper job schemas."""
from typing import Optional
from pydantic import BaseModel


class CrawlRequest(BaseModel):
    """Body of a start request; omitted fields fall back to settings."""
    baseUrl: Optional[str] = None
    delay: Optional[int] = None
    mode: str = "movies"
    maxDepth: int = 10


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
