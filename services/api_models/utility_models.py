"""
Search and lyrics API models for the Bechdel music service
"""

from pydantic import BaseModel
from typing import Optional


class SearchResultResponse(BaseModel):
    id: str
    title: str
    artist: str
    year: Optional[int] = None
    album: Optional[str] = None
    artwork: Optional[str] = None
    preview_url: Optional[str] = None
    source: str
    lyrics: str = ""
    duration_ms: Optional[int] = None


class LyricsResponse(BaseModel):
    lyrics: Optional[str] = None
    source: Optional[str] = None
    message: Optional[str] = None
