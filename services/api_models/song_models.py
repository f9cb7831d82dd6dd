"""
Song-related API models for the Bechdel music service
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict


class SongCreate(BaseModel):
    title: str = Field(..., description="Song title")
    artist: str = Field(..., description="Artist name")
    lyrics: str = Field(..., description="Full lyrics text")
    year: Optional[int] = Field(None, description="Release year")
    collaborators: Optional[List[str]] = Field(None, description="Featured artists")


class TopicsResponse(BaseModel):
    romantic: int
    self_count: int = Field(..., serialization_alias="self")
    ambition: int
    friendship: int
    other: int
    dominant_topic: str


class AnalysisResponse(BaseModel):
    female_count: int
    female_names: List[str]
    male_pronouns: int
    female_pronouns: int
    topics: TopicsResponse
    has_female_dialogue: bool
    non_romantic_context: bool


class BechdelResultResponse(BaseModel):
    passed: bool = Field(..., serialization_alias="pass")
    status: str
    confidence: int
    analysis: AnalysisResponse
    reasoning: List[str]


class SongSummary(BaseModel):
    title: str
    artist: str
    year: Optional[int] = None


class SongResponse(BaseModel):
    id: int
    title: str
    artist: str
    year: Optional[int] = None
    lyrics: str
    collaborators: Optional[List[str]] = None
    bechdel_result: Optional[BechdelResultResponse] = None
    created_at: Optional[str] = None


class DecadeStatsResponse(BaseModel):
    total: int
    passed: int
    failed: int
    partial: int


class StatsResponse(BaseModel):
    total: int
    passed: int
    failed: int
    partial: int
    by_decade: Dict[str, DecadeStatsResponse]
